"""Configuration loading for the command line."""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from forever.exceptions import ConfigError, ConfigValidationError

from ._models import Config

if TYPE_CHECKING:
    from pathlib import Path

STRICT_ENV_VAR = "FOREVER_STRICT_CONFIG"


def safe_load_config(
    *,
    config_path: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load the merged configuration, degrading past a bad config file.

    An explicit ``config_path`` that does not exist always ends the process
    with status 1, as does an invalid value from the environment or the
    command line. A file that cannot be read, parsed or validated does the
    same when FOREVER_STRICT_CONFIG is ``1``; otherwise a warning is printed
    and the file is ignored, keeping the environment and ``cli_overrides``.

    Returns:
        The configuration and, when the file was ignored, the reason.
    """
    if config_path is not None and not config_path.exists():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    try:
        return Config.load(config_path=config_path, cli_overrides=cli_overrides), None
    except (ConfigError, OSError) as e:
        reason = f"Failed to load config: {e}"

    try:
        without_file = Config.load(include_file=False, cli_overrides=cli_overrides)
    except ConfigValidationError as e:
        print(f"Error: {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    if os.environ.get(STRICT_ENV_VAR, "0") == "1":
        print(f"Error: {reason}", file=sys.stderr)  # noqa: T201
        sys.exit(1)
    print(f"Warning: {reason}", file=sys.stderr)  # noqa: T201
    return without_file, reason
