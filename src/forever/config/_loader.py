# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Raw configuration sources: the TOML file and FOREVER_* variables.

Everything here works on plain nested dictionaries. Validation happens
later, once all sources are merged.
"""

from __future__ import annotations

import json
import os
import tomllib
from typing import TYPE_CHECKING, Any

from forever.exceptions import ConfigLoadError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

ENV_PREFIX = "FOREVER_"

_TRUE_FALSE = {"true": True, "false": False}


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse ``path`` as TOML.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ConfigLoadError: On a syntax error, with its line and column.
    """
    try:
        with path.open("rb") as fp:
            return tomllib.load(fp)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigLoadError(msg, path=path, line=e.lineno, column=e.colno) from e


def copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    """Return a copy of ``value`` sharing no dicts or lists with it."""
    if isinstance(value, dict):
        return {name: copy_value(item) for name, item in value.items()}
    if isinstance(value, list):
        return list(map(copy_value, value))
    return value


def deep_merge(
    base: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    override: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Overlay ``override`` on ``base`` and return the result as a new dict.

    Tables present on both sides are merged key by key; any other value
    from ``override`` (lists included) replaces the one in ``base``.
    Neither argument is changed.
    """
    merged: dict[str, Any] = copy_value(base)  # pyright: ignore[reportExplicitAny]
    for name, value in override.items():
        current = merged.get(name)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[name] = deep_merge(current, value)
        else:
            merged[name] = copy_value(value)
    return merged


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Collect configuration values from environment variables.

    ``FOREVER_SERVER__PORT=8080`` becomes ``{"server": {"port": 8080}}``.
    A double underscore separates the section from the key; variables
    without one (``FOREVER_DEBUG``, ``FOREVER_STRICT_CONFIG``) are control
    switches, not settings, and are skipped.

    Args:
        prefix: Variable name prefix.
        environ: Variables to scan. Defaults to ``os.environ``.
    """
    values: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    for name, raw in (os.environ if environ is None else environ).items():
        rest = name.removeprefix(prefix)
        if rest == name or "__" not in rest:
            continue
        key_path = rest.lower().replace("__", ".")
        set_nested_key(values, key_path, parse_string_value(raw))
    return values


def parse_string_value(value: str) -> Any:  # pyright: ignore[reportExplicitAny]
    """Turn an environment string into the most specific matching type.

    Tries, in order: ``true``/``false`` in any case, an integer, a decimal
    float, a JSON list or object. Anything else stays a string.

        >>> parse_string_value("3030")
        3030
        >>> parse_string_value("redis://localhost")
        'redis://localhost'
    """
    flag = _TRUE_FALSE.get(value.lower())
    if flag is not None:
        return flag

    try:
        return int(value)
    except ValueError:
        pass

    if "." in value:
        try:
            return float(value)
        except ValueError:
            pass

    if value[:1] + value[-1:] in ("[]", "{}"):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    return value


def set_nested_key(
    d: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    key_path: str,
    value: Any,  # pyright: ignore[reportExplicitAny]
) -> None:
    """Store ``value`` under a dotted path, creating tables on the way.

    A non-table value in the way is replaced by a table.

        >>> d = {}
        >>> set_nested_key(d, "server.port", 8080)
        >>> d
        {'server': {'port': 8080}}
    """
    *parents, leaf = key_path.split(".")
    table = d
    for name in parents:
        child = table.get(name)
        if not isinstance(child, dict):
            child = table[name] = {}
        table = child
    table[leaf] = value
