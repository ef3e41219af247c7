import os
from pathlib import Path

import pytest

from forever.config import safe_load_config


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("FOREVER_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


class TestSafeLoadConfig:
    def test_returns_config_without_error(self) -> None:
        config, error = safe_load_config(cli_overrides={"events": {"key": "jobs"}})

        assert error is None
        assert config.events.key == "jobs"

    def test_missing_explicit_file_exits(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(config_path=tmp_path / "missing.toml")

        assert exc_info.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_invalid_file_warns_and_keeps_cli_overrides(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "forever.toml"
        _ = path.write_text("[server\n")

        config, error = safe_load_config(
            config_path=path, cli_overrides={"events": {"key": "jobs"}}
        )

        assert error is not None
        assert error.startswith("Failed to load config")
        assert config.events.key == "jobs"
        assert config.server.port == 3030
        assert "Warning: Failed to load config" in capsys.readouterr().err

    def test_strict_mode_exits_on_invalid_file(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("FOREVER_STRICT_CONFIG", "1")
        path = tmp_path / "forever.toml"
        _ = path.write_text("[server]\nport = 99999\n")

        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(config_path=path)

        assert exc_info.value.code == 1
        assert "Error: Failed to load config" in capsys.readouterr().err

    def test_invalid_file_keeps_env_values(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("FOREVER_EVENTS__URL", "redis://env:6379")
        path = tmp_path / "forever.toml"
        _ = path.write_text("[server]\nport = 99999\n")

        config, error = safe_load_config(
            config_path=path, cli_overrides={"events": {"key": "jobs"}}
        )

        assert error is not None
        assert config.events.url == "redis://env:6379"
        assert config.events.key == "jobs"
        assert config.server.port == 3030
        assert "Warning:" in capsys.readouterr().err

    def test_invalid_cli_value_exits_naming_the_key(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(
                cli_overrides={
                    "server": {"port": 70000},
                    "events": {"url": "redis://h", "key": "k"},
                }
            )

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "server.port" in err
        assert "Warning" not in err

    def test_invalid_env_value_exits_even_with_good_file(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("FOREVER_SERVER__PORT", "not-a-port")
        _ = (tmp_path / "forever.toml").write_text('[events]\nkey = "jobs"\n')

        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config()

        assert exc_info.value.code == 1
        assert "server.port" in capsys.readouterr().err
