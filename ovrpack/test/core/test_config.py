"""Tests for ovrpack.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from ovrpack.core.config import (
    CLI_PATH_ENV_VAR,
    CONFIG_ENV_VAR,
    SDK_PATH_ENV_VAR,
    Config,
    OculusConfig,
    default_config_path,
    load_config,
)
from ovrpack.core.result import Err, Ok

_VALID = """
[oculus]
cli_path = "/opt/ovr/ovr-platform-util"
android_sdk_path = "/opt/android-sdk"
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "ovrpack.toml"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_valid_config(self, tmp_path: Path) -> None:
        result = load_config(_write(tmp_path, _VALID), env={})

        assert isinstance(result, Ok)
        assert result.value.oculus.cli_path == Path("/opt/ovr/ovr-platform-util")
        assert result.value.oculus.android_sdk_path == Path("/opt/android-sdk")
        assert result.value.work_dir is None

    def test_work_dir(self, tmp_path: Path) -> None:
        content = _VALID + '\n[paths]\nwork_dir = "/var/tmp/ovrpack"\n'
        result = load_config(_write(tmp_path, content), env={})

        assert isinstance(result, Ok)
        assert result.value.work_dir == Path("/var/tmp/ovrpack")

    def test_env_overrides_file(self, tmp_path: Path) -> None:
        env = {CLI_PATH_ENV_VAR: "/custom/ovr", SDK_PATH_ENV_VAR: "/custom/sdk"}
        result = load_config(_write(tmp_path, _VALID), env=env)

        assert isinstance(result, Ok)
        assert result.value.oculus.cli_path == Path("/custom/ovr")
        assert result.value.oculus.android_sdk_path == Path("/custom/sdk")

    def test_env_fills_missing_values(self, tmp_path: Path) -> None:
        env = {CLI_PATH_ENV_VAR: "/custom/ovr", SDK_PATH_ENV_VAR: "/custom/sdk"}
        result = load_config(_write(tmp_path, ""), env=env)

        assert isinstance(result, Ok)

    def test_missing_cli_path(self, tmp_path: Path) -> None:
        content = '[oculus]\nandroid_sdk_path = "/opt/android-sdk"\n'
        result = load_config(_write(tmp_path, content), env={})

        assert isinstance(result, Err)
        assert "cli_path" in result.error.message

    def test_blank_sdk_path(self, tmp_path: Path) -> None:
        content = '[oculus]\ncli_path = "/opt/ovr"\nandroid_sdk_path = "  "\n'
        result = load_config(_write(tmp_path, content), env={})

        assert isinstance(result, Err)
        assert "android_sdk_path" in result.error.message

    def test_file_not_found(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "missing.toml", env={})

        assert isinstance(result, Err)
        assert "not found" in result.error.message
        assert result.error.path == tmp_path / "missing.toml"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        result = load_config(_write(tmp_path, "[oculus\n"), env={})

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message


class TestConfig:
    def test_frozen(self) -> None:
        config = Config(oculus=OculusConfig(cli_path=Path("a"), android_sdk_path=Path("b")))
        with pytest.raises(AttributeError):
            config.work_dir = Path("c")  # type: ignore[misc]


class TestDefaultConfigPath:
    def test_env_var(self) -> None:
        assert default_config_path({CONFIG_ENV_VAR: "/etc/ovrpack.toml"}) == Path(
            "/etc/ovrpack.toml"
        )

    def test_falls_back_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert default_config_path({}).resolve() == (tmp_path / "ovrpack.toml").resolve()
