"""Typed configuration loading and access.

Configuration is read once at start-up from a TOML file and never mutated
afterwards, so services can share one ``Config`` without locking.

    [oculus]
    cli_path = "/opt/ovr/ovr-platform-util"
    android_sdk_path = "/opt/android-sdk"

    [paths]
    work_dir = "/var/tmp/ovrpack"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "OculusConfig",
    "CONFIG_ENV_VAR",
    "CLI_PATH_ENV_VAR",
    "SDK_PATH_ENV_VAR",
    "DEFAULT_CONFIG_NAME",
    "default_config_path",
    "load_config",
]

CONFIG_ENV_VAR = "OVRPACK_CONFIG"
CLI_PATH_ENV_VAR = "OVRPACK_OCULUS_CLI_PATH"
SDK_PATH_ENV_VAR = "OVRPACK_ANDROID_SDK_PATH"
DEFAULT_CONFIG_NAME = "ovrpack.toml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class OculusConfig:
    """Location of the Oculus platform utility and the Android SDK it needs."""

    cli_path: Path
    android_sdk_path: Path


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container.

    Attributes:
        oculus: Oculus CLI settings.
        work_dir: Parent of per-request working directories. None means the
            system temp directory.
    """

    oculus: OculusConfig
    work_dir: Path | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object], env: Mapping[str, str]) -> Config:
        """Create Config from parsed TOML, applying environment overrides.

        Raises:
            ValueError: A required setting is missing from both sources.
        """
        oculus: StrDict = get_table(data, "oculus") or {}
        paths: StrDict = get_table(data, "paths") or {}

        cli_path = env.get(CLI_PATH_ENV_VAR) or get_str(oculus, "cli_path")
        sdk_path = env.get(SDK_PATH_ENV_VAR) or get_str(oculus, "android_sdk_path")
        if not cli_path:
            raise ValueError(f"oculus.cli_path is required (or set {CLI_PATH_ENV_VAR})")
        if not sdk_path:
            raise ValueError(f"oculus.android_sdk_path is required (or set {SDK_PATH_ENV_VAR})")

        work_dir = get_str(paths, "work_dir")
        return cls(
            oculus=OculusConfig(
                cli_path=Path(cli_path).expanduser(),
                android_sdk_path=Path(sdk_path).expanduser(),
            ),
            work_dir=Path(work_dir).expanduser() if work_dir else None,
        )


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Return $OVRPACK_CONFIG if set, else ./ovrpack.toml."""
    env = os.environ if env is None else env
    override = env.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.cwd() / DEFAULT_CONFIG_NAME


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path, env: Mapping[str, str] | None = None) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to ovrpack.toml
        env: Environment used for overrides (defaults to os.environ)

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        config = Config.from_dict(result.value, os.environ if env is None else env)
        return Ok(config)
    except ValueError as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))
