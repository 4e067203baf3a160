"""Core domain types and logic."""

from .config import Config, ConfigError, OculusConfig, load_config
from .errors import ErrorCode
from .options import OptionsError, PackageOptions, SigningKey, load_options, parse_options
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "Config",
    "ConfigError",
    "OculusConfig",
    "load_config",
    # errors
    "ErrorCode",
    # options
    "OptionsError",
    "PackageOptions",
    "SigningKey",
    "load_options",
    "parse_options",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
