"""Core building blocks: results, exit codes, config parsing."""

from .config import ConfigError, parse_toml, resolve_config_path
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "parse_toml",
    "resolve_config_path",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
