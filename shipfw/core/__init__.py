"""Core types: results, exit codes, configuration and project detection."""

from .config import Config, ConfigError, load_config, load_config_or_default
from .errors import ErrorCode
from .project import Project, ProjectError
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    # project
    "Project",
    "ProjectError",
    # result
    "Err",
    "Ok",
    "Result",
]
