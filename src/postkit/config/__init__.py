"""Configuration loading for postkit."""

from postkit.config.exceptions import ConfigError, ConfigExistsError, ConfigValidationError
from postkit.config.settings import (
    LintSettings,
    PathsSettings,
    PostkitConfig,
    find_config,
    load_config,
    save_config,
)

__all__ = [
    "ConfigError",
    "ConfigExistsError",
    "ConfigValidationError",
    "LintSettings",
    "PathsSettings",
    "PostkitConfig",
    "find_config",
    "load_config",
    "save_config",
]
