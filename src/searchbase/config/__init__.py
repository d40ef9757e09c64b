"""Config – settings dataclasses, loaders and validation errors."""

from searchbase.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    SearchbaseSettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from searchbase.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SearchbaseSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
