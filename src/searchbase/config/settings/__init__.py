"""Config settings – 12-factor env-based configuration."""
from searchbase.config.settings.base import Settings
from searchbase.config.settings.factory import SettingsFactory
from searchbase.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from searchbase.config.settings.searchbase import SearchbaseSettings

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "SearchbaseSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
