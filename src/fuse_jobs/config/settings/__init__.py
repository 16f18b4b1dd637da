"""Config settings – 12-factor env-based configuration."""
from fuse_jobs.config.settings.base import Settings
from fuse_jobs.config.settings.factory import SettingsFactory
from fuse_jobs.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader"]
