"""Config – 12-factor settings for the scheduler process."""
from fuse_jobs.config.scheduler import DeliveryGuarantee, SchedulerSettings
from fuse_jobs.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from fuse_jobs.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DeliveryGuarantee",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SchedulerSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
