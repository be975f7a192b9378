"""Configuration module for the portal."""

from portal.config.accounts import (
    AccountConfig,
    AccountsConfig,
    ConfigLoadError,
    load_accounts_config,
)
from portal.config.settings import LogLevel, Settings, get_settings

__all__ = [
    "AccountConfig",
    "AccountsConfig",
    "ConfigLoadError",
    "LogLevel",
    "Settings",
    "get_settings",
    "load_accounts_config",
]
