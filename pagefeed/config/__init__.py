"""Configuration management."""

from .paths import AppPaths
from .settings import (
    LoggingSettings,
    PaginationSettings,
    Settings,
    SettingsManager,
    SourceSettings,
    get_settings,
)

__all__ = [
    "AppPaths",
    "LoggingSettings",
    "PaginationSettings",
    "Settings",
    "SettingsManager",
    "SourceSettings",
    "get_settings",
]
