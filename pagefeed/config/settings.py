#!/usr/bin/env python3
"""
PageFeed Settings Management
Loads and validates settings from settings.yml using Pydantic
"""

import logging
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger("PageFeed.Settings")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class PaginationSettings(BaseModel):
    """Default query options"""
    limit: int = Field(
        default=2,
        ge=1,
        le=500,
        description="Records fetched per page (1-500)"
    )
    reverse: bool = Field(
        default=False,
        description="Ascending order instead of descending"
    )
    prepend: bool = Field(
        default=False,
        description="Merge new pages at the head of the feed"
    )

    def as_overrides(self) -> Dict[str, Any]:
        return self.model_dump()


class SourceSettings(BaseModel):
    """Which data source to read pages from"""
    kind: Literal["memory", "sqlite", "websocket"] = Field(
        default="memory",
        description="Data source implementation"
    )
    db_path: Optional[str] = Field(
        default=None,
        description="SQLite database file (sqlite source only)"
    )
    uri: str = Field(
        default="ws://localhost:8765",
        description="Page server URI (websocket source only)"
    )
    max_size: int = Field(
        default=5 * 1024 * 1024,
        ge=1024,
        description="Maximum WebSocket message size in bytes"
    )
    open_timeout: float = Field(
        default=5,
        gt=0,
        description="Seconds to wait for the WebSocket handshake"
    )


class LoggingSettings(BaseModel):
    """Logging settings"""
    level: str = Field(default="INFO", description="Root log level")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Accept level names in any case"""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(LOG_LEVELS)}")
        return level


class Settings(BaseModel):
    """Main settings model"""
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    source: SourceSettings = Field(default_factory=SourceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class SettingsManager:
    """Manages loading and accessing settings"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize settings manager

        Args:
            config_path: Path to settings.yml file. Defaults to ./settings.yml
        """
        if config_path is None:
            config_path = Path("settings.yml")

        self.config_path = Path(config_path)
        self.settings = self._load_settings()

    def _load_settings(self) -> Settings:
        """Load and validate settings from YAML file"""
        if not self.config_path.exists():
            logger.info(f"Settings file not found at {self.config_path}, using defaults")
            return Settings()

        try:
            with open(self.config_path, 'r') as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error reading settings YAML: {e}, using defaults")
            return Settings()

        if config_data is None:
            logger.info("Settings file is empty, using defaults")
            return Settings()

        if not isinstance(config_data, dict):
            logger.error("Settings file must contain a mapping, using defaults")
            return Settings()

        try:
            settings = Settings(**config_data)
        except ValidationError as e:
            logger.error(f"Invalid settings in {self.config_path}: {e}, using defaults")
            return Settings()

        logger.info(f"Loaded settings from {self.config_path}")
        logger.debug(f"  - Page limit: {settings.pagination.limit}")
        logger.debug(f"  - Source: {settings.source.kind}")
        return settings

    def reload(self):
        """Reload settings from file"""
        self.settings = self._load_settings()

    @property
    def page_limit(self) -> int:
        return self.settings.pagination.limit

    @property
    def source_kind(self) -> str:
        return self.settings.source.kind

    @property
    def log_level(self) -> str:
        return self.settings.logging.level


# Global settings instance
_settings_manager: Optional[SettingsManager] = None


def get_settings() -> SettingsManager:
    """Get the global settings manager instance"""
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager
