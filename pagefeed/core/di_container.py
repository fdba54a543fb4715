"""Dependency injection container."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pagefeed.config import AppPaths, Settings, SettingsManager
from pagefeed.core.errors import InvalidConfiguration
from pagefeed.core.protocols import DataSourcePort
from pagefeed.managers.pagination_manager import PaginationManager
from pagefeed.managers.scroll_manager import ScrollManager
from pagefeed.services import MemorySource, SqliteSource, WebSocketSource


@dataclass
class AppContainer:
    settings: Settings
    paths: AppPaths

    _source: Optional[DataSourcePort] = field(
        default=None, init=False, repr=False
    )

    @property
    def source(self) -> DataSourcePort:
        if self._source is None:
            self._source = self._build_source()
        return self._source

    def _build_source(self) -> DataSourcePort:
        source_settings = self.settings.source
        if source_settings.kind == "memory":
            return MemorySource()
        if source_settings.kind == "sqlite":
            db_path = source_settings.db_path or str(self.paths.db_path)
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            return SqliteSource(db_path)
        if source_settings.kind == "websocket":
            return WebSocketSource(
                source_settings.uri,
                max_size=source_settings.max_size,
                open_timeout=source_settings.open_timeout,
            )
        raise InvalidConfiguration(f"Unknown source kind: {source_settings.kind}")

    def create_pager(self) -> PaginationManager:
        return PaginationManager(
            self.source, defaults=self.settings.pagination.as_overrides()
        )

    def create_scroll_manager(self, pager: PaginationManager) -> ScrollManager:
        return ScrollManager(pager)

    @classmethod
    def create(
        cls,
        settings: Optional[Settings] = None,
        paths: Optional[AppPaths] = None,
    ) -> "AppContainer":
        paths = paths or AppPaths.default()
        if settings is None:
            settings = SettingsManager(paths.config_path).settings
        return cls(settings=settings, paths=paths)
