"""Cursor-based incremental pagination for scroll-driven feeds."""

from pagefeed.core.errors import (
    InvalidConfiguration,
    InvalidCursor,
    PageFeedError,
    SourceFetchError,
)
from pagefeed.domain import QueryConfig, Record, SortDirection, build
from pagefeed.managers import PaginationManager, ScrollManager

__version__ = "0.1.0"

__all__ = [
    "InvalidConfiguration",
    "InvalidCursor",
    "PageFeedError",
    "PaginationManager",
    "QueryConfig",
    "Record",
    "ScrollManager",
    "SortDirection",
    "SourceFetchError",
    "build",
]
