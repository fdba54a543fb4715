"""Query configuration and record types."""

from .query_config import DEFAULT_LIMIT, QueryConfig, build
from .records import Cursor, MergeDirection, Page, Record, SortDirection

__all__ = [
    "Cursor",
    "DEFAULT_LIMIT",
    "MergeDirection",
    "Page",
    "QueryConfig",
    "Record",
    "SortDirection",
    "build",
]
