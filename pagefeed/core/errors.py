"""Exceptions raised by the pagination engine and its data sources."""

from typing import Optional


class PageFeedError(Exception):
    """Base class for all PageFeed errors"""
    pass


class SourceFetchError(PageFeedError):
    """Raised when a data source fails to return a page"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class InvalidConfiguration(PageFeedError, ValueError):
    """Raised when a query or source configuration is unusable"""
    pass


class InvalidCursor(PageFeedError, ValueError):
    """Raised when a cursor string cannot be decoded"""
    pass
