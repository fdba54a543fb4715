"""Managers for pagination and scroll state."""

from .pagination_manager import PaginationManager
from .scroll_manager import REACHED_BOTTOM, ScrollManager

__all__ = ["PaginationManager", "REACHED_BOTTOM", "ScrollManager"]
