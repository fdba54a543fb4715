"""Data sources and cursor handling."""

from .cursor_codec import CursorCodec, CursorData
from .memory_source import MemorySource
from .sqlite_source import SqliteSource
from .websocket_source import WebSocketSource

__all__ = ["CursorCodec", "CursorData", "MemorySource", "SqliteSource", "WebSocketSource"]
