"""Database fixtures for tests."""

import pytest
from pathlib import Path
from typing import Generator

from pagefeed.services.sqlite_source import SqliteSource


@pytest.fixture
def temp_source() -> Generator[SqliteSource, None, None]:
    """Create a temporary in-memory SQLite source."""
    source = SqliteSource(":memory:")
    yield source
    source.close()


@pytest.fixture
def temp_source_file(tmp_path: Path) -> Generator[SqliteSource, None, None]:
    """Create a temporary file-based SQLite source."""
    source = SqliteSource(str(tmp_path / "feed.db"))
    yield source
    source.close()


@pytest.fixture
def populated_source(temp_source: SqliteSource) -> SqliteSource:
    """Create a source with a small ordered collection of posts."""
    temp_source.create_collection(
        "posts", {"id": "INTEGER", "title": "TEXT", "published": "TEXT", "score": "INTEGER"}
    )
    temp_source.create_index("posts", "published")
    posts = [
        (1, "alpha", "2025-01-01T10:00:00", 5),
        (2, "bravo", "2025-01-02T10:00:00", 3),
        (3, "charlie", "2025-01-03T10:00:00", 5),
        (4, "delta", "2025-01-04T10:00:00", 1),
        (5, "echo", "2025-01-05T10:00:00", 5),
    ]
    for post_id, title, published, score in posts:
        temp_source.insert(
            "posts", {"id": post_id, "title": title, "published": published, "score": score}
        )
    return temp_source
