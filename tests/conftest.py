"""Pytest configuration and shared fixtures."""

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from pagefeed.domain.records import Record, SortDirection
from pagefeed.services.memory_source import MemorySource


class ControlledSource:
    """Data source whose fetches stay pending until a test resolves them."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self._pending: List[asyncio.Future] = []

    async def fetch_page(
        self,
        path: str,
        field: str,
        direction: SortDirection,
        limit: int,
        after: Optional[str] = None,
    ) -> List[Record]:
        future = asyncio.get_running_loop().create_future()
        self.calls.append(
            {
                "path": path,
                "field": field,
                "direction": direction,
                "limit": limit,
                "after": after,
            }
        )
        self._pending.append(future)
        return await future

    @property
    def pending(self) -> int:
        return len(self._pending)

    def resolve(self, values: List[Any]) -> None:
        future = self._pending.pop(0)
        future.set_result([Record(data=v, cursor=f"cursor-{v}") for v in values])

    def fail(self, error: BaseException) -> None:
        self._pending.pop(0).set_exception(error)

    async def wait_for_calls(self, count: int, rounds: int = 100) -> None:
        """Yield to the event loop until `count` fetches were issued."""
        for _ in range(rounds):
            if len(self.calls) >= count:
                return
            await asyncio.sleep(0)


@pytest.fixture
def controlled_source() -> ControlledSource:
    return ControlledSource()


@pytest.fixture
def letters_source() -> MemorySource:
    return MemorySource({"letters": [{"name": letter} for letter in "abcde"]})


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture
def temp_config_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.yml"
