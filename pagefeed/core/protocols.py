"""Protocol definitions for dependency injection."""

from typing import List, Optional, Protocol

from pagefeed.domain.records import Cursor, Record, SortDirection


class DataSourcePort(Protocol):
    async def fetch_page(
        self,
        path: str,
        field: str,
        direction: SortDirection,
        limit: int,
        after: Optional[Cursor] = None,
    ) -> List[Record]: ...


class PagerPort(Protocol):
    def more(self): ...
