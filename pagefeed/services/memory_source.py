"""In-memory ordered collections, mainly for demos and tests."""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional

from pagefeed.core.errors import InvalidCursor, SourceFetchError
from pagefeed.domain.records import Cursor, Record, SortDirection
from pagefeed.services.cursor_codec import CursorCodec

logger = logging.getLogger("PageFeed.MemorySource")


class MemorySource:
    """Serves pages out of lists of dicts keyed by collection path.

    Rows are ordered by the requested field, with insertion position as
    tie-break. Rows that lack the field are left out of the ordering.
    """

    def __init__(
        self,
        collections: Optional[Dict[str, Iterable[Dict[str, Any]]]] = None,
        latency: float = 0.0,
    ):
        self._collections: Dict[str, List[Dict[str, Any]]] = {
            path: list(rows) for path, rows in (collections or {}).items()
        }
        self.latency = latency

    def add(self, path: str, rows: Iterable[Dict[str, Any]]) -> None:
        self._collections.setdefault(path, []).extend(rows)

    def count(self, path: str) -> int:
        return len(self._collections.get(path, []))

    async def fetch_page(
        self,
        path: str,
        field: str,
        direction: SortDirection,
        limit: int,
        after: Optional[Cursor] = None,
    ) -> List[Record]:
        await asyncio.sleep(self.latency)

        descending = direction == SortDirection.DESC
        positioned = [
            (row[field], index, row)
            for index, row in enumerate(self._collections.get(path, []))
            if field in row
        ]
        try:
            positioned.sort(key=lambda entry: (entry[0], entry[1]), reverse=descending)
            if after is not None:
                start = CursorCodec.decode(after)
                mark = (start.value, start.key)
                if descending:
                    positioned = [e for e in positioned if (e[0], e[1]) < mark]
                else:
                    positioned = [e for e in positioned if (e[0], e[1]) > mark]
        except TypeError as e:
            raise SourceFetchError(
                f"Values of '{field}' in '{path}' are not mutually comparable", path
            ) from e
        except InvalidCursor as e:
            raise SourceFetchError(str(e), path) from e

        page = [
            Record(data=dict(row), cursor=CursorCodec.for_row(row, field, index))
            for value, index, row in positioned[:limit]
        ]
        logger.debug(f"Served {len(page)} rows from '{path}' ordered by {field} {direction.value}")
        return page
