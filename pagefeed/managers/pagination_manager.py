"""Pagination state management for infinite scroll."""

import asyncio
import logging
from collections import deque
from typing import Any, Deque, Dict, Generic, List, Optional, Tuple, TypeVar

from pagefeed.core.errors import SourceFetchError
from pagefeed.core.observable import StateSubject
from pagefeed.core.protocols import DataSourcePort
from pagefeed.domain.query_config import QueryConfig, build
from pagefeed.domain.records import Cursor, MergeDirection, Record

T = TypeVar("T")

logger = logging.getLogger("PageFeed.PaginationManager")


class PaginationManager(Generic[T]):
    """Fetches ordered pages one at a time and accumulates them.

    Observable state:
        accumulated: tuple of every record fetched in the current session
        loading: True exactly while a fetch is in flight
        done: True once the source returned an empty page
        errors: the most recent SourceFetchError of the session, or None

    At most one fetch is in flight per manager. Every ``init`` starts a new
    session; pages fetched for an earlier session are discarded when they
    arrive.
    """

    def __init__(
        self,
        source: DataSourcePort,
        defaults: Optional[Dict[str, Any]] = None,
    ):
        """Initialize PaginationManager.

        Args:
            source: Ordered data source pages are fetched from
            defaults: Query options applied before each ``init``'s overrides
        """
        self.source = source
        self.defaults = dict(defaults or {})

        self._config: Optional[QueryConfig] = None
        self._generation = 0
        self._page: List[Record] = []
        self._accumulated: Deque[Record] = deque()

        self.accumulated: StateSubject[Tuple[Record, ...]] = StateSubject(())
        self.loading: StateSubject[bool] = StateSubject(False)
        self.done: StateSubject[bool] = StateSubject(False)
        self.errors: StateSubject[Optional[SourceFetchError]] = StateSubject(None)

    @property
    def config(self) -> Optional[QueryConfig]:
        return self._config

    @property
    def page(self) -> Tuple[Record, ...]:
        """Most recently fetched non-empty page"""
        return tuple(self._page)

    @property
    def items(self) -> Tuple[T, ...]:
        return tuple(record.data for record in self._accumulated)

    @property
    def is_loading(self) -> bool:
        return self.loading.value

    @property
    def is_done(self) -> bool:
        return self.done.value

    @property
    def generation(self) -> int:
        return self._generation

    def init(
        self, path: str, field: str, overrides: Optional[Dict[str, Any]] = None
    ) -> "asyncio.Task[List[Record]]":
        """Start a new session and fetch its first page.

        Args:
            path: Collection to paginate
            field: Field to order by
            overrides: Any of ``limit``, ``reverse``, ``prepend``

        Returns:
            asyncio.Task: The first fetch

        Raises:
            InvalidConfiguration: Before any state changes, if the options are invalid
            RuntimeError: If no event loop is running
        """
        config = build(path, field, {**self.defaults, **(overrides or {})})
        asyncio.get_running_loop()

        self._config = config
        self._generation += 1
        self._page = []
        self._accumulated = deque()
        logger.info(
            f"Session {self._generation}: {config.path} by {config.field} "
            f"{config.direction.value}, limit {config.limit}, {config.merge.value}"
        )

        self.errors.next(None)
        self.done.next(False)
        self.loading.next(False)
        self.accumulated.next(())

        return self.more()

    def more(self) -> "Optional[asyncio.Task[List[Record]]]":
        """Fetch the next page unless one is in flight or the source is exhausted.

        Returns:
            asyncio.Task: The fetch, or None if the call was a no-op
        """
        if self._config is None:
            logger.warning("more() called before init(), ignoring")
            return None
        if self.done.value or self.loading.value:
            logger.debug(
                f"more() ignored (done={self.done.value}, loading={self.loading.value})"
            )
            return None

        loop = asyncio.get_running_loop()
        task = loop.create_task(self._fetch(self._generation, self._config, self._cursor()))
        task.add_done_callback(self._retrieve_failure)
        # The task only starts once control returns to the loop
        self.loading.next(True)
        return task

    def _cursor(self) -> Optional[Cursor]:
        """Cursor of the record at the merge end of the current page."""
        if not self._page:
            return None
        if self._config.merge == MergeDirection.PREPEND:
            return self._page[0].cursor
        return self._page[-1].cursor

    async def _fetch(
        self, generation: int, config: QueryConfig, cursor: Optional[Cursor]
    ) -> List[Record]:
        logger.debug(f"Fetching {config.limit} from {config.path} after {cursor}")
        try:
            page = await self.source.fetch_page(
                config.path, config.field, config.direction, config.limit, cursor
            )
        except asyncio.CancelledError:
            if generation == self._generation:
                self.loading.next(False)
            raise
        except Exception as e:
            error = e if isinstance(e, SourceFetchError) else SourceFetchError(
                f"Fetching from '{config.path}' failed: {e}", config.path
            )
            self._on_error(generation, error)
            if error is e:
                raise
            raise error from e

        page = list(page)
        self._on_page(generation, page)
        return page

    def _on_page(self, generation: int, page: List[Record]) -> None:
        if generation != self._generation:
            logger.debug(f"Discarding page from stale session {generation}")
            return

        if not page:
            logger.info(f"Session {generation}: source exhausted")
            self.done.next(True)
            self.loading.next(False)
            return

        # Buffer and accumulation change before anyone hears loading=False,
        # so a subscriber calling more() resumes after this page.
        self._page = page
        if self._config.merge == MergeDirection.PREPEND:
            self._accumulated.extendleft(reversed(page))
        else:
            self._accumulated.extend(page)

        self.loading.next(False)
        self.accumulated.next(tuple(self._accumulated))

    def _on_error(self, generation: int, error: SourceFetchError) -> None:
        if generation != self._generation:
            logger.debug(f"Discarding failure from stale session {generation}: {error}")
            return
        logger.error(f"Fetch failed: {error}")
        self.loading.next(False)
        self.errors.next(error)

    @staticmethod
    def _retrieve_failure(task: asyncio.Task) -> None:
        # Already logged and published; mark it retrieved for the event loop
        if not task.cancelled():
            task.exception()
