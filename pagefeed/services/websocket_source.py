"""WebSocket data source that asks a page server for each page."""

import asyncio
import json
import logging
from typing import List, Optional

import websockets

from pagefeed.core.errors import SourceFetchError
from pagefeed.domain.records import Cursor, Record, SortDirection

logger = logging.getLogger("PageFeed.WebSocketSource")


class WebSocketSource:
    def __init__(self, uri: str, max_size: int, open_timeout: float = 5):
        self.uri = uri
        self.max_size = max_size
        self.open_timeout = open_timeout

    def build_request(
        self,
        path: str,
        field: str,
        direction: SortDirection,
        limit: int,
        after: Optional[Cursor] = None,
    ) -> dict:
        return {
            "action": "get_page",
            "path": path,
            "field": field,
            "direction": direction.value,
            "limit": limit,
            "after": after,
        }

    async def fetch_page(
        self,
        path: str,
        field: str,
        direction: SortDirection,
        limit: int,
        after: Optional[Cursor] = None,
    ) -> List[Record]:
        request = self.build_request(path, field, direction, limit, after)
        try:
            async with websockets.connect(
                self.uri, max_size=self.max_size, open_timeout=self.open_timeout
            ) as websocket:
                await websocket.send(json.dumps(request))
                response = await websocket.recv()
        except (websockets.exceptions.WebSocketException, OSError, asyncio.TimeoutError) as e:
            logger.error(f"WebSocket fetch from {self.uri} failed: {e}")
            raise SourceFetchError(f"WebSocket fetch failed: {e}", path) from e

        return self.parse_response(response, path)

    @staticmethod
    def parse_response(response, path: str) -> List[Record]:
        """Turn a page server reply into records.

        Raises:
            SourceFetchError: If the server reported an error or the reply is malformed
        """
        try:
            data = json.loads(response)
        except (TypeError, json.JSONDecodeError) as e:
            raise SourceFetchError(f"Malformed page response: {e}", path) from e

        if not isinstance(data, dict):
            raise SourceFetchError("Malformed page response: not an object", path)

        msg_type = data.get("type")
        if msg_type == "error":
            raise SourceFetchError(data.get("message", "Unknown server error"), path)
        if msg_type != "page":
            raise SourceFetchError(f"Unexpected response type: {msg_type}", path)

        try:
            return [Record(data=item["data"], cursor=item["cursor"]) for item in data.get("items", [])]
        except (KeyError, TypeError) as e:
            raise SourceFetchError(f"Malformed page item: {e}", path) from e
