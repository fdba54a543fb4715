#!/usr/bin/env python3
"""
Page Service - Serves ordered pages to WebSocket clients
"""
import asyncio
import json
import logging
from typing import Set

import websockets

from pagefeed.core.errors import PageFeedError
from pagefeed.core.protocols import DataSourcePort
from pagefeed.domain.records import SortDirection

logger = logging.getLogger("PageFeed.PageService")


class PageService:
    """Service answering get_page requests from a data source"""

    def __init__(self, source: DataSourcePort, max_limit: int = 500):
        """
        Initialize page service

        Args:
            source: Data source the pages are read from
            max_limit: Upper bound on the page size a client may request
        """
        self.source = source
        self.max_limit = max_limit
        self.clients: Set = set()

    async def websocket_handler(self, websocket):
        """Handle WebSocket client connections"""
        logger.info(f"WebSocket client connected from {getattr(websocket, 'remote_address', None)}")
        self.clients.add(websocket)

        try:
            async for message in websocket:
                await self._handle_message(websocket, message)
        except websockets.exceptions.ConnectionClosed:
            pass
        finally:
            self.clients.discard(websocket)
            logger.info("WebSocket client disconnected")

    async def _handle_message(self, websocket, message: str):
        """Handle individual WebSocket message"""
        try:
            data = json.loads(message)
        except json.JSONDecodeError as e:
            await self._send_error(websocket, f"Malformed request: {e}")
            return

        action = data.get("action") if isinstance(data, dict) else None
        if action == "get_page":
            await self._handle_get_page(websocket, data)
        else:
            logger.warning(f"Unknown action: {action}")
            await self._send_error(websocket, f"Unknown action: {action}")

    async def _handle_get_page(self, websocket, data: dict):
        path = data.get("path")
        field = data.get("field")
        limit = data.get("limit")
        after = data.get("after")

        if not isinstance(path, str) or not isinstance(field, str):
            await self._send_error(websocket, "path and field are required")
            return
        if not isinstance(limit, int) or isinstance(limit, bool) or not 1 <= limit <= self.max_limit:
            await self._send_error(websocket, f"limit must be between 1 and {self.max_limit}")
            return
        try:
            direction = SortDirection(data.get("direction", SortDirection.DESC.value))
        except ValueError:
            await self._send_error(websocket, f"Invalid direction: {data.get('direction')}")
            return

        try:
            page = await self.source.fetch_page(path, field, direction, limit, after)
        except PageFeedError as e:
            logger.error(f"Error serving page from '{path}': {e}")
            await self._send_error(websocket, str(e))
            return

        response = {
            "type": "page",
            "path": path,
            "items": [{"data": record.data, "cursor": record.cursor} for record in page],
        }
        await websocket.send(json.dumps(response))

    async def _send_error(self, websocket, message: str):
        await websocket.send(json.dumps({"type": "error", "message": message}))

    async def serve(self, host: str = "localhost", port: int = 8765, max_size: int = 5 * 1024 * 1024):
        """Run the WebSocket server until cancelled"""
        logger.info(f"Starting page server on ws://{host}:{port}")
        async with websockets.serve(self.websocket_handler, host, port, max_size=max_size):
            await asyncio.Future()  # Run forever
