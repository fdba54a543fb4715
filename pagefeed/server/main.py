#!/usr/bin/env python3
"""
PageFeed Server Main Entry Point
Wires the configured data source into the page server and runs it
"""
import asyncio
import logging
import signal
import sys

from pagefeed.config import get_settings
from pagefeed.core.di_container import AppContainer
from pagefeed.logging_setup import configure_logging
from pagefeed.server.page_service import PageService

logger = logging.getLogger("PageFeed.Server")


class PageFeedServer:
    """Main server application with dependency injection"""

    def __init__(self, container: AppContainer, host: str = "localhost", port: int = 8765):
        if container.settings.source.kind == "websocket":
            raise ValueError("The page server cannot proxy another page server")
        self.container = container
        self.host = host
        self.port = port
        self.page_service = PageService(container.source)
        logger.info(f"Serving pages from the {container.settings.source.kind} source")
        if container.settings.source.kind == "memory":
            logger.warning(
                "The memory source starts empty and nothing can add rows to it "
                "over the wire; every get_page will return an empty page"
            )

    async def run(self):
        await self.page_service.serve(
            self.host, self.port, max_size=self.container.settings.source.max_size
        )


def main():
    settings = get_settings().settings
    configure_logging(settings.logging.level)
    server = PageFeedServer(AppContainer.create(settings=settings))

    signal.signal(signal.SIGTERM, lambda signum, frame: sys.exit(0))
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
