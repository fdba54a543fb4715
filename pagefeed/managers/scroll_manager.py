"""Scroll position handling - turns scrolling into reached-bottom signals."""

import logging

from pagefeed.core.protocols import PagerPort

logger = logging.getLogger("PageFeed.ScrollManager")

REACHED_BOTTOM = "reached-bottom"


class ScrollManager:
    def __init__(self, pager: PagerPort, threshold: float = 50):
        """Initialize ScrollManager.

        Args:
            pager: Object whose ``more()`` is called on reaching the bottom
            threshold: Distance in pixels from the bottom that counts as reached
        """
        self.pager = pager
        self.threshold = threshold
        self.paused = False

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def is_at_bottom(self, upper: float, page_size: float, value: float) -> bool:
        return upper - page_size - value < self.threshold

    def on_scroll_changed(self, upper: float, page_size: float, value: float):
        """Handle a scroll position change for infinite scrolling"""
        if self.is_at_bottom(upper, page_size, value):
            return self.handle_event(REACHED_BOTTOM)
        return None

    def handle_event(self, event: str):
        """Dispatch a UI event; only reached-bottom is acted upon."""
        if event != REACHED_BOTTOM:
            logger.debug(f"Ignoring event: {event}")
            return None
        if self.paused:
            return None
        logger.debug("Scrolled to bottom, requesting more")
        return self.pager.more()
