"""Single-writer, multi-reader state holder with synchronous notification."""

import logging
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

logger = logging.getLogger("PageFeed.Observable")


class StateSubject(Generic[T]):
    """Holds a value and pushes every new value to its subscribers.

    Subscribers are called synchronously, in subscription order, from
    inside ``next()``. A new subscriber immediately receives the current
    value. An exception raised by one subscriber is logged and does not
    keep the value from being stored or the others from being notified.
    """

    def __init__(self, initial: T):
        self._value = initial
        self._subscribers: List[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def next(self, value: T) -> None:
        self._value = value
        # Copy so callbacks may unsubscribe while being notified
        for callback in list(self._subscribers):
            self._notify(callback, value)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register ``callback`` and return a function that removes it."""
        self._subscribers.append(callback)
        self._notify(callback, self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)
            else:
                logger.debug("Subscriber already removed")

        return unsubscribe

    @staticmethod
    def _notify(callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception:
            logger.exception(f"Subscriber {callback!r} failed on {value!r}")

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
