"""Ordered observer list for fanning out feed snapshots."""

import itertools
import logging
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class SubscriberRegistry(Generic[T]):
    """Mapping of opaque handle to callback, notified in subscription order.

    The same callback may be subscribed more than once; each subscription
    gets its own handle and is removed independently.
    """

    def __init__(self) -> None:
        self._callbacks: dict[int, Callable[[T], None]] = {}
        self._handles = itertools.count()

    def __len__(self) -> int:
        return len(self._callbacks)

    def add(self, callback: Callable[[T], None]) -> int:
        """Register a callback.

        Returns:
            Handle to pass to remove().
        """
        handle = next(self._handles)
        self._callbacks[handle] = callback
        return handle

    def remove(self, handle: int) -> None:
        """Remove a subscription. Unknown or already removed handles are ignored."""
        self._callbacks.pop(handle, None)

    def notify(self, callback: Callable[[T], None], value: T) -> bool:
        """Invoke a single callback, logging instead of raising on failure.

        Returns:
            True if the callback returned normally.
        """
        try:
            callback(value)
        except Exception:
            logger.exception(f"Subscriber {callback!r} raised during notification")
            return False
        return True

    def publish(self, value: T) -> int:
        """Notify every current subscriber with value.

        Handles are snapshotted first, so callbacks may subscribe or
        unsubscribe while being notified. A subscription added mid-publish
        waits for the next publish; one removed mid-publish is skipped.

        Returns:
            Number of subscribers that were notified without error.
        """
        delivered = 0
        for handle in list(self._callbacks):
            callback = self._callbacks.get(handle)
            if callback is None:
                continue
            if self.notify(callback, value):
                delivered += 1
        return delivered
