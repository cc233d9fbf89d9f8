"""Fixed-capacity object pools handing out items in FIFO order."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any, Callable

_logger = logging.getLogger("upfkit")


class PoolError(Exception):
    """Raised when a pool is empty on alloc or full on free."""


class Pool:
    """A pool of pre-built, reusable items."""

    def __init__(self, factory: Callable[[], Any], capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._capacity = capacity
        self._avail: deque[Any] = deque(factory() for _ in range(capacity))
        self._lock = threading.Lock()

    def alloc(self) -> Any:
        """Take the next available item."""
        with self._lock:
            if not self._avail:
                raise PoolError("Pool is empty")
            item = self._avail.popleft()
            _logger.debug("Pool alloc successful, total capacity[%d], available[%d]",
                          self._capacity, len(self._avail))
            return item

    def free(self, item: Any) -> None:
        """Return an item to the pool."""
        with self._lock:
            if len(self._avail) >= self._capacity:
                raise PoolError("Pool is full, it may not belong to this pool")
            self._avail.append(item)
            _logger.debug("Pool Free successful, total capacity[%d], available[%d]",
                          self._capacity, len(self._avail))

    def size(self) -> int:
        """Number of items available."""
        return len(self._avail)

    def capacity(self) -> int:
        """Total number of items, used and unused."""
        return self._capacity

    def used(self) -> int:
        """Number of items currently handed out."""
        return self._capacity - len(self._avail)

    def available(self) -> bool:
        """Whether an alloc would succeed."""
        return len(self._avail) > 0


class IndexPool:
    """A pool of fresh items each carrying a stable slot number in ``index``."""

    def __init__(self, factory: Callable[[], Any], capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._factory = factory
        self._capacity = capacity
        self._slots: list[Any] = [None] * capacity
        self._avail: deque[int] = deque(range(capacity))
        self._lock = threading.Lock()

    def alloc(self) -> Any:
        """Build a fresh item in the next free slot and return it."""
        with self._lock:
            if not self._avail:
                raise PoolError("Index Pool is empty")
            index = self._avail.popleft()
            item = self._factory()
            item.index = index
            self._slots[index] = item
            _logger.debug("Index alloc successful, total capacity[%d], available[%d]",
                          self._capacity, len(self._avail))
            return item

    def free(self, item: Any) -> None:
        """Give the item's slot back to the pool."""
        with self._lock:
            if len(self._avail) >= self._capacity:
                raise PoolError("Index Pool is full, it may not belong to this pool")
            self._avail.append(item.index)
            _logger.debug("Index Free successful, total capacity[%d], available[%d]",
                          self._capacity, len(self._avail))

    def find(self, index: int) -> Any:
        """Return the item last placed in slot ``index``, or None."""
        if not 0 <= index < self._capacity:
            raise IndexError(f"index {index} out of range")
        return self._slots[index]

    def size(self) -> int:
        """Number of free slots."""
        return len(self._avail)

    def capacity(self) -> int:
        """Total number of slots."""
        return self._capacity