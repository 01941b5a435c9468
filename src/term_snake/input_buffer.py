"""Bounded, lossy FIFO for key presses between logic ticks."""

from __future__ import annotations

from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class InputBuffer(Generic[T]):
    """Keeps at most *capacity* pending keys; later pushes are dropped.

    Once full, nothing new is accepted until :meth:`pop` frees a slot, so
    the oldest presses always win.
    """

    def __init__(self, capacity: int = 2) -> None:
        if capacity < 1:
            raise ValueError("InputBuffer capacity must be at least 1.")
        self.capacity = capacity
        self._keys: deque[T] = deque()

    def __len__(self) -> int:
        return len(self._keys)

    def is_full(self) -> bool:
        return len(self._keys) >= self.capacity

    def push(self, key: T) -> bool:
        """Queue *key*. Returns False if the buffer was full and it was dropped."""
        if self.is_full():
            return False
        self._keys.append(key)
        return True

    def pop(self) -> T | None:
        """Remove and return the oldest key, or ``None`` when empty."""
        if not self._keys:
            return None
        return self._keys.popleft()
