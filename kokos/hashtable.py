"""A separately chained hash table keyed by user-supplied hash and equality functions."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

_U64_MASK = (1 << 64) - 1
_GROW_LOAD = 70


class HashTable:
    """Hash table that uses the given functions instead of ``__hash__`` and ``__eq__``."""

    def __init__(
        self,
        hash_function: Callable[[Any], int],
        equality_function: Callable[[Any, Any], bool],
        capacity: int = 11,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.hash_function = hash_function
        self.equality_function = equality_function
        self.capacity = capacity
        self._buckets: list[list[list[Any]] | None] = [None] * capacity
        self._len = 0

    def _index_for(self, key: Any) -> int:
        return (self.hash_function(key) & _U64_MASK) % self.capacity

    def load(self) -> int:
        """Fill level as a percentage, in whole multiples of 100."""
        return (self._len // self.capacity) * 100

    def _grow(self, capacity: int) -> None:
        entries = list(self.items())
        self.capacity = capacity
        self._buckets = [None] * capacity
        self._len = 0
        for key, value in entries:
            self.add(key, value)

    def add(self, key: Any, value: Any) -> bool:
        """Insert or replace; return True if the key was new."""
        if self.load() >= _GROW_LOAD:
            self._grow(self.capacity * 2)

        idx = self._index_for(key)
        bucket = self._buckets[idx]
        if bucket is None:
            self._buckets[idx] = [[key, value]]
            self._len += 1
            return True

        for pair in bucket:
            if self.equality_function(key, pair[0]):
                pair[1] = value
                return False

        bucket.append([key, value])
        self._len += 1
        return True

    def find(self, key: Any) -> Any | None:
        """Return the value stored under ``key``, or None."""
        bucket = self._buckets[self._index_for(key)]
        if bucket is None:
            return None
        for stored_key, value in bucket:
            if self.equality_function(stored_key, key):
                return value
        return None

    def delete(self, key: Any) -> Any | None:
        """Remove ``key`` and return its value, or None if it was absent."""
        bucket = self._buckets[self._index_for(key)]
        if bucket is None:
            return None
        for i, (stored_key, value) in enumerate(bucket):
            if self.equality_function(stored_key, key):
                del bucket[i]
                self._len -= 1
                return value
        return None

    def items(self) -> Iterator[tuple[Any, Any]]:
        """Yield ``(key, value)`` pairs in bucket order."""
        for bucket in self._buckets:
            if bucket:
                for key, value in bucket:
                    yield key, value

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[Any]:
        for key, _ in self.items():
            yield key