"""A direct-access hash table of integer keys with linear probing."""

from __future__ import annotations

import itertools
from collections.abc import Iterator

_EMPTY = object()
_DELETED = object()


def hash_slot(nelements: int, key: int) -> int:
    """Return the home slot of ``key`` in a table of ``nelements`` slots."""
    if nelements < 1:
        raise ValueError("a hash table needs at least one slot")
    return key % nelements


class HashTable:
    """Open-addressing hash table mapping integer keys to integer values.

    Duplicate keys are allowed; the table doubles in size once more than
    half of its slots are in use.
    """

    def __init__(self, nelements: int) -> None:
        if nelements < 1:
            raise ValueError("a hash table needs at least one slot")
        self._keys: list[object] = [_EMPTY] * nelements
        self._vals: list[int] = [0] * nelements
        self._size = 0

    @property
    def nelements(self) -> int:
        """Number of slots in the table."""
        return len(self._keys)

    def __len__(self) -> int:
        return self._size

    def _probe(self, key: int) -> Iterator[int]:
        first = hash_slot(self.nelements, key)
        return itertools.chain(range(first, self.nelements), range(first))

    def reset(self) -> None:
        """Remove every entry, keeping the current number of slots."""
        self._keys = [_EMPTY] * self.nelements
        self._vals = [0] * self.nelements
        self._size = 0

    def resize(self, nelements: int) -> None:
        """Rebuild the table with ``nelements`` slots, keeping all entries."""
        if nelements < 1:
            raise ValueError("a hash table needs at least one slot")
        live = [
            (k, v)
            for k, v in zip(self._keys, self._vals)
            if k is not _EMPTY and k is not _DELETED
        ]
        self._keys = [_EMPTY] * nelements
        self._vals = [0] * nelements
        self._size = 0
        for k, v in live:
            self.insert(k, v)

    def insert(self, key: int, val: int) -> None:
        """Add a key/value pair; an existing entry with the same key is kept."""
        if self._size > self.nelements // 2:
            self.resize(2 * self.nelements)
        for i in self._probe(key):
            if self._keys[i] is _EMPTY or self._keys[i] is _DELETED:
                self._keys[i] = key
                self._vals[i] = val
                self._size += 1
                return
        raise RuntimeError("hash table is full")

    def delete(self, key: int) -> None:
        """Remove one entry with ``key``; do nothing if there is none."""
        for i in self._probe(key):
            k = self._keys[i]
            if k is not _EMPTY and k is not _DELETED and k == key:
                self._keys[i] = _DELETED
                self._size -= 1
                return

    def search(self, key: int) -> int | None:
        """Return the value stored with ``key``, or None if it is absent."""
        for i in self._probe(key):
            k = self._keys[i]
            if k is _EMPTY:
                return None
            if k is not _DELETED and k == key:
                return self._vals[i]
        return None

    def find_all(self, key: int) -> Iterator[int]:
        """Yield the values of every entry stored with ``key``."""
        for i in self._probe(key):
            k = self._keys[i]
            if k is _EMPTY:
                return
            if k is not _DELETED and k == key:
                yield self._vals[i]

    def search_and_delete(self, key: int) -> int:
        """Remove one entry with ``key`` and return its value.

        Raises KeyError when the key is not in the table.
        """
        for i in self._probe(key):
            k = self._keys[i]
            if k is _EMPTY:
                break
            if k is not _DELETED and k == key:
                self._keys[i] = _DELETED
                self._size -= 1
                return self._vals[i]
        raise KeyError(key)