"""Fixed-capacity storage with a runtime-chosen number of slots."""

from __future__ import annotations

from typing import Any, List, Optional, TypeVar

from slotring.storage import BoundedStorage, StorageFull

T = TypeVar("T")

_VACANT = object()


def _next_power_of_two(n: int) -> int:
    return 1 << (n - 1).bit_length()


class BoxedStorage(BoundedStorage[T]):
    """Bounded storage whose keys are slot indices.

    The capacity is rounded up to the next power of two. Freed slots are
    reused last-in, first-out. ``key_bits`` is the width of the key type; its
    all-ones value is reserved as "no key", so the capacity may not exceed it.
    """

    def __init__(self, min_capacity: int, key_bits: int = 32) -> None:
        if min_capacity <= 0:
            raise ValueError("capacity must be > 0")
        if key_bits <= 0:
            raise ValueError("key_bits must be > 0")
        capacity = _next_power_of_two(min_capacity)
        if capacity > (1 << key_bits) - 1:
            raise ValueError("capacity exceeds key type maximum")
        self._capacity = capacity
        self._key_bits = key_bits
        self._slots: List[Any] = [_VACANT] * capacity
        self._free: List[int] = list(range(capacity))

    def _index(self, key: Any) -> int:
        """Return the slot index for an occupied ``key``; raise ``KeyError`` otherwise."""
        if (
            not isinstance(key, int)
            or isinstance(key, bool)
            or not 0 <= key < self._capacity
            or self._slots[key] is _VACANT
        ):
            raise KeyError(key)
        return key

    def try_insert(self, value: T) -> int:
        """Store ``value`` in a free slot and return its key.

        Raises ``StorageFull`` carrying ``value`` when no slot is free.
        """
        if not self._free:
            raise StorageFull(value)
        key = self._free.pop()
        self._slots[key] = value
        return key

    def capacity(self) -> int:
        """Return the total number of slots."""
        return self._capacity

    def remove(self, key: Any) -> Optional[T]:
        """Remove and return the value at ``key``, or ``None`` if absent."""
        try:
            return self.pop(key)
        except KeyError:
            return None

    def get(self, key: Any) -> Optional[T]:
        """Return the value at ``key``, or ``None`` if absent."""
        try:
            return self[key]
        except KeyError:
            return None

    def __getitem__(self, key: Any) -> T:
        return self._slots[self._index(key)]

    def __setitem__(self, key: Any, value: T) -> None:
        """Replace the value in an occupied slot; raise ``KeyError`` if vacant."""
        self._slots[self._index(key)] = value

    def pop(self, key: Any) -> T:
        """Remove and return the value at ``key``; raise ``KeyError`` if absent."""
        index = self._index(key)
        value = self._slots[index]
        self._slots[index] = _VACANT
        self._free.append(index)
        return value

    def __len__(self) -> int:
        return self._capacity - len(self._free)

    def clear(self) -> None:
        """Drop every stored value and make all slots free again.

        Any structure still holding keys into this storage is left with
        stale keys.
        """
        self._slots = [_VACANT] * self._capacity
        self._free = list(range(self._capacity))

    def __repr__(self) -> str:
        return (
            f"BoxedStorage(len={len(self)}, capacity={self._capacity}, "
            f"key_bits={self._key_bits})"
        )