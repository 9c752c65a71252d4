"""Storage abstractions for containers that hand out stable keys.

A storage keeps values under keys that stay valid until the value is
removed, so node-based structures can link entries by key rather than by
reference.

``BoundedStorage`` has a fixed capacity and its insertion can fail with
``StorageFull``. ``UnboundedStorage`` grows as needed and its insertion
always succeeds. ``MapStorage`` is an unbounded storage whose values carry
their own keys through the ``Keyed`` interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Hashable, Optional, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


class StorageFull(Exception):
    """Raised when a fixed-capacity storage has no free slot.

    The value that could not be inserted is kept so the caller can recover it.
    """

    def __init__(self, value: Any) -> None:
        super().__init__("storage is full")
        self.value = value

    def into_inner(self) -> Any:
        """Return the value that could not be inserted."""
        return self.value

    def __str__(self) -> str:
        return "storage is full"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StorageFull):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(("StorageFull", self.value))


class Keyed(ABC):
    """A value that knows its own key."""

    @abstractmethod
    def key(self) -> Hashable:
        """Return the key under which this value is stored."""


class Storage(ABC, Generic[T]):
    """Base storage with stable keys.

    Subclasses provide ``__getitem__``, ``pop`` and ``__len__``; lookups and
    removals that tolerate a missing key are derived from them.
    """

    @abstractmethod
    def __getitem__(self, key: Any) -> T:
        """Return the value at ``key``; raise ``KeyError`` if absent."""

    @abstractmethod
    def pop(self, key: Any) -> T:
        """Remove and return the value at ``key``; raise ``KeyError`` if absent."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of occupied slots."""

    def get(self, key: Any) -> Optional[T]:
        """Return the value at ``key``, or ``None`` if absent."""
        try:
            return self[key]
        except KeyError:
            return None

    def remove(self, key: Any) -> Optional[T]:
        """Remove and return the value at ``key``, or ``None`` if absent."""
        try:
            return self.pop(key)
        except KeyError:
            return None

    def __contains__(self, key: object) -> bool:
        try:
            self[key]
        except KeyError:
            return False
        return True

    def is_empty(self) -> bool:
        """Return ``True`` if no slots are occupied."""
        return len(self) == 0


class BoundedStorage(Storage[T]):
    """Fixed-capacity storage whose insertion can fail."""

    @abstractmethod
    def try_insert(self, value: T) -> Any:
        """Insert ``value`` and return its key; raise ``StorageFull`` when full."""

    @abstractmethod
    def capacity(self) -> int:
        """Return the total number of slots."""

    def is_full(self) -> bool:
        """Return ``True`` if every slot is occupied."""
        return len(self) >= self.capacity()


class UnboundedStorage(Storage[T]):
    """Growable storage whose insertion always succeeds."""

    @abstractmethod
    def insert(self, value: T) -> Any:
        """Insert ``value`` and return its key."""


class MapStorage(UnboundedStorage[T]):
    """Unbounded storage keyed by each value's own ``key()``.

    Inserting a value whose key is already present replaces the old value.
    """

    def __init__(self) -> None:
        self._items: Dict[Hashable, T] = {}

    def insert(self, value: T) -> Hashable:
        """Store ``value`` under ``value.key()`` and return that key."""
        key = value.key()  # type: ignore[attr-defined]
        self._items[key] = value
        return key

    def remove(self, key: Hashable) -> Optional[T]:
        """Remove and return the value at ``key``, or ``None`` if absent."""
        return self._items.pop(key, None)

    def get(self, key: Hashable) -> Optional[T]:
        """Return the value at ``key``, or ``None`` if absent."""
        return self._items.get(key)

    def __getitem__(self, key: Hashable) -> T:
        return self._items[key]

    def pop(self, key: Hashable) -> T:
        """Remove and return the value at ``key``; raise ``KeyError`` if absent."""
        return self._items.pop(key)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self):
        return iter(self._items)

    def __repr__(self) -> str:
        return f"MapStorage(len={len(self._items)})"