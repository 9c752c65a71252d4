"""Bounded single-producer, single-consumer ring buffer.

Each slot carries a lap counter next to its data. A lap of zero means the
slot is empty; a lap of ``n`` means the slot holds a value written during
lap ``n`` (counted from one). The producer writes the value before it
publishes the lap, and the consumer reads the value before it resets the
lap to zero. Each side only ever looks at the slot it is about to use.

One thread may push and another may pop at the same time. Every push goes
through one ``Producer`` and every pop through one ``Consumer``.
"""

from __future__ import annotations

from typing import Any, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class QueueFull(Exception):
    """Raised when a push finds the ring buffer full.

    The value that could not be pushed is kept so the caller can retry.
    """

    def __init__(self, value: Any) -> None:
        super().__init__("ring buffer is full")
        self.value = value

    def into_inner(self) -> Any:
        """Return the value that could not be pushed."""
        return self.value

    def __str__(self) -> str:
        return "ring buffer is full"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueueFull):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(("QueueFull", self.value))


class _Shared:
    """Slot storage and liveness flags shared by both halves."""

    __slots__ = ("laps", "data", "producer_alive", "consumer_alive")

    def __init__(self, capacity: int) -> None:
        self.laps: List[int] = [0] * capacity
        self.data: List[Any] = [None] * capacity
        self.producer_alive = True
        self.consumer_alive = True

    def release_if_unused(self) -> None:
        """Drop any values still in the slots once both halves are closed."""
        if not self.producer_alive and not self.consumer_alive:
            capacity = len(self.laps)
            self.data = [None] * capacity
            self.laps = [0] * capacity


def ring_buffer(capacity: int) -> Tuple["Producer[Any]", "Consumer[Any]"]:
    """Create a ring buffer and return its ``(producer, consumer)`` pair.

    The capacity is rounded up to the next power of two. Raises
    ``ValueError`` if ``capacity`` is not positive.
    """
    if capacity <= 0:
        raise ValueError("capacity must be non-zero")
    rounded = 1 << (capacity - 1).bit_length()
    shift = rounded.bit_length() - 1
    shared = _Shared(rounded)
    return Producer(shared, rounded - 1, shift), Consumer(shared, rounded - 1, shift)


class Producer(Generic[T]):
    """The pushing half of a ring buffer."""

    def __init__(self, shared: _Shared, mask: int, shift: int) -> None:
        self._shared = shared
        self._mask = mask
        self._shift = shift
        self._tail = 0
        self._closed = False

    def push(self, value: T) -> None:
        """Append ``value``; raise ``QueueFull`` carrying it if the buffer is full."""
        if self._closed:
            raise RuntimeError("producer is closed")
        shared = self._shared
        tail = self._tail
        index = tail & self._mask
        if shared.laps[index] != 0:
            raise QueueFull(value)
        shared.data[index] = value
        shared.laps[index] = (tail >> self._shift) + 1
        self._tail = tail + 1

    def capacity(self) -> int:
        """Return the number of slots."""
        return 1 << self._shift

    def is_disconnected(self) -> bool:
        """Return ``True`` if the consumer has been closed."""
        return not self._shared.consumer_alive

    def close(self) -> None:
        """Release this half; closing it twice is harmless."""
        if self._closed:
            return
        self._closed = True
        self._shared.producer_alive = False
        self._shared.release_if_unused()

    def __enter__(self) -> "Producer[T]":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            self.close()
        except AttributeError:
            pass

    def __repr__(self) -> str:
        return f"Producer(capacity={self.capacity()}, ...)"


class Consumer(Generic[T]):
    """The popping half of a ring buffer."""

    def __init__(self, shared: _Shared, mask: int, shift: int) -> None:
        self._shared = shared
        self._mask = mask
        self._shift = shift
        self._head = 0
        self._closed = False

    def pop(self) -> Optional[T]:
        """Remove and return the oldest value, or ``None`` if the buffer is empty.

        A pushed ``None`` cannot be told apart from an empty buffer.
        """
        if self._closed:
            raise RuntimeError("consumer is closed")
        shared = self._shared
        head = self._head
        index = head & self._mask
        if shared.laps[index] != (head >> self._shift) + 1:
            return None
        value = shared.data[index]
        shared.data[index] = None
        shared.laps[index] = 0
        self._head = head + 1
        return value

    def capacity(self) -> int:
        """Return the number of slots."""
        return 1 << self._shift

    def is_disconnected(self) -> bool:
        """Return ``True`` if the producer has been closed."""
        return not self._shared.producer_alive

    def close(self) -> None:
        """Release this half; closing it twice is harmless."""
        if self._closed:
            return
        self._closed = True
        self._shared.consumer_alive = False
        self._shared.release_if_unused()

    def __enter__(self) -> "Consumer[T]":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            self.close()
        except AttributeError:
            pass

    def __repr__(self) -> str:
        return f"Consumer(capacity={self.capacity()}, ...)"