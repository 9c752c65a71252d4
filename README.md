# slotring

Two small building blocks for programs that want predictable, pre-sized
containers:

- **Slot storage with stable keys** (`slotring.storage`, `slotring.boxed`).
  Values are inserted once and addressed by a key that stays valid until
  the value is removed, so node-based structures can refer to each other by
  key instead of by object reference.
- **A single-producer, single-consumer ring buffer** (`slotring.ring`). A
  bounded FIFO split into a `Producer` half and a `Consumer` half; one
  thread may push while another pops.

## Installation

```
pip install slotring
```

## Slot storage

`BoxedStorage` has a fixed number of slots, chosen when it is created and
rounded up to the next power of two. Keys are slot indices, and freed slots
are reused last-in, first-out.

```python
from slotring.boxed import BoxedStorage
from slotring.storage import StorageFull

storage = BoxedStorage(1000)
assert storage.capacity() == 1024

key = storage.try_insert(42)
assert storage.get(key) == 42
assert storage[key] == 42
assert key in storage

storage[key] = 43
assert storage.remove(key) == 43
assert storage.get(key) is None
assert storage.remove(key) is None
```

`get` and `remove` return `None` for a missing key; `storage[key]`, `pop`
and assignment to `storage[key]` raise `KeyError` instead. Assignment only
replaces the value in an occupied slot.

When every slot is taken, `try_insert` raises `StorageFull`, which carries
the value that could not be stored:

```python
small = BoxedStorage(1)
small.try_insert("first")
assert small.is_full()
try:
    small.try_insert("second")
except StorageFull as full:
    assert full.into_inner() == "second"
```

`BoxedStorage` also offers `len()`, `is_empty` and `clear`. `clear` drops
every value and frees every slot; keys held elsewhere become stale.

A capacity of zero raises `ValueError`. The optional `key_bits` argument
(default 32) sets the key width; its all-ones value is reserved, so the
rounded capacity must be below `2 ** key_bits`, or `ValueError` is raised.

### Values that carry their own key

`MapStorage` is growable storage for values that know their own key. Give
the value class a `key()` method (subclass `Keyed`) and `insert` files the
value under that key, replacing any value already there:

```python
from dataclasses import dataclass
from slotring.storage import Keyed, MapStorage

@dataclass
class Order(Keyed):
    order_id: int
    price: int

    def key(self):
        return self.order_id

orders = MapStorage()
assert orders.insert(Order(1, 100)) == 1
assert orders[1].price == 100
assert orders.pop(1).price == 100
assert len(orders) == 0
```

The abstract bases `Storage`, `BoundedStorage` and `UnboundedStorage` in
`slotring.storage` describe the shared interface for writing further
storages.

## Ring buffer

```python
from slotring.ring import ring_buffer, QueueFull

producer, consumer = ring_buffer(1024)

producer.push(1)
producer.push(2)
assert consumer.pop() == 1
assert consumer.pop() == 2
assert consumer.pop() is None   # empty
```

- The capacity is rounded up to the next power of two; both halves report
  it through `capacity()`. A capacity of zero raises `ValueError`.
- `push` raises `QueueFull` when the buffer is full; `into_inner()` returns
  the rejected value.
- `pop` returns `None` when nothing is waiting, so `None` itself should not
  be pushed as a message.
- Each half has `close()` and is a context manager. Closing one half makes
  `is_disconnected()` true on the other; using a closed half raises
  `RuntimeError`.

```python
import threading

producer, consumer = ring_buffer(64)

def produce():
    with producer:
        for i in range(10_000):
            while True:
                try:
                    producer.push(i)
                    break
                except QueueFull:
                    pass

thread = threading.Thread(target=produce)
thread.start()
received = []
while len(received) < 10_000:
    value = consumer.pop()
    if value is not None:
        received.append(value)
thread.join()
assert received == list(range(10_000))
```

## What it does not do

`push` and `pop` never wait: there is no blocking or timed variant, and a
caller that wants to wait must retry. The ring buffer is for exactly one
producer and one consumer; it has no multi-producer or multi-consumer mode.

## Running the tests

```
pip install -e ".[test]"
pytest
```