import gc
import weakref

import pytest

from slotring.boxed import BoxedStorage
from slotring.storage import StorageFull


def test_new_is_empty():
    storage = BoxedStorage(16)
    assert storage.is_empty()
    assert not storage.is_full()
    assert len(storage) == 0
    assert storage.capacity() == 16


@pytest.mark.parametrize("requested, expected", [(100, 128), (1000, 1024), (1, 1), (16, 16)])
def test_capacity_rounds_to_power_of_two(requested, expected):
    assert BoxedStorage(requested).capacity() == expected


def test_insert_get_remove():
    storage = BoxedStorage(16)
    key = storage.try_insert(42)
    assert len(storage) == 1
    assert storage.get(key) == 42

    assert storage.remove(key) == 42
    assert storage.get(key) is None
    assert len(storage) == 0


def test_get_mut_via_setitem():
    storage = BoxedStorage(16)
    key = storage.try_insert(10)
    storage[key] = 20
    assert storage.get(key) == 20


def test_setitem_on_vacant_slot_raises():
    storage = BoxedStorage(4)
    with pytest.raises(KeyError):
        storage[0] = 1
    assert storage.get(0) is None
    assert len(storage) == 0


def test_fill_to_capacity():
    storage = BoxedStorage(4)
    keys = [storage.try_insert(v) for v in range(4)]
    assert storage.is_full()

    with pytest.raises(StorageFull) as info:
        storage.try_insert(4)
    assert info.value.into_inner() == 4

    assert [storage.get(k) for k in keys] == [0, 1, 2, 3]


def test_slot_reuse_is_lifo():
    storage = BoxedStorage(4)
    k0 = storage.try_insert(0)
    storage.try_insert(1)
    storage.remove(k0)
    assert storage.try_insert(2) == k0


def test_remove_nonexistent():
    storage = BoxedStorage(16)
    key = storage.try_insert(42)
    storage.remove(key)
    assert storage.remove(key) is None


def test_pop_and_getitem_raise_for_missing():
    storage = BoxedStorage(4)
    key = storage.try_insert("a")
    assert storage.pop(key) == "a"
    with pytest.raises(KeyError):
        storage.pop(key)
    with pytest.raises(KeyError):
        storage[key]


@pytest.mark.parametrize("bad_key", [-1, 4, 100, "0", None, 1.0])
def test_invalid_keys_are_absent(bad_key):
    storage = BoxedStorage(4)
    for v in range(4):
        storage.try_insert(v)
    assert storage.get(bad_key) is None
    assert storage.remove(bad_key) is None
    assert bad_key not in storage
    assert len(storage) == 4


def test_contains():
    storage = BoxedStorage(4)
    key = storage.try_insert("x")
    assert key in storage
    storage.remove(key)
    assert key not in storage


def test_none_value_is_stored():
    storage = BoxedStorage(2)
    key = storage.try_insert(None)
    assert key in storage
    assert len(storage) == 1
    assert storage.pop(key) is None
    assert len(storage) == 0


def test_clear_storage():
    storage = BoxedStorage(16)
    storage.try_insert(1)
    storage.try_insert(2)
    storage.try_insert(3)
    assert len(storage) == 3

    storage.clear()
    assert len(storage) == 0
    assert storage.is_empty()
    assert not storage.is_full()


def test_clear_makes_all_slots_usable():
    storage = BoxedStorage(4)
    for v in range(4):
        storage.try_insert(v)
    storage.clear()
    keys = {storage.try_insert(v) for v in range(4)}
    assert keys == {0, 1, 2, 3}
    assert storage.is_full()


class _Tracked:
    pass


def test_clear_releases_values():
    storage = BoxedStorage(8)
    refs = []
    for _ in range(3):
        item = _Tracked()
        refs.append(weakref.ref(item))
        storage.try_insert(item)
        del item
    storage.clear()
    gc.collect()
    assert [r() for r in refs] == [None, None, None]
    assert storage.is_empty()


def test_dropping_storage_releases_values():
    storage = BoxedStorage(8)
    refs = []
    for _ in range(3):
        item = _Tracked()
        refs.append(weakref.ref(item))
        storage.try_insert(item)
        del item
    assert len(storage) == 3
    del storage
    gc.collect()
    assert sum(r() is None for r in refs) == 3


def test_large_capacity():
    storage = BoxedStorage(4096)
    assert storage.capacity() == 4096
    keys = [storage.try_insert(i) for i in range(4096)]
    assert storage.is_full()
    assert [storage.get(key) for key in keys] == list(range(4096))


def test_u16_key():
    storage = BoxedStorage(100, key_bits=16)
    key = storage.try_insert(42)
    assert storage.get(key) == 42
    assert storage.capacity() == 128


def test_zero_capacity_raises():
    with pytest.raises(ValueError, match="capacity must be > 0"):
        BoxedStorage(0)


@pytest.mark.parametrize("requested", [256, 300])
def test_capacity_exceeding_key_type_raises(requested):
    with pytest.raises(ValueError, match="capacity exceeds key type maximum"):
        BoxedStorage(requested, key_bits=8)


def test_capacity_within_key_type_allowed():
    assert BoxedStorage(128, key_bits=8).capacity() == 128


def test_interleaved_insert_remove_keeps_count():
    storage = BoxedStorage(8)
    live = {}
    for i in range(100):
        if storage.is_full():
            key, value = live.popitem()
            assert storage.pop(key) == value
        key = storage.try_insert(i)
        live[key] = i
        assert len(storage) == len(live)
    assert storage.is_full()
    assert {k: storage[k] for k in live} == live