import pytest

from upfkit.hashtable import HashTable, default_hash


def test_set_and_get():
    h = HashTable()
    h.set("key", "value")
    assert h.get("key") == "value"


def test_count_iterate_and_clear():
    h = HashTable()
    for name in ("key_1", "key_2", "key_3", "key_4", "key_5"):
        h.set(name, name)
    assert h.count() == 5
    pairs = list(h.items())
    assert len(pairs) == 5
    for key, value in pairs:
        assert key == value
    h.clear()
    assert h.count() == 0
    assert list(h.items()) == []


def test_get_or_set_sequence():
    h = HashTable()
    assert h.get_or_set("key", "value") == "value"
    assert h.get_or_set("key", "other") == "value"
    h.set("key", None)
    assert h.get("key") is None
    assert h.get_or_set("key", None) is None
    assert h.get_or_set("key", "other") == "other"


def test_replace_keeps_count():
    h = HashTable()
    h.set("a", 1)
    h.set("a", 2)
    assert h.count() == 1
    assert h.get("a") == 2


def test_delete_missing_is_noop():
    h = HashTable()
    h.set("missing", None)
    assert h.count() == 0


def test_expansion_keeps_all_entries():
    h = HashTable()
    for i in range(200):
        h.set(f"k{i}", i)
    assert h.count() == 200
    assert all(h.get(f"k{i}") == i for i in range(200))


def test_bytes_and_str_keys_share_encoding():
    h = HashTable()
    h.set(b"key", "v")
    assert h.get("key") == "v"


def test_custom_hash_with_collisions():
    h = HashTable(lambda key: 0)
    for i in range(40):
        h.set(str(i), i)
    assert h.count() == 40
    assert h.get("17") == 17
    h.set("17", None)
    assert h.get("17") is None
    assert h.count() == 39


def test_default_hash_values():
    assert default_hash("") == 0
    assert default_hash("a") == 97
    assert default_hash("ab") == 97 * 33 + 98
    assert default_hash("ab") == default_hash(b"ab")


def test_default_hash_is_32_bit():
    assert 0 <= default_hash("x" * 100) <= 0xFFFFFFFF


def test_bad_key_type():
    h = HashTable()
    with pytest.raises(TypeError):
        h.set(5, "v")


def test_do_visits_all():
    h = HashTable()
    h.set("one", 1)
    h.set("three", 3)
    seen = []

    def collect(rec, key, klen, value):
        rec.append((key, klen, value))
        return True

    assert h.do(collect, seen) is True
    assert sorted(seen) == [("one", 3, 1), ("three", 5, 3)]


def test_do_stops_early():
    h = HashTable()
    for i in range(5):
        h.set(str(i), i)
    calls = []

    def stop(rec, key, klen, value):
        calls.append(key)
        return False

    assert h.do(stop) is False
    assert len(calls) == 1


def test_do_on_empty_table():
    assert HashTable().do(lambda *a: False) is True