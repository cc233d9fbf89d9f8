"""Chained hash table with a seeded multiplicative string hash."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable, Iterator

__all__ = ["HashTable", "default_hash", "INITIAL_MAX"]

INITIAL_MAX = 15  # 2**n - 1
_MASK32 = 0xFFFFFFFF

HashFunc = Callable[[Any], int]


def _key_bytes(key: Any) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f"hash key must be str or bytes, not {type(key).__name__}")


def _hash_bytes(data: bytes, seed: int) -> int:
    value = seed
    for byte in data:
        value = (value * 33 + byte) & _MASK32
    return value


def default_hash(key: Any) -> int:
    """Hash a str or bytes key with ``h = h * 33 + byte`` from zero, in 32 bits."""
    return _hash_bytes(_key_bytes(key), 0)


@dataclass(slots=True)
class _Entry:
    hash: int
    key: Any
    kbytes: bytes
    value: Any


class HashTable:
    """A hash table keyed by str or bytes; setting a value of None deletes the key."""

    def __init__(self, hash_func: HashFunc | None = None) -> None:
        self._hash_func = hash_func
        self._seed = random.getrandbits(32)
        self._max = INITIAL_MAX
        self._buckets: list[list[_Entry]] = [[] for _ in range(self._max + 1)]
        self._count = 0

    def _hash(self, key: Any, kbytes: bytes) -> int:
        if self._hash_func is not None:
            return int(self._hash_func(key)) & _MASK32
        return _hash_bytes(kbytes, self._seed)

    def _find(self, key: Any) -> tuple[list[_Entry], _Entry | None, int, bytes]:
        kbytes = _key_bytes(key)
        value_hash = self._hash(key, kbytes)
        bucket = self._buckets[value_hash & self._max]
        for entry in bucket:
            if entry.hash == value_hash and entry.kbytes == kbytes:
                return bucket, entry, value_hash, kbytes
        return bucket, None, value_hash, kbytes

    def _add(self, bucket: list[_Entry], value_hash: int, key: Any,
             kbytes: bytes, value: Any) -> None:
        bucket.append(_Entry(value_hash, key, kbytes, value))
        self._count += 1

    def _expand_if_needed(self) -> None:
        if self._count <= self._max:
            return
        new_max = self._max * 2 + 1
        new_buckets: list[list[_Entry]] = [[] for _ in range(new_max + 1)]
        for bucket in self._buckets:
            for entry in bucket:
                new_buckets[entry.hash & new_max].append(entry)
        self._buckets = new_buckets
        self._max = new_max

    def set(self, key: Any, value: Any) -> None:
        """Associate ``value`` with ``key``; a value of None removes the key."""
        bucket, entry, value_hash, kbytes = self._find(key)
        if value is None:
            if entry is not None:
                bucket.remove(entry)
                self._count -= 1
            return
        if entry is None:
            self._add(bucket, value_hash, key, kbytes, value)
        else:
            entry.value = value
        self._expand_if_needed()

    def get(self, key: Any) -> Any:
        """Return the value for ``key``, or None."""
        _, entry, _, _ = self._find(key)
        return entry.value if entry is not None else None

    def get_or_set(self, key: Any, value: Any) -> Any:
        """Return the existing value, or store ``value`` if absent and return it."""
        bucket, entry, value_hash, kbytes = self._find(key)
        if entry is None:
            if value is None:
                return None
            self._add(bucket, value_hash, key, kbytes, value)
            result = value
        else:
            result = entry.value
        self._expand_if_needed()
        return result

    def count(self) -> int:
        """Number of entries."""
        return self._count

    def __len__(self) -> int:
        return self._count

    def __contains__(self, key: Any) -> bool:
        return self._find(key)[1] is not None

    def clear(self) -> None:
        """Remove every entry."""
        for key, _ in self.items():
            self.set(key, None)

    def items(self) -> Iterator[tuple[Any, Any]]:
        """Yield ``(key, value)`` pairs in bucket order, from a snapshot."""
        snapshot = [(e.key, e.value) for bucket in self._buckets for e in bucket]
        return iter(snapshot)

    def __iter__(self) -> Iterator[Any]:
        return (key for key, _ in self.items())

    def do(self, callback: Callable[[Any, Any, int, Any], Any], rec: Any = None) -> bool:
        """Call ``callback(rec, key, klen, value)`` per entry until it returns false.

        Returns False if the callback stopped the scan, True otherwise.
        """
        for bucket in self._buckets:
            for entry in list(bucket):
                if not callback(rec, entry.key, len(entry.kbytes), entry.value):
                    return False
        return True