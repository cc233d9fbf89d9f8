"""Growable byte buffers whose capacity is drawn from fixed size classes."""

from __future__ import annotations

from upfkit.log import UtltError

__all__ = ["Bufblk", "select_capacity", "SIZE_CLASSES", "SIZE_OF_BUF_RESERVED"]

SIZE_OF_BUF_RESERVED = 4
SIZE_CLASSES = (64, 128, 256, 512, 1024, 2048, 4096, 8192, 16384, 32768, 65536)


def select_capacity(size: int) -> int:
    """Return the smallest size class that holds ``size`` bytes."""
    for capacity in SIZE_CLASSES:
        if size <= capacity:
            return capacity
    raise UtltError(f"The size for Buffer block is too big : size[{size}]")


class Bufblk:
    """A byte buffer with a capacity (``size``) and a used length (``length``)."""

    def __init__(self, num: int, size: int) -> None:
        self.size = select_capacity(num * size)
        self.length = 0
        self._buf = bytearray(self.size + SIZE_OF_BUF_RESERVED)

    def __len__(self) -> int:
        return self.length

    def __bytes__(self) -> bytes:
        return self.data()

    def __repr__(self) -> str:
        return f"Bufblk(size={self.size}, length={self.length})"

    def data(self) -> bytes:
        """Return the used part of the buffer."""
        return bytes(self._buf[: self.length])

    def resize(self, num: int, size: int) -> None:
        """Move the contents into a buffer of a new capacity, truncating if smaller."""
        capacity = select_capacity(num * size)
        new_buf = bytearray(capacity + SIZE_OF_BUF_RESERVED)
        keep = min(self.length, capacity)
        new_buf[:keep] = self._buf[:keep]
        self._buf = new_buf
        self.size = capacity
        self.length = keep

    def clear(self) -> None:
        """Forget the contents, keeping the capacity."""
        self.length = 0
        self._buf[0] = 0

    def is_not_enough(self, num: int, size: int) -> bool:
        """Whether ``num * size`` more bytes would not fit."""
        return self.size - self.length < num * size

    def _write(self, data: bytes) -> None:
        end = self.length + len(data)
        self._buf[self.length:end] = data
        self.length = end
        self._buf[end] = 0

    def append_bytes(self, data: bytes) -> None:
        """Append raw bytes, growing the buffer if needed."""
        data = bytes(data)
        if self.is_not_enough(1, len(data)):
            self.resize(1, self.size + len(data))
        self._write(data)

    def append_str(self, text: str) -> None:
        """Append text encoded as UTF-8."""
        self.append_bytes(text.encode("utf-8"))

    def append_buf(self, other: Bufblk) -> None:
        """Append the used contents of another buffer."""
        self.append_bytes(other.data())

    def append_fmt(self, fmt: str, *args) -> None:
        """Append a printf-style formatted string, doubling capacity until it fits."""
        try:
            text = (fmt % args if args else fmt).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise UtltError(f"Buffer Fmt error : {exc}") from exc
        while len(text) + self.length >= self.size:
            self.resize(1, self.size << 1)
        self._write(text)

    def append(self, num: int, size: int) -> None:
        """Append ``num * size`` zero bytes."""
        total = num * size
        if self.is_not_enough(num, size):
            self.resize(1, self.size + total)
        self._write(bytes(total))