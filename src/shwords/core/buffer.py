"""Growable byte storage shared by splitting and joining."""

from __future__ import annotations

# First allocation size; every later growth doubles the capacity.
INITIAL_CAPACITY = 256


class Buffer:
    """Append-only byte store that is reused across many scans and joins.

    ``count`` is the number of meaningful bytes, ``capacity`` the allocated
    size of ``data``. ``reset()`` forgets the contents but keeps the
    allocation; ``release()`` drops the allocation too.

    Views returned by ``view()`` and ``cstring()`` alias ``data`` and are only
    valid until the next mutating call.
    """

    __slots__ = ("data", "count", "capacity")

    def __init__(self) -> None:
        self.data = bytearray()
        self.count = 0
        self.capacity = 0

    def __len__(self) -> int:
        return self.count

    def _grow(self) -> None:
        if self.capacity == 0:
            capacity = INITIAL_CAPACITY
        else:
            capacity = self.capacity * 2
        # A fresh array instead of resizing in place: a bytearray with live
        # memoryviews exported cannot be resized.
        data = bytearray(capacity)
        data[: self.count] = self.data[: self.count]
        self.data = data
        self.capacity = capacity

    def append(self, byte: int) -> None:
        """Append a single byte, doubling the capacity when full."""
        if self.count >= self.capacity:
            self._grow()
        self.data[self.count] = byte
        self.count += 1

    def extend(self, chunk: bytes) -> None:
        for byte in chunk:
            self.append(byte)

    def terminate(self) -> None:
        """Append the NUL terminator."""
        self.append(0)

    def reset(self) -> None:
        # Important: data and capacity stay untouched so the allocation is reused.
        self.count = 0

    def release(self) -> None:
        """Drop the storage and zero every field. Safe to call repeatedly."""
        self.data = bytearray()
        self.count = 0
        self.capacity = 0

    def view(self, end: int | None = None) -> memoryview:
        """Borrowed view of the first ``end`` bytes (default: ``count``)."""
        if end is None:
            end = self.count
        return memoryview(self.data)[:end]

    def cstring(self) -> memoryview:
        """Borrowed view of the contents up to and including the first NUL."""
        end = self.data.find(0, 0, self.count)
        if end < 0:
            end = self.count
        else:
            end += 1
        return memoryview(self.data)[:end]

    def tobytes(self) -> bytes:
        return bytes(self.data[: self.count])
