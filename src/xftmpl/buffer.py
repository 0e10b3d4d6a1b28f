"""Growable byte accumulator for the encoded token stream."""

from __future__ import annotations

import logging

from xftmpl.errors import ResourceError

logger = logging.getLogger(__name__)


class OutputBuffer:
    """Bytes with an explicit capacity that doubles on growth.

    ``capacity >= len(self)`` always holds, and bytes already written are
    never moved out of order or lost when the storage is reallocated.
    """

    def __init__(self, capacity: int = 0):
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._data = bytearray(capacity)
        self._length = 0

    def __len__(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        return len(self._data)

    def append(self, data: bytes) -> None:
        """Store all of ``data`` or raise without changing the buffer."""
        size = len(data)
        needed = self._length + size
        if needed > self.capacity:
            self._grow(max(self.capacity * 2, needed))
        self._data[self._length : needed] = data
        self._length = needed

    def getvalue(self) -> bytes:
        return bytes(self._data[: self._length])

    def view(self) -> memoryview:
        return memoryview(self._data)[: self._length]

    def _grow(self, capacity: int) -> None:
        try:
            grown = bytearray(capacity)
        except MemoryError as exc:
            raise ResourceError(
                f"out of memory growing output buffer to {capacity} bytes", cause=exc
            ) from exc
        grown[: self._length] = self._data[: self._length]
        logger.debug("output buffer grown from %d to %d bytes", self.capacity, capacity)
        self._data = grown
