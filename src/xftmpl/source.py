"""Pull-based byte cursor with one byte of push-back and line tracking."""

from __future__ import annotations

import io
from typing import BinaryIO

from xftmpl.errors import ResourceError

NEWLINE = 0x0A


class ByteSource:
    def __init__(self, stream: BinaryIO | bytes, name: str | None = None):
        if isinstance(stream, (bytes, bytearray, memoryview)):
            stream = io.BytesIO(bytes(stream))
        self._stream = stream
        self._pending: int | None = None
        self.name = name
        self.line = 1
        self.offset = 0
        self.at_eof = False

    def next(self) -> int | None:
        """Return the next byte, or None at end of input."""
        if self._pending is not None:
            byte, self._pending = self._pending, None
        else:
            chunk = self._read(1)
            if not chunk:
                self.at_eof = True
                return None
            byte = chunk[0]
        self.offset += 1
        if byte == NEWLINE:
            self.line += 1
        return byte

    def pushback(self, byte: int | None) -> None:
        """Return the last byte read to the front of the stream.

        Pushing back None (end of input) is a no-op so callers can hand back
        whatever ``next`` gave them.
        """
        if byte is None:
            return
        if self._pending is not None:
            raise RuntimeError("only one byte of push-back is supported")
        self._pending = byte
        self.offset -= 1
        self.at_eof = False
        if byte == NEWLINE:
            self.line -= 1

    def read_exact(self, size: int) -> bytes | None:
        """Read exactly ``size`` bytes, or return None if the input is shorter."""
        data = b""
        if size > 0 and self._pending is not None:
            data, self._pending = bytes([self._pending]), None
        if len(data) < size:
            data += self._read(size - len(data))
        self.offset += len(data)
        self.line += data.count(NEWLINE)
        if len(data) < size:
            self.at_eof = True
            return None
        return data

    def _read(self, size: int) -> bytes:
        try:
            return self._stream.read(size)
        except OSError as exc:
            raise ResourceError(f"{self.name or 'input'}: {exc}", cause=exc) from exc
