"""GUID literals: ``<XXXXXXXX-XXXX-XXXX-XXXX-XXXXXXXXXXXX>``."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from xftmpl.errors import GuidError

# data1, data2, data3, then the eight data4 bytes as they sit in memory.
_PACKED = struct.Struct("<IHH8s")

# (field, hex digits, separator that must follow)
_GROUPS = (
    ("data1", 8, "-"),
    ("data2", 4, "-"),
    ("data3", 4, "-"),
    ("data4[0:2]", 4, "-"),
    ("data4[2:8]", 12, ">"),
)

GUID_TEXT_LENGTH = 38

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@dataclass(slots=True, frozen=True)
class Guid:
    data1: int
    data2: int
    data3: int
    data4: bytes

    def __post_init__(self):
        if len(self.data4) != 8:
            raise ValueError("data4 must be exactly 8 bytes")

    def __str__(self) -> str:
        return "<%08X-%04X-%04X-%s-%s>" % (
            self.data1,
            self.data2,
            self.data3,
            self.data4[:2].hex().upper(),
            self.data4[2:].hex().upper(),
        )

    def to_bytes(self) -> bytes:
        return _PACKED.pack(self.data1, self.data2, self.data3, self.data4)

    @classmethod
    def from_bytes(cls, data: bytes) -> Guid:
        data1, data2, data3, data4 = _PACKED.unpack(data)
        return cls(data1, data2, data3, data4)


def parse_guid(text: str | bytes) -> Guid:
    """Parse the 38-character bracketed form.

    Every group must have exactly its fixed number of hex digits and be
    followed by its separator; the first group that does not is named in
    the raised :class:`GuidError`.
    """
    if isinstance(text, bytes):
        text = text.decode("latin-1")
    if len(text) < GUID_TEXT_LENGTH:
        raise GuidError(f"truncated GUID '{text}'", field="length")
    if text[0] != "<":
        raise GuidError(f"invalid GUID '{text}': expected '<'", field="open")

    values: list[int] = []
    index = 1
    for field, width, separator in _GROUPS:
        digits = text[index : index + width]
        if not all(char in _HEX_DIGITS for char in digits):
            raise GuidError(
                f"invalid GUID '{text}': {field} must be {width} hex digits",
                field=field,
            )
        values.append(int(digits, 16))
        index += width
        if text[index] != separator:
            raise GuidError(
                f"invalid GUID '{text}': expected '{separator}' after {field}",
                field=field,
            )
        index += 1

    if index != len(text):
        raise GuidError(f"invalid GUID '{text}': trailing characters", field="close")

    data1, data2, data3, head, tail = values
    return Guid(data1, data2, data3, head.to_bytes(2, "big") + tail.to_bytes(6, "big"))
