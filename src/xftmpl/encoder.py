"""Serialize tokens into the binary template wire format.

Every token starts with a little-endian 16-bit code. Names and strings
follow it with a 32-bit length and the raw bytes, integers and floats with
their 32-bit value, GUIDs with the 16-byte structure. Keywords and
punctuation carry no payload.
"""

from __future__ import annotations

import math
import struct

from xftmpl.buffer import OutputBuffer
from xftmpl.tokens import Token, TokenCode

_CODE = struct.Struct("<H")
_LENGTH = struct.Struct("<I")
_INT32 = struct.Struct("<i")
_FLOAT32 = struct.Struct("<f")

CODE_SIZE = _CODE.size


def pack_float32(value: float) -> bytes:
    """Round to single precision; out-of-range values become infinity."""
    try:
        return _FLOAT32.pack(value)
    except OverflowError:
        return _FLOAT32.pack(math.copysign(math.inf, value))


def encode_token(token: Token) -> bytes:
    code = token.code
    head = _CODE.pack(code)
    value = token.value

    if code in (TokenCode.NAME, TokenCode.STRING):
        return head + _LENGTH.pack(len(value)) + bytes(value)
    if code == TokenCode.INTEGER:
        return head + _INT32.pack(value)
    if code == TokenCode.GUID:
        return head + value.to_bytes()
    if code == TokenCode.FLOAT and value is not None:
        return head + pack_float32(value)
    return head


def payload_size(token: Token) -> int:
    """Bytes written after the 16-bit code for ``token``."""
    if token.code in (TokenCode.NAME, TokenCode.STRING):
        return _LENGTH.size + len(token.value)
    if token.code == TokenCode.INTEGER:
        return _INT32.size
    if token.code == TokenCode.GUID:
        return 16
    if token.code == TokenCode.FLOAT and token.value is not None:
        return _FLOAT32.size
    return 0


class Encoder:
    """Appends encoded tokens to an :class:`OutputBuffer` it is given."""

    def __init__(self, buffer: OutputBuffer):
        self.buffer = buffer
        self.count = 0

    def encode(self, token: Token) -> None:
        self.buffer.append(encode_token(token))
        self.count += 1
