"""The 16-byte ``xof`` file header."""

from __future__ import annotations

from dataclasses import dataclass

from xftmpl.errors import HeaderError

HEADER_SIZE = 16
MAGIC = b"xof "
SUPPORTED_VERSIONS = (b"0302", b"0303")
TEXT_FORMAT = b"txt "
SUPPORTED_FLOAT_SIZES = (b"0032", b"0064")

# Version and float size are normalized regardless of the input header.
OUTPUT_HEADER = b"xof 0302bin 0064"


@dataclass(slots=True, frozen=True)
class FileHeader:
    version: str
    format: str
    float_size: int


def parse_header(data: bytes | None) -> FileHeader:
    if data is None or len(data) < HEADER_SIZE:
        raise HeaderError("Failed to read file header", field="length")

    magic = data[0:4]
    version = data[4:8]
    fmt = data[8:12]
    float_size = data[12:16]

    if magic != MAGIC:
        raise HeaderError(f"Invalid magic value '{_show(magic)}'", field="magic")
    if version not in SUPPORTED_VERSIONS:
        raise HeaderError(f"Unsupported version '{_show(version)}'", field="version")
    if fmt != TEXT_FORMAT:
        raise HeaderError(
            f"Only support conversion from text encoded X files, not '{_show(fmt)}'",
            field="format",
        )
    if float_size not in SUPPORTED_FLOAT_SIZES:
        raise HeaderError(
            f"Only 32-bit or 64-bit float format supported, not '{_show(float_size)}'",
            field="float_size",
        )

    return FileHeader(
        version=version.decode("ascii"),
        format=fmt.decode("ascii").strip(),
        float_size=int(float_size),
    )


def _show(field: bytes) -> str:
    return field.decode("latin-1")
