"""Render the encoded buffer as raw bytes or as a C header listing."""

from __future__ import annotations

from xftmpl.errors import ConfigurationError

BYTES_PER_LINE = 12


def guard_name(output_name: str) -> str:
    """Header guard suffix: base name, upper-cased, '.' replaced by '_'."""
    base = output_name.rsplit("/", 1)[-1]
    return base.replace(".", "_").upper()


def format_hex_bytes(data: bytes) -> str:
    parts: list[str] = []
    for index, byte in enumerate(data):
        if index % BYTES_PER_LINE == 0:
            parts.append("\n ")
        parts.append(f" 0x{byte:02x},")
    return "".join(parts)


def render_header(
    data: bytes,
    *,
    var_name: str | None,
    size_name: str | None = None,
    source_name: str = "stdin",
    output_name: str = "stdout",
) -> str:
    if not var_name:
        raise ConfigurationError("variable name must be specified with -i or #pragma name")

    guard = guard_name(output_name)
    lines = [
        f"/* File generated automatically from {source_name}; do not edit */\n",
        "\n",
        f"#ifndef __WINE_{guard}\n",
        f"#define __WINE_{guard}\n",
        "\n",
        f"unsigned char {var_name}[] = {{",
        format_hex_bytes(data),
        "\n};\n\n",
    ]
    if size_name:
        lines.append(f"#define {size_name} {len(data)}\n\n")
    lines.append(f"#endif /* __WINE_{guard} */\n")
    return "".join(lines)

