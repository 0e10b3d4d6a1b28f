"""Compose header check, lexing, encoding and emission into one run."""

from __future__ import annotations

import logging
import sys
from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from xftmpl.buffer import OutputBuffer
from xftmpl.directives import TEXT_ENCODING, TEXT_ERRORS, DirectiveState
from xftmpl.emit import render_header
from xftmpl.encoder import Encoder
from xftmpl.errors import ResourceError
from xftmpl.header import HEADER_SIZE, OUTPUT_HEADER, FileHeader, parse_header
from xftmpl.lexer import Lexer, LexerOptions
from xftmpl.output import STDIO_NAME, output_destination
from xftmpl.source import ByteSource

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class CompileOptions:
    header: bool = False
    var_name: str | None = None
    size_name: str | None = None
    lexer: LexerOptions = field(default_factory=LexerOptions)

    @property
    def header_mode(self) -> bool:
        return self.header or self.var_name is not None


@dataclass(slots=True)
class CompileResult:
    data: bytes
    header: FileHeader
    directives: DirectiveState
    token_count: int


def read_header(source: ByteSource) -> FileHeader:
    return parse_header(source.read_exact(HEADER_SIZE))


def encode_source(
    source: ByteSource,
    file_header: FileHeader,
    options: CompileOptions | None = None,
) -> CompileResult:
    """Tokenize everything after the file header into a fresh buffer."""
    options = options or CompileOptions()
    directives = DirectiveState(var_name=options.var_name, size_name=options.size_name)
    buffer = OutputBuffer()
    buffer.append(OUTPUT_HEADER)

    encoder = Encoder(buffer)
    for token in Lexer(source, directives, options.lexer):
        encoder.encode(token)

    logger.debug(
        "%s: encoded %d tokens into %d bytes",
        source.name or "input",
        encoder.count,
        len(buffer),
    )
    return CompileResult(
        data=buffer.getvalue(),
        header=file_header,
        directives=directives,
        token_count=encoder.count,
    )


def compile_template(
    data: bytes | BinaryIO,
    options: CompileOptions | None = None,
    name: str | None = None,
) -> CompileResult:
    """Compile a complete text template, header included, to binary tokens."""
    source = ByteSource(data, name=name)
    return encode_source(source, read_header(source), options)


def render(
    result: CompileResult,
    options: CompileOptions | None = None,
    source_name: str = "stdin",
    output_name: str = "stdout",
) -> bytes:
    """The bytes to write: the raw stream, or the C header listing of it."""
    options = options or CompileOptions()
    if not options.header_mode:
        return result.data
    text = render_header(
        result.data,
        var_name=result.directives.var_name,
        size_name=result.directives.size_name,
        source_name=source_name,
        output_name=output_name,
    )
    return text.encode(TEXT_ENCODING, TEXT_ERRORS)


def compile_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    options: CompileOptions | None = None,
) -> CompileResult:
    """Compile ``input_path`` (``-`` for stdin) and write to ``output_path``.

    The input header is checked before the output is created. A named
    output file is removed again if anything fails after that point.
    """
    options = options or CompileOptions()
    if str(input_path) == STDIO_NAME:
        source_name = "stdin"
        opened = nullcontext(sys.stdin.buffer)
    else:
        source_name = str(input_path)
        try:
            opened = open(input_path, "rb")
        except OSError as exc:
            raise ResourceError(f"{input_path}: {exc.strerror or exc}", cause=exc) from exc

    if output_path is None or str(output_path) == STDIO_NAME:
        output_name = "stdout"
    else:
        output_name = str(output_path)

    with opened as stream:
        source = ByteSource(stream, name=source_name)
        file_header = read_header(source)
        with output_destination(output_path) as out:
            result = encode_source(source, file_header, options)
            out.write(render(result, options, source_name=source_name, output_name=output_name))

    logger.info("wrote %d bytes of token data to %s", len(result.data), output_name)
    return result

