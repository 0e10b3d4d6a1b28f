"""Classify template text into tokens, one token per call."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from xftmpl.directives import TEXT_ENCODING, TEXT_ERRORS, DirectiveState, apply_directive
from xftmpl.errors import (
    CommentError,
    DirectiveError,
    GuidError,
    InvalidCharacterError,
    NameTooLongError,
    NumberError,
    StringError,
)
from xftmpl.guid import GUID_TEXT_LENGTH, Guid, parse_guid
from xftmpl.source import NEWLINE, ByteSource
from xftmpl.tokens import PUNCTUATION, Token, lookup_keyword

logger = logging.getLogger(__name__)

WHITESPACE = frozenset(b" \t\r\n")

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


@dataclass(slots=True, frozen=True)
class LexerOptions:
    # Identifier bytes kept; the rest of an over-long name is consumed and dropped.
    name_limit: int = 512
    # Raise NameTooLongError instead of truncating.
    strict_names: bool = False


def _is_digit(byte: int) -> bool:
    return 0x30 <= byte <= 0x39


def _is_alpha(byte: int) -> bool:
    return 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


def _is_name_start(byte: int) -> bool:
    return _is_alpha(byte) or byte == 0x5F


def _is_name_part(byte: int) -> bool:
    return _is_alpha(byte) or _is_digit(byte) or byte in b"_-"


def _show(byte: int) -> str:
    if 0x20 <= byte < 0x7F:
        return chr(byte)
    return f"\\x{byte:02x}"


class Lexer:
    def __init__(
        self,
        source: ByteSource,
        directives: DirectiveState | None = None,
        options: LexerOptions | None = None,
    ):
        self.source = source
        self.directives = directives if directives is not None else DirectiveState()
        self.options = options or LexerOptions()

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token

    def next_token(self) -> Token | None:
        """Return the next token, or None once the input is exhausted."""
        while True:
            byte = self.source.next()
            if byte is None:
                return None
            if byte in WHITESPACE:
                continue

            line = self.source.line
            code = PUNCTUATION.get(byte)
            if code is not None:
                return Token.bare(code, line)

            if byte == ord("/"):
                self._skip_comment()
                continue
            if byte == ord("#"):
                self._read_directive()
                continue
            if byte == ord("<"):
                return Token.guid(self._read_guid(), line)
            if byte == ord('"'):
                return Token.string(self._read_string(), line)

            if _is_digit(byte) or byte == ord("-"):
                self.source.pushback(byte)
                return self._read_number(line)
            if _is_name_start(byte):
                self.source.pushback(byte)
                return self._read_name(line)

            raise self._error(
                InvalidCharacterError, f"invalid character '{_show(byte)}' to start token"
            )

    def _skip_comment(self) -> None:
        if self.source.next() != ord("/"):
            raise self._error(CommentError, "invalid single '/' comment token")
        while True:
            byte = self.source.next()
            if byte is None or byte == NEWLINE:
                return

    def _read_directive(self) -> None:
        text = bytearray()
        while True:
            byte = self.source.next()
            if byte is None:
                raise self._error(DirectiveError, "line too long")
            if byte == NEWLINE:
                break
            text.append(byte)
        if apply_directive(bytes(text), self.directives):
            applied = bytes(text).decode(TEXT_ENCODING, TEXT_ERRORS)
            logger.debug("directive applied: %s", applied.strip())

    def _read_guid(self) -> Guid:
        rest = self.source.read_exact(GUID_TEXT_LENGTH - 1)
        if rest is None:
            raise self._error(GuidError, "truncated GUID")
        try:
            return parse_guid(b"<" + rest)
        except GuidError as exc:
            raise self._error(GuidError, exc.message, field=exc.field) from exc

    def _read_string(self) -> bytes:
        # Escape sequences are kept verbatim; a '"' always ends the string.
        value = bytearray()
        while True:
            byte = self.source.next()
            if byte is None:
                raise self._error(StringError, "unterminated string")
            if byte == ord('"'):
                return bytes(value)
            value.append(byte)

    def _read_number(self, line: int) -> Token:
        text = bytearray()
        seen_dot = False
        while True:
            byte = self.source.next()
            if byte is None:
                break
            if not text and byte == ord("-"):
                pass
            elif not seen_dot and byte == ord("."):
                seen_dot = True
            elif not _is_digit(byte):
                self.source.pushback(byte)
                break
            text.append(byte)

        literal = text.decode("ascii")
        if seen_dot:
            try:
                value = float(literal)
            except ValueError:
                raise self._error(NumberError, "invalid float token") from None
            return Token.floating(value, line)

        try:
            value = int(literal, 10)
        except ValueError:
            raise self._error(NumberError, "invalid integer token") from None
        if not INT32_MIN <= value <= INT32_MAX:
            raise self._error(NumberError, f"integer {literal} out of 32-bit range")
        return Token.integer(value, line)

    def _read_name(self, line: int) -> Token:
        limit = self.options.name_limit
        name = bytearray()
        dropped = 0
        while True:
            byte = self.source.next()
            if byte is None:
                break
            if not _is_name_part(byte):
                self.source.pushback(byte)
                break
            if len(name) < limit:
                name.append(byte)
            else:
                dropped += 1

        if dropped:
            if self.options.strict_names:
                raise self._error(
                    NameTooLongError,
                    f"name longer than {limit} bytes: '{name[:32].decode('ascii')}...'",
                )
            logger.warning(
                "%s:%d: name truncated to %d bytes (%d dropped)",
                self.source.name or "input",
                line,
                limit,
                dropped,
            )

        code = lookup_keyword(bytes(name))
        if code is not None:
            return Token.bare(code, line)
        return Token.name(bytes(name), line)

    def _error(self, error_cls, message: str, **kwargs):
        return error_cls(message, line=self.source.line, filename=self.source.name, **kwargs)


def lex(data: bytes, name: str | None = None, options: LexerOptions | None = None) -> list[Token]:
    """Tokenize template text that has no file header."""
    return list(Lexer(ByteSource(data, name=name), options=options))
