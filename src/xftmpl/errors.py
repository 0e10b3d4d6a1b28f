"""Error hierarchy for template tokenization and encoding."""

from __future__ import annotations


class XftmplError(Exception):
    """Base error for everything the compiler reports."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


# --- Input format errors ---


class HeaderError(XftmplError):
    """The 16-byte input header is missing or unsupported."""

    def __init__(self, message: str, *, field: str, cause: Exception | None = None):
        super().__init__(message, cause=cause)
        self.field = field


# --- Lexical errors ---


class LexError(XftmplError):
    """Malformed input found while classifying tokens."""

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        filename: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause=cause)
        self.line = line
        self.filename = filename

    def __str__(self) -> str:
        if self.line is None:
            location = self.filename
        elif self.filename:
            location = f"{self.filename}:{self.line}"
        else:
            location = str(self.line)
        if location is None:
            return f"error: {self.message}"
        return f"{location}: error: {self.message}"


class GuidError(LexError):
    """Truncated GUID or a group that is not hexadecimal of the right width."""

    def __init__(self, message: str, *, field: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field


class StringError(LexError):
    """Unterminated string literal."""


class NumberError(LexError):
    """Numeric literal that does not parse or does not fit."""


class CommentError(LexError):
    """A single '/' where a '//' comment was expected."""


class DirectiveError(LexError):
    """A '#' line that is not terminated by a newline."""


class InvalidCharacterError(LexError):
    """A byte that cannot start any token."""


class NameTooLongError(LexError):
    """Identifier over the configured length limit in strict mode."""


# --- Resource and configuration errors ---


class ResourceError(XftmplError):
    """Reading the input or writing the output failed."""


class ConfigurationError(XftmplError):
    """Options are inconsistent, e.g. header output without a variable name."""
