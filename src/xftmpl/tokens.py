"""Token codes, the Token value type and the reserved-word table."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from enum import IntEnum

from xftmpl.guid import Guid


class TokenCode(IntEnum):
    """16-bit wire code written in front of every token."""

    NAME = 1
    STRING = 2
    INTEGER = 3
    GUID = 5
    INTEGER_LIST = 6
    FLOAT_LIST = 7
    OPEN_BRACE = 10
    CLOSE_BRACE = 11
    OPEN_PAREN = 12
    CLOSE_PAREN = 13
    OPEN_BRACKET = 14
    CLOSE_BRACKET = 15
    OPEN_ANGLE = 16
    CLOSE_ANGLE = 17
    DOT = 18
    COMMA = 19
    SEMICOLON = 20
    TEMPLATE = 31
    WORD = 40
    DWORD = 41
    FLOAT = 42
    DOUBLE = 43
    CHAR = 44
    UCHAR = 45
    SWORD = 46
    SDWORD = 47
    VOID = 48
    LPSTR = 49
    UNICODE = 50
    CSTRING = 51
    ARRAY = 52


# Upper-case spellings, sorted for binary search.
KEYWORDS: tuple[tuple[str, TokenCode], ...] = (
    ("ARRAY", TokenCode.ARRAY),
    ("CHAR", TokenCode.CHAR),
    ("CSTRING", TokenCode.CSTRING),
    ("DOUBLE", TokenCode.DOUBLE),
    ("DWORD", TokenCode.DWORD),
    ("FLOAT", TokenCode.FLOAT),
    ("SDWORD", TokenCode.SDWORD),
    ("STRING", TokenCode.LPSTR),
    ("SWORD", TokenCode.SWORD),
    ("TEMPLATE", TokenCode.TEMPLATE),
    ("UCHAR", TokenCode.UCHAR),
    ("UNICODE", TokenCode.UNICODE),
    ("VOID", TokenCode.VOID),
    ("WORD", TokenCode.WORD),
)

_KEYWORD_SPELLINGS = tuple(word for word, _ in KEYWORDS)

KEYWORD_CODES = frozenset(code for _, code in KEYWORDS)

PUNCTUATION: dict[int, TokenCode] = {
    ord("{"): TokenCode.OPEN_BRACE,
    ord("}"): TokenCode.CLOSE_BRACE,
    ord("["): TokenCode.OPEN_BRACKET,
    ord("]"): TokenCode.CLOSE_BRACKET,
    ord("("): TokenCode.OPEN_PAREN,
    ord(")"): TokenCode.CLOSE_PAREN,
    ord(","): TokenCode.COMMA,
    ord(";"): TokenCode.SEMICOLON,
    ord("."): TokenCode.DOT,
}


def lookup_keyword(spelling: str | bytes) -> TokenCode | None:
    """Return the keyword code for ``spelling`` (any letter case), or None."""
    if isinstance(spelling, bytes):
        spelling = spelling.decode("ascii", errors="replace")
    key = spelling.upper()
    index = bisect_left(_KEYWORD_SPELLINGS, key)
    if index < len(_KEYWORD_SPELLINGS) and _KEYWORD_SPELLINGS[index] == key:
        return KEYWORDS[index][1]
    return None


@dataclass(slots=True, frozen=True)
class Token:
    code: TokenCode
    value: bytes | int | float | Guid | None = None
    line: int = 0

    @staticmethod
    def name(value: bytes, line: int = 0) -> Token:
        return Token(TokenCode.NAME, value, line)

    @staticmethod
    def string(value: bytes, line: int = 0) -> Token:
        return Token(TokenCode.STRING, value, line)

    @staticmethod
    def integer(value: int, line: int = 0) -> Token:
        return Token(TokenCode.INTEGER, value, line)

    @staticmethod
    def floating(value: float, line: int = 0) -> Token:
        return Token(TokenCode.FLOAT, value, line)

    @staticmethod
    def guid(value: Guid, line: int = 0) -> Token:
        return Token(TokenCode.GUID, value, line)

    @staticmethod
    def bare(code: TokenCode, line: int = 0) -> Token:
        return Token(code, None, line)

    @property
    def is_keyword(self) -> bool:
        return self.code in KEYWORD_CODES and self.value is None
