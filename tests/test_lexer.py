import pytest

from xftmpl.directives import DirectiveState
from xftmpl.errors import (
    CommentError,
    DirectiveError,
    GuidError,
    InvalidCharacterError,
    NameTooLongError,
    NumberError,
    StringError,
)
from xftmpl.guid import Guid
from xftmpl.lexer import Lexer, LexerOptions, lex
from xftmpl.source import ByteSource
from xftmpl.tokens import KEYWORDS, Token, TokenCode


@pytest.mark.parametrize("spelling, code", KEYWORDS)
def test_reserved_words_are_keywords_in_any_case(spelling, code):
    for variant in (spelling, spelling.lower(), spelling.capitalize(), spelling.swapcase()):
        tokens = lex(variant.encode("ascii"))

        assert tokens == [Token.bare(code, 1)]
        assert tokens[0].is_keyword


def test_identifiers_allow_digits_underscores_and_hyphens():
    tokens = lex(b"_Mesh-Face2 Templates")

    assert tokens == [Token.name(b"_Mesh-Face2", 1), Token.name(b"Templates", 1)]


def test_punctuation_maps_to_fixed_codes():
    tokens = lex(b"{ } [ ] ( ) , ; .")

    assert [token.code for token in tokens] == [
        TokenCode.OPEN_BRACE,
        TokenCode.CLOSE_BRACE,
        TokenCode.OPEN_BRACKET,
        TokenCode.CLOSE_BRACKET,
        TokenCode.OPEN_PAREN,
        TokenCode.CLOSE_PAREN,
        TokenCode.COMMA,
        TokenCode.SEMICOLON,
        TokenCode.DOT,
    ]
    assert all(token.value is None for token in tokens)


def test_template_declaration():
    source = b"TEMPLATE Foo {\n <3D82AB43-62DA-11CF-AB39-0020AF71E433>\n DWORD nValues;\n}\n"

    tokens = lex(source)

    assert tokens == [
        Token.bare(TokenCode.TEMPLATE, 1),
        Token.name(b"Foo", 1),
        Token.bare(TokenCode.OPEN_BRACE, 1),
        Token.guid(
            Guid(0x3D82AB43, 0x62DA, 0x11CF, bytes.fromhex("AB390020AF71E433")), 2
        ),
        Token.bare(TokenCode.DWORD, 3),
        Token.name(b"nValues", 3),
        Token.bare(TokenCode.SEMICOLON, 3),
        Token.bare(TokenCode.CLOSE_BRACE, 4),
    ]


class TestNumbers:
    def test_integers_and_floats(self):
        tokens = lex(b"42 -7 3.5 -0.25 1.")

        assert tokens == [
            Token.integer(42, 1),
            Token.integer(-7, 1),
            Token.floating(3.5, 1),
            Token.floating(-0.25, 1),
            Token.floating(1.0, 1),
        ]

    def test_second_dot_ends_the_literal(self):
        tokens = lex(b"1.2.3")

        assert tokens == [
            Token.floating(1.2, 1),
            Token.bare(TokenCode.DOT, 1),
            Token.integer(3, 1),
        ]

    def test_minus_only_leads(self):
        assert lex(b"5-3") == [Token.integer(5, 1), Token.integer(-3, 1)]

    def test_int32_limits(self):
        assert lex(b"-2147483648 2147483647") == [
            Token.integer(-2147483648, 1),
            Token.integer(2147483647, 1),
        ]

    def test_out_of_range_integer_is_rejected(self):
        with pytest.raises(NumberError, match="out of 32-bit range"):
            lex(b"2147483648")

    def test_lone_minus_is_invalid_integer(self):
        with pytest.raises(NumberError, match="invalid integer token"):
            lex(b"- 1")

    def test_minus_dot_is_invalid_float(self):
        with pytest.raises(NumberError, match="invalid float token"):
            lex(b"-.")


class TestStrings:
    def test_string_bytes_are_kept_verbatim(self):
        assert lex(b'"hello world"') == [Token.string(b"hello world", 1)]

    def test_backslash_is_not_an_escape(self):
        assert lex(b'"a\\" b') == [Token.string(b"a\\", 1), Token.name(b"b", 1)]

    def test_string_may_span_lines(self):
        tokens = lex(b'"one\ntwo" x')

        assert tokens == [Token.string(b"one\ntwo", 1), Token.name(b"x", 2)]

    def test_unterminated_string(self):
        with pytest.raises(StringError, match="unterminated string"):
            lex(b'"abc')


class TestComments:
    def test_line_comment_is_skipped(self):
        assert lex(b"// header comment\n{") == [Token.bare(TokenCode.OPEN_BRACE, 2)]

    def test_comment_at_end_of_input(self):
        assert lex(b"{ // trailing") == [Token.bare(TokenCode.OPEN_BRACE, 1)]

    def test_single_slash_is_an_error(self):
        with pytest.raises(CommentError, match="invalid single '/' comment token"):
            lex(b"/ not a comment")


class TestDirectives:
    def test_first_directive_wins(self):
        directives = DirectiveState()
        source = ByteSource(
            b"#pragma xftmpl name Foo\n"
            b"#pragma xftmpl name Bar\n"
            b"#pragma xftmpl size FooSize\n"
            b"{"
        )

        tokens = list(Lexer(source, directives))

        assert tokens == [Token.bare(TokenCode.OPEN_BRACE, 4)]
        assert directives.var_name == "Foo"
        assert directives.size_name == "FooSize"

    def test_other_hash_lines_are_ignored(self):
        directives = DirectiveState()
        source = ByteSource(b"#include <d3dx9.h>\n#pragma once\n#pragma xftmpl\n")

        assert list(Lexer(source, directives)) == []
        assert directives == DirectiveState()

    def test_directive_without_newline(self):
        with pytest.raises(DirectiveError, match="line too long"):
            lex(b"#pragma xftmpl name Foo")


class TestGuids:
    def test_invalid_field_count_is_a_guid_error(self):
        padded = b"TEMPLATE Foo { <1,2,3,4,5,6,7,8,9> }" + b" " * 32

        with pytest.raises(GuidError, match="invalid GUID") as excinfo:
            lex(padded)

        assert excinfo.value.field == "data1"
        assert excinfo.value.line == 1

    def test_short_input_is_a_truncated_guid(self):
        with pytest.raises(GuidError, match="truncated GUID"):
            lex(b"TEMPLATE Foo { <1,2,3,4,5,6,7,8,9> }")


def test_invalid_start_character_reports_line():
    with pytest.raises(InvalidCharacterError, match="invalid character '@' to start token") as excinfo:
        lex(b"{\n\n@", name="mesh.x")

    assert excinfo.value.line == 3
    assert str(excinfo.value) == "mesh.x:3: error: invalid character '@' to start token"


def test_closing_angle_cannot_start_a_token():
    with pytest.raises(InvalidCharacterError):
        lex(b">")


def test_token_lines_survive_newline_pushback():
    tokens = lex(b"12\n;\r\nabc\n}")

    assert [token.line for token in tokens] == [1, 2, 3, 4]


class TestNameLimit:
    def test_overlong_name_is_truncated_but_fully_consumed(self):
        # Current behaviour: bytes past the limit are dropped, not rejected.
        tokens = lex(b"a" * 600 + b" next")

        assert tokens == [Token.name(b"a" * 512, 1), Token.name(b"next", 1)]

    def test_custom_limit(self):
        tokens = lex(b"abcdefg;", options=LexerOptions(name_limit=4))

        assert tokens == [Token.name(b"abcd", 1), Token.bare(TokenCode.SEMICOLON, 1)]

    def test_name_at_limit_is_kept(self):
        assert lex(b"abcd", options=LexerOptions(name_limit=4)) == [Token.name(b"abcd", 1)]

    def test_strict_names_reject_overlong_identifiers(self):
        with pytest.raises(NameTooLongError):
            lex(b"abcdefg", options=LexerOptions(name_limit=4, strict_names=True))
