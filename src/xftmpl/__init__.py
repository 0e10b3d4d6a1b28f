from xftmpl.compiler import CompileOptions, CompileResult, compile_file, compile_template, render
from xftmpl.errors import (
    ConfigurationError,
    GuidError,
    HeaderError,
    LexError,
    ResourceError,
    XftmplError,
)
from xftmpl.guid import Guid, parse_guid
from xftmpl.lexer import Lexer, LexerOptions, lex
from xftmpl.tokens import Token, TokenCode

__all__ = [
    "CompileOptions",
    "CompileResult",
    "ConfigurationError",
    "Guid",
    "GuidError",
    "HeaderError",
    "LexError",
    "Lexer",
    "LexerOptions",
    "ResourceError",
    "Token",
    "TokenCode",
    "XftmplError",
    "compile_file",
    "compile_template",
    "lex",
    "parse_guid",
    "render",
]
