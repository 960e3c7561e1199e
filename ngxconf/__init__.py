"""
Parser for NGINX-like block-structured configuration text.

Usage:
    from ngxconf import parse

    tree = parse("http { server { listen 80; } }")
    tree[0].get_entry("server").get_entry("listen").value  # 80
"""

from .const import APP_VERSION
from .options import ParserOptions
from .syntax import (
    ConfigEntry,
    LexerError,
    ParseError,
    Token,
    TokenType,
    build_syntax_tree,
    normalize,
    parse,
    tokenize,
)

__version__ = APP_VERSION

__all__ = [
    "ConfigEntry",
    "LexerError",
    "ParseError",
    "ParserOptions",
    "Token",
    "TokenType",
    "build_syntax_tree",
    "normalize",
    "parse",
    "tokenize",
    "__version__",
]
