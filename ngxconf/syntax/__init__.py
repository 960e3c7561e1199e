"""
Normalizer, lexer and tree builder for nginx-like configuration syntax.
"""

from .lexer import Lexer, LexerError, Token, TokenType, join_string, tokenize
from .normalizer import normalize
from .parser import ConfigEntry, ParseError, TreeBuilder, build_syntax_tree, parse

__all__ = [
    "ConfigEntry",
    "Lexer",
    "LexerError",
    "ParseError",
    "Token",
    "TokenType",
    "TreeBuilder",
    "build_syntax_tree",
    "join_string",
    "normalize",
    "parse",
    "tokenize",
]
