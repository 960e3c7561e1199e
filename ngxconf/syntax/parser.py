"""
Syntax tree builder for nginx-like configuration syntax.

Turns the flat token sequence from the lexer into an ordered list of
ConfigEntry values. Every statement is a directive followed by arguments and
terminated by either ';' or a brace-delimited block of further statements.

Blocks are tracked on an explicit frame stack rather than by recursion, so
nesting depth is bounded by ParserOptions.max_depth instead of the
interpreter stack.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from ..const import MAX_INTEGER_DIGITS
from ..logging import get_logger
from ..options import ParserOptions, resolve_options
from .lexer import Token, TokenType, tokenize

logger = get_logger("parser")

ArgumentValue = str | int

_INTEGER = re.compile(r"[+-]?[0-9]+")


class ParseError(Exception):
    """Exception raised for parser errors."""

    def __init__(self, message: str, directive: str | None = None):
        self.directive = directive
        super().__init__(message)


@dataclass(frozen=True)
class ConfigEntry:
    """
    One parsed statement: a directive, its arguments and an optional block.

    Examples:
        worker_processes 4;        -> ConfigEntry("worker_processes", (4,))
        server_name example.com;   -> ConfigEntry("server_name", ("example.com",))
        http { ... }               -> ConfigEntry("http", (), block=(...))
    """

    directive: str
    arguments: tuple[ArgumentValue, ...] = ()
    block: tuple["ConfigEntry", ...] = ()

    def __repr__(self) -> str:
        return f"ConfigEntry({self.directive}, {list(self.arguments)}, block={len(self.block)})"

    @property
    def value(self) -> ArgumentValue | None:
        """Get single argument (first) or None."""
        return self.arguments[0] if self.arguments else None

    def get(self, index: int = 0, default: Any = None) -> Any:
        """Get argument at index with default."""
        if index < len(self.arguments):
            return self.arguments[index]
        return default

    def get_entry(self, directive: str) -> "ConfigEntry | None":
        """Get first nested entry with given directive."""
        for entry in self.block:
            if entry.directive == directive:
                return entry
        return None

    def get_entries(self, directive: str) -> list["ConfigEntry"]:
        """Get all nested entries with given directive."""
        return [entry for entry in self.block if entry.directive == directive]

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain dicts and lists, recursively."""
        return {
            "directive": self.directive,
            "arguments": list(self.arguments),
            "block": [entry.to_dict() for entry in self.block],
        }


def coerce_argument(token: Token) -> ArgumentValue:
    """Bare words that are base-10 integer literals become ints; the rest stay strings."""
    if (
        token.type is TokenType.WORD
        and _INTEGER.fullmatch(token.value)
        and len(token.value.lstrip("+-")) <= MAX_INTEGER_DIGITS
    ):
        return int(token.value, 10)
    return token.value


class ParserState(Enum):
    """State of one frame of the tree builder."""

    NO_STATEMENT = auto()      # waiting for a directive
    IN_STATEMENT = auto()      # collecting arguments
    IN_BLOCK_CAPTURE = auto()  # a nested frame is building this statement's block


@dataclass
class _Frame:
    """Entries of one block being built, plus the statement currently open in it."""

    entries: list[ConfigEntry] = field(default_factory=list)
    state: ParserState = ParserState.NO_STATEMENT
    directive: str = ""
    arguments: list[ArgumentValue] = field(default_factory=list)
    # '{' tokens consumed as directives and not yet matched by a '}'
    open_braces: int = 0

    def open_statement(self, directive: str) -> None:
        self.directive = directive
        self.arguments = []
        self.state = ParserState.IN_STATEMENT

    def close_statement(self, block: Iterable[ConfigEntry] = ()) -> None:
        self.entries.append(ConfigEntry(self.directive, tuple(self.arguments), tuple(block)))
        self.state = ParserState.NO_STATEMENT


class TreeBuilder:
    """
    Builds a syntax tree from a token sequence.

    Grammar:
        entries    := statement*
        statement  := token argument* (';' | '{' entries '}')
        argument   := any token except '{' and ';'

    The first token of a statement is taken as its directive whatever it is.
    A '{' taken that way still has to be matched by a '}' before the
    enclosing block is closed.
    """

    def __init__(self, options: ParserOptions | None = None):
        self.options = resolve_options(options)

    def _drop(self, message: str, directive: str) -> None:
        """Raise in strict mode, otherwise log that an entry was discarded."""
        if self.options.strict:
            raise ParseError(message, directive)
        logger.warning(f"{message}; dropping it")

    def _open_block(self, stack: list[_Frame]) -> None:
        frame = stack[-1]
        if len(stack) > self.options.max_depth:
            raise ParseError(
                f"Block '{frame.directive}' exceeds maximum nesting depth of {self.options.max_depth}",
                frame.directive,
            )
        frame.state = ParserState.IN_BLOCK_CAPTURE
        stack.append(_Frame())

    def _close_block(self, stack: list[_Frame]) -> None:
        child = stack.pop()
        parent = stack[-1]
        if child.state is ParserState.IN_STATEMENT:
            self._drop(
                f"Unterminated statement '{child.directive}' in block '{parent.directive}'",
                child.directive,
            )
        parent.close_statement(child.entries)

    def build(self, tokens: Iterable[Token]) -> list[ConfigEntry]:
        """Build the list of top-level entries."""
        stack = [_Frame()]

        for token in tokens:
            frame = stack[-1]

            if token.type is TokenType.RBRACE and len(stack) > 1:
                if frame.open_braces == 0:
                    self._close_block(stack)
                    continue
                frame.open_braces -= 1

            if frame.state is ParserState.NO_STATEMENT:
                if token.type is TokenType.LBRACE:
                    frame.open_braces += 1
                frame.open_statement(token.value)
            elif token.type is TokenType.LBRACE:
                self._open_block(stack)
            elif token.type is TokenType.SEMICOLON:
                frame.close_statement()
            else:
                frame.arguments.append(coerce_argument(token))

        top = stack[0]
        if len(stack) > 1:
            self._drop(f"Unbalanced braces: block '{top.directive}' is not closed", top.directive)
        elif top.state is ParserState.IN_STATEMENT:
            self._drop(f"Unterminated statement '{top.directive}'", top.directive)

        logger.debug(f"Built syntax tree with {len(top.entries)} top-level entries")
        return top.entries


def build_syntax_tree(tokens: Iterable[Token], options: ParserOptions | None = None) -> list[ConfigEntry]:
    """Convenience function to build a syntax tree from tokens."""
    return TreeBuilder(options).build(tokens)


def parse(content: str, options: ParserOptions | None = None) -> list[ConfigEntry]:
    """
    Parse configuration text into a list of top-level entries.

    Args:
        content: Configuration source text
        options: Parser options (defaults to strict mode)

    Returns:
        Top-level ConfigEntry values in source order

    Raises:
        LexerError: On an unterminated quoted string (strict mode)
        ParseError: On truncated input (strict mode) or excessive nesting
    """
    options = resolve_options(options)
    return build_syntax_tree(tokenize(content, options), options)
