"""
Lexer (tokenizer) for nginx-like configuration syntax.

Works on logical lines produced by the normalizer. Each line is tokenized in
two passes:
- a character scan emitting punctuation, quote markers and bare words
- a reassembly pass turning each quoted run into a single STRING token

Quoted strings never span lines, and a quote character can only be closed by
the same character. Escapes are not supported.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum, auto

from ..const import LBRACE, RBRACE, RESERVED_CHARS, SEMICOLON
from ..logging import get_logger
from ..options import ParserOptions, resolve_options
from .normalizer import normalize

logger = get_logger("lexer")


class TokenType(Enum):
    """Token types for the nginx-like config syntax."""

    # Delimiters
    SEMICOLON = auto()     # ;
    LBRACE = auto()        # {
    RBRACE = auto()        # }
    QUOTE = auto()         # " or ', only before string reassembly

    # Literals
    WORD = auto()          # bare word: directive name, argument, number
    STRING = auto()        # "quoted string", quotes included


PUNCTUATION = {
    SEMICOLON: TokenType.SEMICOLON,
    LBRACE: TokenType.LBRACE,
    RBRACE: TokenType.RBRACE,
}


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""

    type: TokenType
    value: str

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r})"

    @property
    def is_quote(self) -> bool:
        """True for a quote marker not yet joined into a STRING."""
        return self.type is TokenType.QUOTE


class LexerError(Exception):
    """Exception raised for lexer errors."""

    pass


def join_string(tokens: Sequence[Token]) -> str:
    """
    Join the tokens of a quoted run into one string.

    Tokens are separated by single spaces, except that no space is put in
    front of a quote marker, and none after a marker that opens a (nested)
    quoted segment.

    Example:
        ['"', 'some', 'example', '"'] -> '"some example"'
        ['"', 'a', "'", 'b', "'", 'c', '"'] -> "a'b' c" (outer quotes kept)
    """
    markers: list[str] = []
    parts: list[str] = []

    for idx, token in enumerate(tokens):
        next_token = tokens[idx + 1] if idx + 1 < len(tokens) else None
        space_allowed = next_token is not None and not next_token.is_quote

        parts.append(token.value)

        if token.is_quote:
            if markers and markers[-1] == token.value:
                markers.pop()
                if space_allowed:
                    parts.append(" ")
            else:
                markers.append(token.value)
        elif space_allowed:
            parts.append(" ")

    return "".join(parts)


class Lexer:
    """
    Tokenizer for nginx-like configuration syntax.

    Example config:
        http {
            server {
                listen 80;
                server_name example.com;
                log_format main "$remote_addr - $remote_user";
            }
        }
    """

    def __init__(self, source: str, options: ParserOptions | None = None):
        self.source = source
        self.options = resolve_options(options)

    def _scan(self, line: str) -> list[Token]:
        """Split a line into punctuation, quote markers and bare words."""
        tokens: list[Token] = []
        word: list[str] = []

        def flush() -> None:
            if word:
                tokens.append(Token(TokenType.WORD, "".join(word)))
                word.clear()

        for char in line:
            if char in RESERVED_CHARS:
                flush()
                tokens.append(Token(PUNCTUATION.get(char, TokenType.QUOTE), char))
            elif char.isspace():
                flush()
            else:
                word.append(char)

        flush()
        return tokens

    def _assemble_strings(self, tokens: list[Token], line: str) -> list[Token]:
        """Replace every quoted run with a single STRING token."""
        result: list[Token] = []
        run: list[Token] = []
        marker: str | None = None

        for token in tokens:
            if marker is None:
                if token.is_quote:
                    marker = token.value
                    run = [token]
                else:
                    result.append(token)
                continue

            run.append(token)
            if token.is_quote and token.value == marker:
                result.append(Token(TokenType.STRING, join_string(run)))
                run = []
                marker = None

        if marker is not None:
            if self.options.strict:
                raise LexerError(f"Unterminated string literal opened with {marker} in: {line}")
            logger.warning(f"Dropping unterminated string literal opened with {marker} in: {line}")

        return result

    def tokenize_line(self, line: str) -> list[Token]:
        """Tokenize one logical line."""
        return self._assemble_strings(self._scan(line), line)

    def tokenize(self) -> Iterator[Token]:
        """Generate all tokens from the source."""
        for line in normalize(self.source):
            yield from self.tokenize_line(line)

    def __iter__(self) -> Iterator[Token]:
        """Allow iteration over tokens."""
        return self.tokenize()


def tokenize(source: str, options: ParserOptions | None = None) -> list[Token]:
    """Convenience function to tokenize a source string."""
    tokens = list(Lexer(source, options))
    logger.debug(f"Tokenized input into {len(tokens)} tokens")
    return tokens
