"""
Parser options.

A single ParserOptions instance configures one parse. Passing None anywhere
an options argument is accepted means ParserOptions().
"""

from dataclasses import dataclass

from .const import DEFAULT_MAX_DEPTH


@dataclass
class ParserOptions:
    """
    Options controlling how truncated or hostile input is handled.

    Attributes:
        strict: Raise LexerError/ParseError when the input ends inside a
            quoted string, a statement or a block. When False, the unfinished
            construct is dropped and a warning is logged.
        max_depth: Maximum block nesting depth. Deeper input raises
            ParseError regardless of strict.
    """

    strict: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")


def resolve_options(options: ParserOptions | None) -> ParserOptions:
    """Return options, or the defaults if None."""
    return options if options is not None else ParserOptions()
