"""
Line normalization ahead of tokenizing.

A '#' starts a comment wherever it appears, including inside quotes.
"""

import re

from ..const import COMMENT_MARKER
from ..logging import get_logger

logger = get_logger("normalizer")

_WHITESPACE_RUN = re.compile(r"\s\s+")


def normalize_line(line: str) -> str:
    """Strip the comment, collapse whitespace runs and trim one physical line."""
    line = line.split(COMMENT_MARKER, 1)[0]
    return _WHITESPACE_RUN.sub(" ", line).strip()


def normalize(content: str) -> list[str]:
    """
    Split configuration text into logical lines.

    Lines that are empty once comments and whitespace are removed are dropped.

    Example:
        "http {\\n  # main\\n  listen   80;\\n}" -> ["http {", "listen 80;", "}"]
    """
    lines = [normalize_line(line) for line in content.split("\n")]
    lines = [line for line in lines if line]
    logger.debug(f"Normalized input into {len(lines)} logical lines")
    return lines
