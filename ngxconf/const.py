"""
Package constants and metadata.
"""

# Package info
APP_NAME = "ngxconf"
APP_VERSION = "0.1.0"

# Lexical structure
COMMENT_MARKER = "#"
SEMICOLON = ";"
LBRACE = "{"
RBRACE = "}"
STRING_MARKERS = ('"', "'")
RESERVED_CHARS = (SEMICOLON, LBRACE, RBRACE) + STRING_MARKERS

# Default values
DEFAULT_MAX_DEPTH = 100

# Longer digit runs stay strings (CPython's default str -> int limit)
MAX_INTEGER_DIGITS = 4300
