"""
Tests for syntax tree building.
"""

import dataclasses
import logging

import pytest

from ngxconf import ConfigEntry, ParseError, ParserOptions, build_syntax_tree, parse, tokenize
from ngxconf.const import MAX_INTEGER_DIGITS
from ngxconf.syntax.lexer import Token, TokenType
from ngxconf.syntax.parser import coerce_argument


def test_integer_argument() -> None:
    assert parse("worker_processes 4;") == [ConfigEntry("worker_processes", (4,))]


def test_string_argument() -> None:
    assert parse("server_name example.com;") == [ConfigEntry("server_name", ("example.com",))]


def test_nested_blocks() -> None:
    tree = parse("http { server { listen 80; } }")

    assert tree == [
        ConfigEntry(
            "http",
            (),
            (ConfigEntry("server", (), (ConfigEntry("listen", (80,)),)),),
        )
    ]


def test_quoted_argument() -> None:
    (entry,) = parse('log_format main "$remote_addr - $remote_user";')

    assert entry.arguments == ("main", '"$remote_addr - $remote_user"')


def test_trailing_comment() -> None:
    assert parse("foo bar; # trailing comment") == [ConfigEntry("foo", ("bar",))]


def test_sample_config(sample_config: str) -> None:
    tree = parse(sample_config)

    assert [entry.directive for entry in tree] == ["user", "worker_processes", "events", "http"]
    assert tree[0].value == "www-data"
    assert tree[2].get_entry("worker_connections").value == 1024

    server = tree[3].get_entry("server")
    assert server.get_entry("listen").value == 80
    assert server.get_entry("server_name").arguments == ("example.com", "www.example.com")

    location = server.get_entry("location")
    assert location.arguments == ("/",)
    assert location.block == (ConfigEntry("root", ("/var/www",)),)


def test_parse_is_deterministic(sample_config: str) -> None:
    assert parse(sample_config) == parse(sample_config)


def test_parse_matches_build_from_tokens(sample_config: str) -> None:
    assert build_syntax_tree(tokenize(sample_config)) == parse(sample_config)


def test_empty_input() -> None:
    assert parse("") == []
    assert parse("# only a comment\n\n") == []


def test_empty_block_and_bare_directive() -> None:
    assert parse("events {} daemon;") == [ConfigEntry("events"), ConfigEntry("daemon")]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("80", 80),
        ("-5", -5),
        ("+3", 3),
        ("007", 7),
        ("1.5", "1.5"),
        ("10s", "10s"),
        ("0x10", "0x10"),
        ("1_000", "1_000"),
    ],
)
def test_coerce_argument(text: str, expected: str | int) -> None:
    value = coerce_argument(Token(TokenType.WORD, text))

    assert value == expected
    assert type(value) is type(expected)


def test_quoted_number_stays_string() -> None:
    (entry,) = parse('port "80";')

    assert entry.arguments == ('"80"',)


def test_unbalanced_braces_strict() -> None:
    with pytest.raises(ParseError, match="Unbalanced braces") as exc_info:
        parse("server { listen 80;")

    assert exc_info.value.directive == "server"


def test_unbalanced_braces_lenient(lenient: ParserOptions, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="ngxconf"):
        assert parse("server { listen 80;", lenient) == []

    assert "Unbalanced braces" in caplog.text


def test_unterminated_statement_strict() -> None:
    with pytest.raises(ParseError, match="Unterminated statement 'b'"):
        parse("a; b c")


def test_unterminated_statement_lenient(lenient: ParserOptions) -> None:
    assert parse("a; b c", lenient) == [ConfigEntry("a")]


def test_unterminated_statement_in_block_strict() -> None:
    with pytest.raises(ParseError, match="in block 'http'") as exc_info:
        parse("http { listen 80 }")

    assert exc_info.value.directive == "listen"


def test_unterminated_statement_in_block_lenient(lenient: ParserOptions) -> None:
    assert parse("http { a; listen 80 } b;", lenient) == [
        ConfigEntry("http", (), (ConfigEntry("a"),)),
        ConfigEntry("b"),
    ]


def test_stray_closing_brace_is_a_directive(lenient: ParserOptions) -> None:
    assert parse("a; } ;", lenient) == [ConfigEntry("a"), ConfigEntry("}")]


def test_brace_used_as_directive_inside_block() -> None:
    """A '{' in directive position still needs its own '}' before the block closes."""
    tree = parse("x { { y } ; }")

    assert tree == [ConfigEntry("x", (), (ConfigEntry("{", ("y", "}")),))]


def test_max_depth() -> None:
    options = ParserOptions(max_depth=2)

    assert parse("a { b { c; } }", options)[0].get_entry("b").get_entry("c") is not None

    with pytest.raises(ParseError, match="maximum nesting depth"):
        parse("a { b { c { d; } } }", options)


def test_max_depth_applies_in_lenient_mode() -> None:
    with pytest.raises(ParseError):
        parse("a { b { c; } }", ParserOptions(strict=False, max_depth=1))


def test_deep_nesting_within_limit() -> None:
    depth = 500
    text = "a { " * depth + "leaf 1;" + " }" * depth

    entry = parse(text, ParserOptions(max_depth=depth))[0]
    for _ in range(depth - 1):
        entry = entry.block[0]

    assert entry.block == (ConfigEntry("leaf", (1,)),)


def test_entry_helpers() -> None:
    (entry,) = parse("upstream backend { server a:80; server b:80 weight=2; keepalive 8; }")

    assert entry.value == "backend"
    assert entry.get(1) is None
    assert entry.get(1, "none") == "none"
    assert [e.value for e in entry.get_entries("server")] == ["a:80", "b:80"]
    assert entry.get_entries("server")[1].get(1) == "weight=2"
    assert entry.get_entry("keepalive").value == 8
    assert entry.get_entry("missing") is None


def test_to_dict() -> None:
    (entry,) = parse("http { server { listen 80; } }")

    assert entry.to_dict() == {
        "directive": "http",
        "arguments": [],
        "block": [
            {
                "directive": "server",
                "arguments": [],
                "block": [{"directive": "listen", "arguments": [80], "block": []}],
            }
        ],
    }


def test_oversized_integer_stays_string() -> None:
    digits = "1" * 5000

    (entry,) = parse(f"client_max_body_size {digits};")

    assert entry.arguments == (digits,)
    assert isinstance(coerce_argument(Token(TokenType.WORD, "9" * MAX_INTEGER_DIGITS)), int)


def test_entries_are_immutable() -> None:
    (entry,) = parse("http { listen 80; }")

    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.directive = "events"  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.arguments = ("x",)  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.block = ()  # type: ignore[misc]
