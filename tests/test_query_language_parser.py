"""Sanity tests for query language parser."""

from __future__ import annotations

import pytest

from bquery.query_language import MAX_QUERY_DEPTH, parse_query
from bquery.query_language.ast import And, Literal, Not, Or
from bquery.query_language.errors import QueryLexError, QueryParseError


@pytest.mark.parametrize(
    "query",
    [
        '"iphone"',
        '"iphone" | "i phone"',
        '("hello" | "hi") & "there"',
        '!"spam"',
        '!!"spam"',
        '!("a" | "b") & "c"',
        '(("a"))',
        '"a" & "b" & "c" | "d" | !"e"',
    ],
)
def test_parse_query_examples(query: str) -> None:
    """Parser should accept representative query examples."""
    expr = parse_query(query)
    assert expr is not None


def test_parse_literal_shape() -> None:
    """Literal should carry its pattern and a precomputed matcher."""
    expr = parse_query('"abab"')

    assert isinstance(expr, Literal)
    assert expr.pattern == "abab"
    assert expr.matcher.pattern == "abab"
    assert expr.matcher.table == (0, 0, 1, 2)


def test_parse_and_binds_tighter_than_or() -> None:
    """`a & b | c` should parse as `(a & b) | c`."""
    expr = parse_query('"a" & "b" | "c"')

    assert isinstance(expr, Or)
    assert isinstance(expr.left, And)
    assert isinstance(expr.right, Literal)
    assert expr.right.pattern == "c"


def test_parse_or_on_the_left_of_and() -> None:
    """`a | b & c` should parse as `a | (b & c)`."""
    expr = parse_query('"a" | "b" & "c"')

    assert isinstance(expr, Or)
    assert isinstance(expr.left, Literal)
    assert isinstance(expr.right, And)


def test_parse_not_binds_tighter_than_and() -> None:
    """`!a & b` should parse as `(!a) & b`."""
    expr = parse_query('!"a" & "b"')

    assert isinstance(expr, And)
    assert isinstance(expr.left, Not)
    assert isinstance(expr.left.operand, Literal)
    assert expr.left.operand.pattern == "a"


def test_parse_parentheses_override_grouping() -> None:
    """Parentheses should group an OR under an AND."""
    expr = parse_query('"a" & ("b" | "c")')

    assert isinstance(expr, And)
    assert isinstance(expr.right, Or)


def test_parse_left_folds_chains() -> None:
    """Successive operators should fold to the left."""
    expr = parse_query('"a" & "b" & "c"')

    assert isinstance(expr, And)
    assert isinstance(expr.left, And)
    assert isinstance(expr.right, Literal)
    assert expr.right.pattern == "c"

    expr = parse_query('"a" | "b" | "c"')

    assert isinstance(expr, Or)
    assert isinstance(expr.left, Or)


def test_parse_redundant_parentheses_leave_no_node() -> None:
    """Grouping should not introduce extra tree nodes."""
    assert parse_query('(("a"))') == parse_query('"a"')


def test_parse_is_deterministic() -> None:
    """Parsing the same text twice should produce equal trees."""
    assert parse_query('!"a" & ("b" | "c")') == parse_query('!"a" & ("b" | "c")')


@pytest.mark.parametrize(
    ("query", "message", "position"),
    [
        ("", "Empty query", 0),
        ("   ", "Empty query", 3),
        ('"a" &', "Unexpected end of query", 5),
        ('"a" |', "Unexpected end of query", 5),
        ("!", "Unexpected end of query", 1),
        ('("a"', "Unmatched '\\('", 0),
        ('"a")', "Unmatched '\\)'", 3),
        (")", "Unmatched '\\)'", 0),
        ('"a" "b"', 'Unexpected literal "b" after complete expression', 4),
        ('& "a"', "Unexpected '&'", 0),
        ('"a" & | "b"', "Unexpected '\\|'", 6),
        ('("a" "b")', "Expected '\\)' but found literal \"b\"", 5),
        ("()", "Unmatched '\\)'", 1),
        ('""', "Empty string literal", 0),
        ('"a" | ""', "Empty string literal", 6),
    ],
)
def test_parse_errors(query: str, message: str, position: int) -> None:
    """Malformed queries should raise QueryParseError with position."""
    with pytest.raises(QueryParseError, match=message) as exc_info:
        parse_query(query)

    assert exc_info.value.position == position
    assert exc_info.value.query == query


def test_parse_unterminated_literal_is_lex_error() -> None:
    """Lex errors should propagate unchanged through parse_query."""
    with pytest.raises(QueryLexError):
        parse_query('"unterminated')


def test_parse_error_message_has_pointer() -> None:
    """Parse error message should show the offending token."""
    with pytest.raises(QueryParseError) as exc_info:
        parse_query('"a" "b"')

    assert str(exc_info.value).endswith('"a" "b"\n    ^')


def test_parse_error_pointer_on_multiline_query() -> None:
    """Pointer should be placed on the line holding the offending token."""
    with pytest.raises(QueryParseError) as exc_info:
        parse_query('"a" &\n  "b" )')

    assert str(exc_info.value).endswith('  "b" )\n      ^')


def test_parse_accepts_nesting_up_to_limit() -> None:
    """Nesting up to the limit should parse."""
    query = "(" * MAX_QUERY_DEPTH + '"a"' + ")" * MAX_QUERY_DEPTH

    assert parse_query(query) == parse_query('"a"')


def test_parse_rejects_excessive_nesting() -> None:
    """Deeply nested queries should fail cleanly instead of exhausting the stack."""
    depth = MAX_QUERY_DEPTH + 1
    with pytest.raises(QueryParseError, match="nested deeper"):
        parse_query("(" * depth + '"a"' + ")" * depth)

    with pytest.raises(QueryParseError, match="nested deeper"):
        parse_query("!" * depth + '"a"')


def test_parse_accepts_long_flat_chains() -> None:
    """Flat operator chains are not limited by nesting depth."""
    query = " | ".join(f'"kw{index}"' for index in range(2000))

    expr = parse_query(query)

    assert isinstance(expr, Or)
    assert expr.right == parse_query('"kw1999"')


def test_parse_long_chain_inside_nesting_limit() -> None:
    """A long chain may sit inside the deepest allowed nesting."""
    chain = " & ".join(f'"w{index}"' for index in range(1000))
    query = "(" * MAX_QUERY_DEPTH + chain + ")" * MAX_QUERY_DEPTH

    assert isinstance(parse_query(query), And)
