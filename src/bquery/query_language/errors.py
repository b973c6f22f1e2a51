"""Errors for query language lexing and parsing."""

from __future__ import annotations


def _line_and_column(query: str, position: int) -> tuple[int, int]:
    """Convert a character offset into zero-based line and column."""
    line_number = query.count("\n", 0, position)
    line_start = query.rfind("\n", 0, position) + 1
    return (line_number, position - line_start)


def format_query_error(message: str, query: str, position: int | None) -> str:
    """Build rich error message with query pointer."""
    if position is None:
        return f"Invalid query syntax: {message}"

    line_number, column_number = _line_and_column(query, position)
    query_lines = query.splitlines()
    if not query_lines:
        query_lines = [query]

    error_line = query_lines[line_number] if 0 <= line_number < len(query_lines) else ""
    pointer = " " * max(column_number, 0) + "^"
    return f"Invalid query syntax: {message}\n\n{error_line}\n{pointer}"


class QueryLanguageError(Exception):
    """Base exception for query language failures."""

    def __init__(self, message: str, query: str = "", position: int | None = None) -> None:
        super().__init__(format_query_error(message, query, position))
        self.message = message
        self.query = query
        self.position = position


class QueryLexError(QueryLanguageError):
    """Raised when query text cannot be split into tokens."""


class QueryParseError(QueryLanguageError):
    """Raised when a token sequence is not a valid query."""
