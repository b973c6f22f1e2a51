"""Compiler entrypoints for query language."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bquery.query_language.ast import Expr
from bquery.query_language.parser import parse_query
from bquery.query_language.runtime import collect_literals, evaluate_expr


logger = logging.getLogger("bquery")


@dataclass(frozen=True, slots=True)
class Matcher:
    """Compiled boolean query ready to be tested against text.

    Example:
        >>> matcher = Matcher.from_query('("this" | "that") & "these" & "those"')
        >>> matcher.query("this these those")
        True
        >>> matcher.query("this that these")
        False
    """

    source: str
    expression: Expr

    @classmethod
    def from_query(cls, query: str) -> Matcher:
        """Lex and parse query text into a matcher.

        Raises:
            QueryLexError: On an unterminated literal or unrecognized character
            QueryParseError: On malformed query structure
        """
        expression = parse_query(query)
        logger.debug("Compiled query %r", query)
        return cls(query, expression)

    @property
    def literals(self) -> tuple[str, ...]:
        """Literal patterns of the query in source order."""
        return collect_literals(self.expression)

    def query(self, text: str) -> bool:
        """Return whether text satisfies the query."""
        return evaluate_expr(self.expression, text)

    def __call__(self, text: str) -> bool:
        return self.query(text)


def compile_query(query: str) -> Matcher:
    """Parse and compile query text."""
    return Matcher.from_query(query)
