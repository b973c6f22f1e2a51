"""Recursive-descent parser for query language expressions.

Grammar, lowest to highest precedence::

    query      := or_group ( '|' or_group )*
    or_group   := and_group ( '&' and_group )*
    and_group  := literal | '!' and_group | '(' query ')'
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from bquery.query_language.ast import And, Expr, Literal, Not, Or
from bquery.query_language.errors import QueryParseError
from bquery.query_language.kmp import StringMatcher
from bquery.query_language.lexer import Token, TokenKind, tokenize


MAX_QUERY_DEPTH = 200


class _Parser:
    """Single-use parser over a token list."""

    def __init__(self, query: str, tokens: list[Token]) -> None:
        self._query = query
        self._tokens = tokens
        self._position = 0
        self._nesting = 0

    def parse(self) -> Expr:
        if not self._tokens:
            raise QueryParseError("Empty query", self._query, len(self._query))

        expr = self._parse_query()
        trailing = self._peek()
        if trailing is not None:
            if trailing.kind is TokenKind.RPAREN:
                raise self._error("Unmatched ')'", trailing)
            raise self._error(
                f"Unexpected {trailing.describe()} after complete expression", trailing
            )
        return expr

    def _peek(self) -> Token | None:
        if self._position < len(self._tokens):
            return self._tokens[self._position]
        return None

    def _advance(self) -> Token | None:
        token = self._peek()
        if token is not None:
            self._position += 1
        return token

    def _accept(self, kind: TokenKind) -> bool:
        token = self._peek()
        if token is not None and token.kind is kind:
            self._position += 1
            return True
        return False

    def _error(self, message: str, token: Token | None) -> QueryParseError:
        position = token.position if token is not None else len(self._query)
        return QueryParseError(message, self._query, position)

    def _parse_query(self) -> Expr:
        left = self._parse_or_group()
        while self._accept(TokenKind.OR):
            left = Or(left, self._parse_or_group())
        return left

    def _parse_or_group(self) -> Expr:
        left = self._parse_and_group()
        while self._accept(TokenKind.AND):
            left = And(left, self._parse_and_group())
        return left

    def _parse_and_group(self) -> Expr:
        token = self._advance()
        if token is None:
            raise self._error("Unexpected end of query, expected literal, '!' or '('", None)

        match token.kind:
            case TokenKind.LITERAL:
                return self._build_literal(token)
            case TokenKind.NOT:
                with self._nested(token):
                    return Not(self._parse_and_group())
            case TokenKind.LPAREN:
                with self._nested(token):
                    inner = self._parse_query()
                closing = self._advance()
                if closing is None:
                    raise self._error("Unmatched '('", token)
                if closing.kind is not TokenKind.RPAREN:
                    raise self._error(f"Expected ')' but found {closing.describe()}", closing)
                return inner
            case TokenKind.RPAREN:
                raise self._error("Unmatched ')'", token)
            case _:
                raise self._error(
                    f"Unexpected {token.describe()}, expected literal, '!' or '('", token
                )

    def _build_literal(self, token: Token) -> Literal:
        if not token.text:
            raise self._error("Empty string literal", token)
        return Literal(token.text, StringMatcher.from_pattern(token.text))

    @contextmanager
    def _nested(self, token: Token) -> Iterator[None]:
        """Track syntactic nesting so deep queries fail before exhausting the stack."""
        self._nesting += 1
        try:
            if self._nesting > MAX_QUERY_DEPTH:
                raise self._error(f"Query nested deeper than {MAX_QUERY_DEPTH} levels", token)
            yield
        finally:
            self._nesting -= 1


def parse_tokens(query: str, tokens: list[Token]) -> Expr:
    """Build an expression tree from already lexed tokens."""
    return _Parser(query, tokens).parse()


def parse_query(query: str) -> Expr:
    """Parse query text into an expression tree.

    Raises:
        QueryLexError: If the text cannot be tokenized
        QueryParseError: If the tokens do not form a valid query
    """
    return parse_tokens(query, tokenize(query))
