"""Tokenizer for query language expressions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from parsy import ParseError, Parser, eof, index, regex, seq

from bquery.query_language.errors import QueryLexError


class TokenKind(StrEnum):
    """Kinds of tokens produced by the lexer."""

    LITERAL = "literal"
    AND = "&"
    OR = "|"
    NOT = "!"
    LPAREN = "("
    RPAREN = ")"


@dataclass(frozen=True, slots=True)
class Token:
    """Single lexed token with its source offset."""

    kind: TokenKind
    text: str
    position: int

    def describe(self) -> str:
        """Human-readable token description for error messages."""
        if self.kind is TokenKind.LITERAL:
            return f'literal "{self.text}"'
        return f"'{self.text}'"


_WHITESPACE = regex(r"[ \t\r\n]*")


def _lexeme(parser: Parser) -> Parser:
    """Consume optional whitespace after parser."""
    return parser << _WHITESPACE


def _literal_token(position: int, raw: str) -> Token:
    return Token(TokenKind.LITERAL, raw[1:-1], position)


def _operator_token(position: int, raw: str) -> Token:
    return Token(TokenKind(raw), raw, position)


def _make_lexer() -> Parser:
    """Create the token sequence parser."""
    literal = seq(index, regex(r'"[^"]*"')).combine(_literal_token)
    operator = seq(index, regex(r"[&|!()]")).combine(_operator_token)
    token = _lexeme(literal | operator)
    return _WHITESPACE >> token.many() << eof


QUERY_LEXER = _make_lexer()


def tokenize(query: str) -> list[Token]:
    """Split query text into tokens.

    Args:
        query: Raw query text

    Returns:
        Tokens in source order (empty for blank input)

    Raises:
        QueryLexError: On an unterminated literal or an unrecognized character
    """
    try:
        tokens = QUERY_LEXER.parse(query)
    except ParseError as exc:
        position = exc.index
        if position < len(query) and query[position] == '"':
            raise QueryLexError("Unterminated string literal", query, position) from exc
        char = query[position] if position < len(query) else ""
        raise QueryLexError(f"Unexpected character {char!r}", query, position) from exc
    return list(tokens)
