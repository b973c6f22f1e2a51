"""Public API for query language lexer/parser/compiler/runtime."""

from bquery.query_language.compiler import Matcher, compile_query
from bquery.query_language.errors import QueryLanguageError, QueryLexError, QueryParseError
from bquery.query_language.kmp import StringMatcher
from bquery.query_language.lexer import Token, TokenKind, tokenize
from bquery.query_language.parser import MAX_QUERY_DEPTH, parse_query
from bquery.query_language.runtime import evaluate_expr


__all__ = [
    "MAX_QUERY_DEPTH",
    "Matcher",
    "QueryLanguageError",
    "QueryLexError",
    "QueryParseError",
    "StringMatcher",
    "Token",
    "TokenKind",
    "compile_query",
    "evaluate_expr",
    "parse_query",
    "tokenize",
]
