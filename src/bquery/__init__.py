"""bquery - Compile boolean substring queries and test text against them."""

from bquery.query_language import (
    Matcher,
    QueryLanguageError,
    QueryLexError,
    QueryParseError,
    StringMatcher,
    compile_query,
)


__version__ = "0.1.0"

__all__ = [
    "Matcher",
    "QueryLanguageError",
    "QueryLexError",
    "QueryParseError",
    "StringMatcher",
    "__version__",
    "compile_query",
]
