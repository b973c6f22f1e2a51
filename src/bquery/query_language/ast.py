"""AST nodes for query language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from bquery.query_language.kmp import StringMatcher


@dataclass(frozen=True, slots=True)
class Literal:
    """Quoted string tested for substring presence."""

    pattern: str
    matcher: StringMatcher


@dataclass(frozen=True, slots=True)
class And:
    """Conjunction of two expressions."""

    left: Expr
    right: Expr


@dataclass(frozen=True, slots=True)
class Or:
    """Disjunction of two expressions."""

    left: Expr
    right: Expr


@dataclass(frozen=True, slots=True)
class Not:
    """Negation of an expression."""

    operand: Expr


Expr: TypeAlias = Literal | And | Or | Not
