"""Evaluation of compiled query expression trees."""

from __future__ import annotations

from typing import assert_never

from bquery.query_language.ast import And, Expr, Literal, Not, Or


def chain_operands(expr: And | Or) -> list[Expr]:
    """Return operands of a left-folded run of same-kind nodes in source order.

    ``"a" | "b" | "c"`` parses to ``Or(Or(a, b), c)``; the left spine is walked
    iteratively so long flat chains never recurse per operand.
    """
    kind = type(expr)
    operands: list[Expr] = []
    node: Expr = expr
    while isinstance(node, kind):
        operands.append(node.right)
        node = node.left
    operands.append(node)
    operands.reverse()
    return operands


def evaluate_expr(expr: Expr, text: str) -> bool:
    """Evaluate expression against text.

    ``And`` and ``Or`` short-circuit left to right. Evaluation has no side
    effects and never raises for a tree built by the parser.
    """
    match expr:
        case Literal(matcher=matcher):
            return matcher.contains(text)
        case And():
            return all(evaluate_expr(operand, text) for operand in chain_operands(expr))
        case Or():
            return any(evaluate_expr(operand, text) for operand in chain_operands(expr))
        case Not(operand):
            return not evaluate_expr(operand, text)
        case _:
            assert_never(expr)


def collect_literals(expr: Expr) -> tuple[str, ...]:
    """Return literal patterns in source order."""
    match expr:
        case Literal(pattern=pattern):
            return (pattern,)
        case And() | Or():
            literals: list[str] = []
            for operand in chain_operands(expr):
                literals.extend(collect_literals(operand))
            return tuple(literals)
        case Not(operand):
            return collect_literals(operand)
        case _:
            assert_never(expr)
