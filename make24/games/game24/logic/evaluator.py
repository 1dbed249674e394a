# make24/games/game24/logic/evaluator.py
"""
Player-answer checking: safe arithmetic evaluation plus the
"use every card exactly once" rule.
"""
import ast
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from make24.games.core.expression_utils import is_no_solution_claim, normalize_expr_for_eval
from .solver import TARGET, solve

ANSWER_TOLERANCE = 1e-3
_DIV_ZERO = 1e-12

ALLOWED_NODES = (
    ast.Expression, ast.BinOp, ast.UnaryOp, ast.Constant,
    ast.Add, ast.Sub, ast.Mult, ast.Div, ast.USub, ast.UAdd,
    ast.Load,
)


class ExpressionError(ValueError):
    """Rejected or non-evaluable player expression."""


def _parse(expr: str) -> ast.Expression:
    s = normalize_expr_for_eval(expr or "")
    if not s:
        raise ExpressionError("Empty expression")
    try:
        tree = ast.parse(s, mode="eval")
    except SyntaxError as e:
        raise ExpressionError(f"Invalid expression: {e.msg}") from e
    for node in ast.walk(tree):
        if not isinstance(node, ALLOWED_NODES):
            raise ExpressionError(f"Illegal expression: {type(node).__name__}")
        if isinstance(node, ast.Constant) and (
            isinstance(node.value, bool) or not isinstance(node.value, (int, float))
        ):
            raise ExpressionError("Only numbers are allowed")
    return tree


def _eval(node: ast.AST) -> float:
    if isinstance(node, ast.Expression):
        return _eval(node.body)
    if isinstance(node, ast.Constant):
        return float(node.value)
    if isinstance(node, ast.UnaryOp):
        v = _eval(node.operand)
        return -v if isinstance(node.op, ast.USub) else v
    if isinstance(node, ast.BinOp):
        a = _eval(node.left)
        b = _eval(node.right)
        if isinstance(node.op, ast.Add):
            return a + b
        if isinstance(node.op, ast.Sub):
            return a - b
        if isinstance(node.op, ast.Mult):
            return a * b
        if abs(b) < _DIV_ZERO:
            raise ExpressionError("Division by zero is not allowed")
        return a / b
    raise ExpressionError(f"Illegal expression: {type(node).__name__}")


def safe_eval(expr: str) -> float:
    """
    Evaluate + - * / with parentheses and numeric literals only.
    Accepts the solver's display glyphs (×, ÷). Raises ExpressionError.
    """
    result = _eval(_parse(expr))
    if not math.isfinite(result):
        raise ExpressionError("Result is not a finite number")
    return result


def evaluate_expression(expr: str) -> Optional[float]:
    """safe_eval, but None instead of an exception."""
    try:
        return safe_eval(expr)
    except ExpressionError:
        return None


def _literals(node: ast.AST) -> List[float]:
    if isinstance(node, ast.Constant):
        return [float(node.value)]
    out: List[float] = []
    for child in ast.iter_child_nodes(node):
        out.extend(_literals(child))
    return out


def used_numbers(expr: str) -> List[float]:
    """Numeric literals in the expression, in source order."""
    return _literals(_parse(expr))


def uses_exact_values(expr: str, values: Sequence[float]) -> bool:
    try:
        lits = used_numbers(expr)
    except ExpressionError:
        return False
    return sorted(lits) == sorted(float(v) for v in values)


@dataclass(frozen=True)
class CheckResult:
    correct: bool
    value: Optional[float] = None
    reason: str = ""
    kind: str = "exact"


def check_answer(answer: str, values: Sequence[float], target: float = TARGET) -> CheckResult:
    """
    Judge a submitted answer for the hand `values`.

    A "no solution" claim is right iff the solver finds nothing. Otherwise
    the expression must use each card exactly once and land within
    ANSWER_TOLERANCE of the target.
    """
    if is_no_solution_claim(answer):
        result = solve(values)
        if result.solvable:
            return CheckResult(False, reason="This hand has a solution.", kind="no-solution")
        return CheckResult(True, reason="Correct! No solution exists.", kind="no-solution")

    try:
        lits = used_numbers(answer)
    except ExpressionError as e:
        return CheckResult(False, reason=str(e))

    if sorted(lits) != sorted(float(v) for v in values):
        return CheckResult(False, reason="Use all 4 cards!" if len(values) == 4 else "Use every card exactly once!")

    try:
        value = safe_eval(answer)
    except ExpressionError as e:
        return CheckResult(False, reason=str(e))

    if abs(value - float(target)) < ANSWER_TOLERANCE:
        return CheckResult(True, value=value, reason=f"Correct! You made {target:g}!")
    return CheckResult(False, value=value, reason=f"Equals {round(value, 2):g}. Try again!")
