# make24/games/game24/logic/solver.py
"""
Exhaustive 24-point search over expression trees.

The search combines ordered pairs of the current frontier with the four
operators (in the fixed order + - × ÷) and stops at the first tree whose
value is within EPSILON of 24. Each tree node caches its own rendered
text, so the winning root already carries the display string.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

TARGET = 24
EPSILON = 1e-4


class Precedence(enum.IntEnum):
    LEAF = 0
    ADDITIVE = 1
    MULTIPLICATIVE = 2


class Operator(enum.Enum):
    """Closed operator set; declaration order is the search order."""
    ADD = "+"
    SUB = "-"
    MUL = "×"
    DIV = "÷"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def precedence(self) -> Precedence:
        if self in (Operator.ADD, Operator.SUB):
            return Precedence.ADDITIVE
        return Precedence.MULTIPLICATIVE

    @property
    def is_non_associative(self) -> bool:
        return self in (Operator.SUB, Operator.DIV)

    def apply(self, a: float, b: float) -> float:
        if self is Operator.ADD:
            return a + b
        if self is Operator.SUB:
            return a - b
        if self is Operator.MUL:
            return a * b
        return a / b


def format_number(value: float) -> str:
    """
    Render a card value the way it is shown on the card:
      4 / 4.0 -> '4', 0.5 -> '0.5'
    """
    v = float(value)
    if v.is_integer():
        return str(int(v))
    return repr(v)


@dataclass(frozen=True)
class ExpressionNode:
    """
    One node of a binary expression tree.

    Leaves have no children and Precedence.LEAF; composites have both
    children and an operator. `text` is derived at construction time and
    never authored independently.
    """
    value: float
    text: str
    precedence: Precedence = Precedence.LEAF
    left: Optional["ExpressionNode"] = None
    right: Optional["ExpressionNode"] = None
    operator: Optional[Operator] = None

    @classmethod
    def leaf(cls, number: float) -> "ExpressionNode":
        return cls(value=float(number), text=format_number(number))

    @classmethod
    def combine(cls, op: Operator, left: "ExpressionNode", right: "ExpressionNode") -> "ExpressionNode":
        return cls(
            value=op.apply(left.value, right.value),
            text=render(op, left, right),
            precedence=op.precedence,
            left=left,
            right=right,
            operator=op,
        )

    @property
    def is_leaf(self) -> bool:
        return self.operator is None


def render(op: Operator, left: ExpressionNode, right: ExpressionNode) -> str:
    """
    Precedence-correct text for `left op right`.

    The left child is wrapped only when it binds looser than `op`; the right
    child is also wrapped at equal precedence when `op` is - or ÷, so
    8 - (3 - 1) and 8 ÷ (4 × 2) keep their meaning.
    """
    left_text = left.text
    right_text = right.text
    level = op.precedence

    if not left.is_leaf and left.precedence < level:
        left_text = f"({left_text})"

    if not right.is_leaf and (
        right.precedence < level
        or (right.precedence == level and op.is_non_associative)
    ):
        right_text = f"({right_text})"

    return f"{left_text} {op.symbol} {right_text}"


def search(frontier: Sequence[ExpressionNode]) -> Optional[ExpressionNode]:
    """
    Depth-first search for the first tree equal to TARGET.

    Ordered pairs (i, j), i != j, both ascending; operators in declaration
    order. Returns the root of the first hit or None.
    """
    n = len(frontier)
    if n == 0:
        return None
    if n == 1:
        node = frontier[0]
        return node if abs(node.value - TARGET) < EPSILON else None

    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            a = frontier[i]
            b = frontier[j]
            remaining = [frontier[k] for k in range(n) if k != i and k != j]

            for op in Operator:
                if op is Operator.DIV and abs(b.value) < EPSILON:
                    continue
                found = search(remaining + [ExpressionNode.combine(op, a, b)])
                if found is not None:
                    return found
    return None


def find_first_step(node: ExpressionNode) -> Optional[ExpressionNode]:
    """First composite (left before right) whose children are both leaves."""
    if node.is_leaf:
        return None
    if node.left.is_leaf and node.right.is_leaf:
        return node
    return find_first_step(node.left) or find_first_step(node.right)


def first_step_hint(root: ExpressionNode) -> str:
    step = find_first_step(root)
    if step is None:
        return ""
    return f"{format_number(step.left.value)} {step.operator.symbol} {format_number(step.right.value)}"


@dataclass(frozen=True)
class SolveResult:
    solvable: bool
    solution: Optional[str] = None
    first_step_hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "solvable": self.solvable,
            "solution": self.solution,
            "first_step_hint": self.first_step_hint,
        }


UNSOLVABLE = SolveResult(solvable=False)


def solve(numbers: Sequence[float]) -> SolveResult:
    """
    Decide whether `numbers` (normally four card values) can make 24.

    Identical input always yields an identical result; the first solution
    under the fixed search order is reported, with its first-step hint.
    """
    return _solve_values(tuple(float(x) for x in numbers))


def solution_tree(numbers: Sequence[float]) -> Optional[ExpressionNode]:
    """The winning tree itself, uncached; `solve` caches its rendering."""
    return search([ExpressionNode.leaf(x) for x in numbers])


@lru_cache(maxsize=8192)
def _solve_values(values: Tuple[float, ...]) -> SolveResult:
    root = solution_tree(values)
    if root is None:
        logger.debug("solve %s: no solution", list(values))
        return UNSOLVABLE

    result = SolveResult(solvable=True, solution=root.text, first_step_hint=first_step_hint(root))
    logger.debug("solve %s: %s (hint %s)", list(values), result.solution, result.first_step_hint)
    return result


__all__: List[str] = [
    "TARGET", "EPSILON",
    "Precedence", "Operator", "ExpressionNode", "SolveResult",
    "format_number", "render", "search", "find_first_step", "first_step_hint",
    "solve", "solution_tree",
]
