# make24/games/core/expression_utils.py

import re

_RANK_MAP = {"A": "1", "T": "10", "J": "11", "Q": "12", "K": "13"}
_RANK_TOKEN_RE = re.compile(r"(?<![A-Za-z0-9_.])([ATJQKatjqk])(?![A-Za-z0-9_.])")

# display glyph -> python operator
_GLYPHS = (
    ("×", "*"), ("∗", "*"), ("·", "*"),
    ("÷", "/"), ("／", "/"),
    ("−", "-"), ("–", "-"), ("—", "-"),
)

NO_SOLUTION_TOKENS = {"no solution", "nosolution", "no-solution", "no sol", "nosol", "impossible"}


def preprocess_ranks(expr: str) -> str:
    """Replace whole-token rank letters with numbers: 'K+K-J+9' -> '13+13-11+9'."""
    return _RANK_TOKEN_RE.sub(lambda m: _RANK_MAP[m.group(1).upper()], expr)


def normalize_expr_for_eval(expr: str) -> str:
    """
    Convert display glyphs and rank tokens into plain arithmetic.
      '(8 ÷ (3 − 8 ÷ 3))' -> '(8/(3-8/3))'
    A lone 'x' / 'X' between operands is treated as multiplication.
    """
    if not isinstance(expr, str):
        return expr
    s = expr.strip()
    for glyph, op in _GLYPHS:
        s = s.replace(glyph, op)
    s = re.sub(r"(?<=[\d)\s])[xX](?=[\s\d(])", "*", s)
    s = preprocess_ranks(s)
    s = re.sub(r"\s+", "", s)
    return s


def is_no_solution_claim(answer: str) -> bool:
    return (answer or "").strip().lower() in NO_SOLUTION_TOKENS
