# make24/games/game24/logic/__init__.py
from .solver import EPSILON, TARGET, ExpressionNode, Operator, Precedence, SolveResult, solve
from .dealer import Difficulty, PlayingCard, Suit, draw_cards

__all__ = [
    "EPSILON", "TARGET",
    "ExpressionNode", "Operator", "Precedence", "SolveResult", "solve",
    "Difficulty", "PlayingCard", "Suit", "draw_cards",
]
