# make24/games/game24/logic/dealer.py
"""
Deck building and solvable-hand dealing.

`draw_cards` shuffles a fresh deck and keeps the first `count` cards only if
the solver can make 24 from them, retrying up to `max_attempts` times.
"""
from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from .solver import SolveResult, solve

logger = logging.getLogger(__name__)

MAX_DEAL_ATTEMPTS = 100


class Suit(enum.Enum):
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"
    SPADES = "♠"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def color(self) -> str:
        return "red" if self in (Suit.HEARTS, Suit.DIAMONDS) else "black"


class Difficulty(enum.Enum):
    EASY = "Easy"
    HARD = "Hard"

    @property
    def max_value(self) -> int:
        return 13 if self is Difficulty.HARD else 10

    @classmethod
    def parse(cls, level: Any) -> "Difficulty":
        """
        Accepts a Difficulty or a case-insensitive name:
          'easy' / 'Easy' / 'EASY' -> Difficulty.EASY
        """
        if isinstance(level, cls):
            return level
        key = str(level or "").strip().lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        raise ValueError(f"Unknown difficulty: {level!r}. Use one of: Easy, Hard")


@dataclass(frozen=True)
class PlayingCard:
    id: str
    value: int
    suit: Suit

    @property
    def color(self) -> str:
        return self.suit.color

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "value": self.value,
            "suit": self.suit.symbol,
            "color": self.color,
        }


def generate_deck(difficulty: Difficulty, rng: Optional[random.Random] = None) -> List[PlayingCard]:
    """One card per (value, suit) for values 1..difficulty.max_value."""
    rng = rng or random.Random()
    deck: List[PlayingCard] = []
    for value in range(1, difficulty.max_value + 1):
        for suit in Suit:
            card_id = f"{value}-{suit.name.lower()}-{rng.getrandbits(32):08x}"
            deck.append(PlayingCard(id=card_id, value=value, suit=suit))
    return deck


def shuffle_deck(deck: Sequence[PlayingCard], rng: Optional[random.Random] = None) -> List[PlayingCard]:
    """Fisher–Yates on a copy: i from last index down to 1, partner j in [0, i]."""
    rng = rng or random.Random()
    shuffled = list(deck)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def draw_cards(
    count: int,
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
    solver: Callable[[Sequence[float]], SolveResult] = solve,
    max_attempts: int = MAX_DEAL_ATTEMPTS,
) -> List[PlayingCard]:
    """
    Deal `count` cards that the solver can make 24 from.

    After `max_attempts` unsolvable hands, falls back to the first `count`
    cards of a fresh unshuffled deck. That hand is NOT guaranteed solvable.
    """
    difficulty = Difficulty.parse(difficulty)
    deck_size = difficulty.max_value * len(Suit)
    if count < 1 or count > deck_size:
        raise ValueError(f"count must be between 1 and {deck_size}, got {count}")

    rng = rng or random.Random()

    for attempt in range(1, max_attempts + 1):
        hand = shuffle_deck(generate_deck(difficulty, rng), rng)[:count]
        if solver([card.value for card in hand]).solvable:
            logger.debug(
                "Dealt %s hand %s on attempt %d",
                difficulty.value, [card.value for card in hand], attempt,
            )
            return hand

    logger.warning(
        "No solvable %s hand after %d attempts; dealing unshuffled fallback",
        difficulty.value, max_attempts,
    )
    return generate_deck(difficulty, rng)[:count]


__all__ = [
    "MAX_DEAL_ATTEMPTS",
    "Suit", "Difficulty", "PlayingCard",
    "generate_deck", "shuffle_deck", "draw_cards",
]
