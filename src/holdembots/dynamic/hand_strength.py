"""Hand-strength oracle and the category-to-strength bucketing.

The engines treat hand evaluation as an opaque collaborator: anything with an
``evaluate(hole_cards, community_cards) -> int`` method works.  Categories
follow the usual ladder, 0 for high card up to 8 for a straight flush.  The
default oracle is backed by eval7.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import eval7

from .cards import card_int_to_str, parse_cards

__all__ = [
    "Eval7Oracle",
    "HandCategory",
    "HandStrengthOracle",
    "strength_for_category",
]


class HandCategory:
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    TRIPS = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    QUADS = 7
    STRAIGHT_FLUSH = 8


class HandStrengthOracle(Protocol):
    def evaluate(self, hole_cards: Sequence[int], community_cards: Sequence[int]) -> int: ...


_STRENGTH_BY_CATEGORY: dict[int, float] = {
    HandCategory.STRAIGHT_FLUSH: 0.95,
    HandCategory.QUADS: 0.9,
    HandCategory.FULL_HOUSE: 0.85,
    HandCategory.FLUSH: 0.8,
    HandCategory.STRAIGHT: 0.75,
    HandCategory.TRIPS: 0.65,
    HandCategory.TWO_PAIR: 0.5,
    HandCategory.PAIR: 0.4,
}
_FALLBACK_STRENGTH = 0.3


def strength_for_category(category: int) -> float:
    """Map a categorical rank onto a ``[0, 1]`` strength heuristic."""

    if category > HandCategory.STRAIGHT_FLUSH:
        # royal flush reported as its own category
        return _STRENGTH_BY_CATEGORY[HandCategory.STRAIGHT_FLUSH]
    return _STRENGTH_BY_CATEGORY.get(category, _FALLBACK_STRENGTH)


_EVAL7_TYPES: dict[str, int] = {
    "High Card": HandCategory.HIGH_CARD,
    "Pair": HandCategory.PAIR,
    "Two Pair": HandCategory.TWO_PAIR,
    "Trips": HandCategory.TRIPS,
    "Straight": HandCategory.STRAIGHT,
    "Flush": HandCategory.FLUSH,
    "Full House": HandCategory.FULL_HOUSE,
    "Quads": HandCategory.QUADS,
    "Straight Flush": HandCategory.STRAIGHT_FLUSH,
}


class Eval7Oracle:
    """Categorise a hand with eval7."""

    def __init__(self) -> None:
        # Cache eval7.Card objects for 0..51 to avoid repeated allocations.
        self._card_cache = [eval7.Card(card_int_to_str(idx)) for idx in range(52)]

    def evaluate(self, hole_cards: Sequence[int], community_cards: Sequence[int]) -> int:
        cards = parse_cards(list(hole_cards) + list(community_cards))
        if len(cards) < 5:
            raise ValueError("at least five cards are required for evaluation")
        value = eval7.evaluate([self._card_cache[c] for c in cards])
        return _EVAL7_TYPES.get(eval7.handtype(value), HandCategory.HIGH_CARD)
