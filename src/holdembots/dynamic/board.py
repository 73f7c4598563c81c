"""Board texture analysis.

Texture is computed once per board state.  ``wetness`` is a continuous score
used by bluff inference; ``category`` is the coarse bucket consumed by the
playbook modifier.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .cards import parse_cards, rank_of, suit_of

__all__ = ["BoardCategory", "BoardTexture", "analyze_board", "board_category"]

_HIGH_CARD_RANK = 10  # Q and above
_CONNECT_SPAN = 4


class BoardCategory(str, Enum):
    DRY = "dry"
    WET = "wet"
    PAIRED = "paired"
    RAINBOW = "rainbow"


@dataclass(frozen=True)
class BoardTexture:
    wetness: float
    category: BoardCategory
    is_paired: bool = False
    is_monotone: bool = False
    is_two_tone: bool = False
    has_high_cards: bool = False
    connectivity: float = 0.0


def _connectivity(ranks: list[int]) -> float:
    ordered = sorted(ranks)
    pairs = len(ordered) * (len(ordered) - 1) / 2
    if pairs <= 0:
        return 0.0
    close = 0
    for i in range(len(ordered)):
        for j in range(i + 1, len(ordered)):
            if ordered[j] - ordered[i] <= _CONNECT_SPAN:
                close += 1
    return close / pairs


def board_category(cards: Iterable[int | str]) -> BoardCategory:
    board = parse_cards(cards)
    if len(board) < 3:
        return BoardCategory.DRY
    ranks = [rank_of(c) for c in board]
    suits = {suit_of(c) for c in board}
    if len(set(ranks)) != len(ranks):
        return BoardCategory.PAIRED
    if len(suits) == 1:
        return BoardCategory.WET
    if len(suits) == len(board):
        return BoardCategory.RAINBOW
    ordered = sorted(ranks)
    straight_potential = sum(1 for low, high in zip(ordered, ordered[1:]) if high - low <= _CONNECT_SPAN)
    return BoardCategory.WET if straight_potential >= 2 else BoardCategory.DRY


def analyze_board(cards: Iterable[int | str]) -> BoardTexture:
    """Return the texture of ``cards`` (0 to 5 community cards)."""

    board = parse_cards(cards)
    if not board:
        return BoardTexture(wetness=0.0, category=BoardCategory.DRY)

    suit_counts = Counter(suit_of(c) for c in board)
    ranks = [rank_of(c) for c in board]
    is_monotone = max(suit_counts.values()) >= 3
    is_two_tone = len(suit_counts) == 2
    is_paired = len(set(ranks)) < len(ranks)
    connectivity = _connectivity(ranks)

    wetness = 0.0
    if is_monotone:
        wetness += 0.40
    elif is_two_tone:
        wetness += 0.15
    wetness += connectivity * 0.35
    if is_paired:
        wetness -= 0.10

    return BoardTexture(
        wetness=max(0.0, min(1.0, wetness)),
        category=board_category(board),
        is_paired=is_paired,
        is_monotone=is_monotone,
        is_two_tone=is_two_tone,
        has_high_cards=any(rank >= _HIGH_CARD_RANK for rank in ranks),
        connectivity=connectivity,
    )
