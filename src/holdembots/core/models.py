from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Street(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"


class HandPhase(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"


class ActionKind(str, Enum):
    CHECK = "check"
    BET = "bet"
    CALL = "call"
    RAISE = "raise"
    FOLD = "fold"

    @property
    def is_aggressive(self) -> bool:
        return self in (ActionKind.BET, ActionKind.RAISE)


@dataclass(frozen=True)
class BetAction:
    """One entry of a hand's betting history."""

    street: Street
    kind: ActionKind
    amount: int = 0


@dataclass(frozen=True)
class OpponentModel:
    """Observed tendencies of an opponent, read-only for the engines."""

    aggression_factor: float = 0.0
    vpip: float = 0.0
    total_hands: int = 0


class Difficulty(str, Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def max_rating(self) -> int:
        return _DIFFICULTY_CEILING[self]


_DIFFICULTY_CEILING = {
    Difficulty.EASY: 1,
    Difficulty.NORMAL: 2,
    Difficulty.HARD: 3,
    Difficulty.EXPERT: 4,
}


@dataclass(frozen=True)
class AIProfile:
    """Behavioural vector of a computer-controlled player.

    Values are nominally in ``[0, 1]``.  Profiles are never mutated; every
    adjustment goes through :func:`dataclasses.replace`.
    """

    id: str
    name: str
    tightness: float = 0.5
    aggression: float = 0.5
    position_awareness: float = 0.5
    bluff_freq: float = 0.2
    call_down_tendency: float = 0.3
    difficulty_rating: int = 1
