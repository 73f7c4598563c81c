"""Range-versus-range heuristics.

The layer is deliberately a heuristic one: range equity is reported as an even
split and individual opponent combos are scored with a flat placeholder
unless a richer estimator is injected.  What the module does pin down is the
bookkeeping around ranges (combo counts, membership, polarisation) so callers
get consistent numbers to build on.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from .cards import combo_key, parse_cards, split_combo
from .hand_strength import Eval7Oracle, HandStrengthOracle, strength_for_category

__all__ = [
    "ANY_TWO",
    "BetSizingRecommendation",
    "BettingStrategy",
    "RangeData",
    "RangeEquityEngine",
    "RangeEquityResult",
    "TOTAL_COMBOS",
]

logger = logging.getLogger(__name__)

ANY_TWO = "*"
TOTAL_COMBOS = 1326
STRONG_THRESHOLD = 0.7
WEAK_THRESHOLD = 0.3

ComboStrength = Callable[[str, Sequence[int]], float]


def _placeholder_combo_strength(combo: str, board: Sequence[int]) -> float:
    return 0.5


def _concrete_key(combo: str) -> tuple[int, int] | None:
    # Literal shorthand entries such as "AAhh" name no concrete pair of cards.
    try:
        return combo_key(split_combo(combo))
    except ValueError:
        return None


def _bounded(min_size: int, optimal: int, max_size: int, stack: int) -> tuple[int, int, int]:
    top = max(0, min(max_size, stack))
    mid = max(0, min(optimal, top))
    return max(0, min(min_size, mid)), mid, top


@dataclass(frozen=True)
class RangeData:
    combos: tuple[str, ...]
    weight: float = 1.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.weight <= 1.0:
            raise ValueError("range weight must be within [0, 1]")
        object.__setattr__(self, "combos", tuple(self.combos))

    @classmethod
    def any_two(cls) -> RangeData:
        return cls(combos=(ANY_TWO,))

    @property
    def is_any_two(self) -> bool:
        return ANY_TWO in self.combos

    @property
    def total_combos(self) -> int:
        if self.is_any_two:
            return TOTAL_COMBOS
        return len(self.combos)

    def contains(self, hand: Sequence[int | str]) -> bool:
        """Return True if the two-card ``hand`` is in range, in either card order."""

        if len(hand) != 2:
            return False
        if self.is_any_two:
            return True
        wanted = combo_key(parse_cards(hand))
        return any(_concrete_key(combo) == wanted for combo in self.combos)


@dataclass(frozen=True)
class RangeEquityResult:
    equity1: float
    equity2: float
    tie_equity: float
    combos1: int
    combos2: int

    @property
    def total_combos(self) -> int:
        return self.combos1 + self.combos2


class BettingStrategy(str, Enum):
    LINEAR = "linear"
    POLARIZED = "polarized"
    UNDERBALANCED = "underbalanced"


@dataclass(frozen=True)
class BetSizingRecommendation:
    min_size: int
    optimal_size: int
    max_size: int
    strategy: BettingStrategy
    rationale: str


class RangeEquityEngine:
    """Range analysis behind a single lock.

    The computations are pure; the lock only keeps concurrent callers from
    interleaving inside the shared oracle.
    """

    def __init__(
        self,
        oracle: HandStrengthOracle | None = None,
        combo_strength: ComboStrength | None = None,
    ) -> None:
        self._oracle = oracle or Eval7Oracle()
        self._combo_strength = combo_strength or _placeholder_combo_strength
        self._lock = threading.Lock()

    def analyze_range_equity(
        self,
        range1: RangeData,
        range2: RangeData,
        board: Sequence[int | str],
    ) -> RangeEquityResult:
        # Even split: no combinatorial enumeration is performed here.
        with self._lock:
            equity1 = 0.5
            return RangeEquityResult(
                equity1=equity1,
                equity2=1.0 - equity1,
                tie_equity=0.0,
                combos1=range1.total_combos,
                combos2=range2.total_combos,
            )

    def identify_bluff_catchers(
        self,
        opponent_range: RangeData,
        board: Sequence[int | str],
        hero_hand: Sequence[int | str],
    ) -> list[str]:
        board_cards = parse_cards(board)
        with self._lock:
            hero_strength = self._hero_strength(parse_cards(hero_hand), board_cards)
            if hero_strength >= STRONG_THRESHOLD:
                return []
            catchers = [
                combo
                for combo in opponent_range.combos
                if combo != ANY_TWO and self._combo_strength(combo, board_cards) < hero_strength
            ]
        logger.debug("bluff catchers", extra={"hero_strength": hero_strength, "count": len(catchers)})
        return catchers

    def value_to_bluff_ratio(
        self,
        value_hands: Sequence[str],
        bluff_hands: Sequence[str],
        board: Sequence[int | str] = (),
    ) -> float:
        if not value_hands or not bluff_hands:
            return 0.0
        return len(value_hands) / len(bluff_hands)

    def get_optimal_bet_sizing(
        self,
        betting_range: RangeData,
        board: Sequence[int | str],
        pot_size: int,
        stack_size: int,
    ) -> BetSizingRecommendation:
        board_cards = parse_cards(board)
        with self._lock:
            strengths = [
                self._combo_strength(combo, board_cards) for combo in betting_range.combos if combo != ANY_TWO
            ]
        total = max(1, betting_range.total_combos)
        value_ratio = sum(1 for s in strengths if s > STRONG_THRESHOLD) / total
        bluff_ratio = sum(1 for s in strengths if s < WEAK_THRESHOLD) / total

        if value_ratio > 0.3 and bluff_ratio > 0.15:
            overbet = value_ratio > 0.5 and stack_size > pot_size * 2
            low, optimal, high = _bounded(
                pot_size // 2,
                pot_size * 2 if overbet else pot_size * 3 // 4,
                stack_size,
                stack_size,
            )
            return BetSizingRecommendation(
                min_size=low,
                optimal_size=optimal,
                max_size=high,
                strategy=BettingStrategy.POLARIZED,
                rationale=f"value {int(value_ratio * 100)}%, bluffs {int(bluff_ratio * 100)}%",
            )
        low, optimal, high = _bounded(pot_size // 3, pot_size * 2 // 3, pot_size, stack_size)
        return BetSizingRecommendation(
            min_size=low,
            optimal_size=optimal,
            max_size=high,
            strategy=BettingStrategy.LINEAR,
            rationale="linear range, medium sizing",
        )

    def _hero_strength(self, hero: list[int], board: list[int]) -> float:
        if len(hero) != 2 or len(board) < 3:
            return 0.5
        return strength_for_category(self._oracle.evaluate(hero, board))
