"""Bluff inference from opponent statistics and betting history.

Each signal adds a fixed amount to an additive score.  The total is capped at
0.85 because no betting line proves a bluff.  Confidence only reflects the
sample size behind the opponent statistics.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..core.models import BetAction, OpponentModel, Street
from .board import BoardTexture

__all__ = [
    "BluffIndicator",
    "BluffInferenceEngine",
    "BluffSignal",
    "CallingAdvice",
]

logger = logging.getLogger(__name__)

MAX_BLUFF_PROBABILITY = 0.85
FULL_CONFIDENCE_HANDS = 30


class BluffSignal(str, Enum):
    HIGH_AGGRESSION = "highAggression"
    TRIPLE_BARREL = "tripleBarrel"
    DRY_BOARD_LARGE_BET = "dryBoardLargeBet"
    WET_BOARD_CONTINUE = "wetBoardContinue"
    RIVER_OVERBET = "riverOverbet"
    INCONSISTENT_SIZING = "inconsistentSizing"


class CallingAdvice(str, Enum):
    WIDEN = "widen"
    TIGHTEN = "tighten"
    POT_ODDS = "pot_odds"


@dataclass(frozen=True)
class BluffIndicator:
    bluff_probability: float
    confidence: float
    signals: tuple[BluffSignal, ...] = ()

    @property
    def recommendation(self) -> CallingAdvice:
        if self.bluff_probability > 0.6:
            return CallingAdvice.WIDEN
        if self.bluff_probability < 0.3:
            return CallingAdvice.TIGHTEN
        return CallingAdvice.POT_ODDS


def _sizing_variance(history: Sequence[BetAction], pot: int) -> float:
    ratios = np.array([action.amount / pot for action in history], dtype=float)
    if ratios.size == 0:
        return 0.0
    return float(np.var(ratios))


class BluffInferenceEngine:
    def evaluate(
        self,
        opponent: OpponentModel,
        board: BoardTexture,
        history: Sequence[BetAction],
        pot_size: int,
    ) -> BluffIndicator:
        score = 0.0
        signals: list[BluffSignal] = []
        pot = max(1, pot_size)

        if opponent.aggression_factor > 3.0:
            score += 0.20
            signals.append(BluffSignal.HIGH_AGGRESSION)

        if len(history) >= 3 and all(action.kind.is_aggressive for action in history):
            score += 0.25
            signals.append(BluffSignal.TRIPLE_BARREL)

        if board.wetness < 0.3:
            score += 0.15
            signals.append(BluffSignal.DRY_BOARD_LARGE_BET)
        elif board.wetness > 0.7 and len(history) >= 2:
            score += 0.10
            signals.append(BluffSignal.WET_BOARD_CONTINUE)

        if history:
            last = history[-1]
            if last.street == Street.RIVER and last.amount / pot > 1.2:
                score += 0.20
                signals.append(BluffSignal.RIVER_OVERBET)

        if len(history) >= 2 and _sizing_variance(history, pot) > 0.3:
            score += 0.10
            signals.append(BluffSignal.INCONSISTENT_SIZING)

        indicator = BluffIndicator(
            bluff_probability=min(MAX_BLUFF_PROBABILITY, score),
            confidence=max(0.0, min(1.0, opponent.total_hands / FULL_CONFIDENCE_HANDS)),
            signals=tuple(signals),
        )
        logger.debug(
            "bluff inference",
            extra={"probability": indicator.bluff_probability, "signals": [s.value for s in signals]},
        )
        return indicator
