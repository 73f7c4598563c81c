"""Display strings for the engines' closed enumerations.

Logic and tests work on the enums; anything user-facing looks its text up
here so wording can change without touching behaviour.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping

from .analysis.verification import VerificationStatus
from .dynamic.bluff import CallingAdvice
from .dynamic.playbook import StrategyPlaybook
from .dynamic.pot_odds import SprCategory
from .dynamic.range_equity import BettingStrategy, RangeEquityResult

__all__ = ["describe_range_equity", "label"]

_LABELS: Mapping[Enum, str] = {
    SprCategory.LOW: "low (set-mining)",
    SprCategory.MID: "mid (standard)",
    SprCategory.HIGH: "high (deep)",
    SprCategory.VERY_HIGH: "very high",
    CallingAdvice.WIDEN: "High bluff probability: widen calling range",
    CallingAdvice.TIGHTEN: "Low bluff probability: tighten calling range",
    CallingAdvice.POT_ODDS: "Uncertain: decide on pot odds",
    VerificationStatus.AHEAD: "ahead",
    VerificationStatus.ON_TRACK: "on track",
    VerificationStatus.BEHIND: "behind",
    BettingStrategy.LINEAR: "linear",
    BettingStrategy.POLARIZED: "polarized",
    BettingStrategy.UNDERBALANCED: "underbalanced",
    StrategyPlaybook.STANDARD: "Standard GTO style",
    StrategyPlaybook.LOOSE: "Loose, plays many hands",
    StrategyPlaybook.TIGHT: "Tight, strong hands only",
    StrategyPlaybook.AGGRESSIVE: "Aggressive, raises often",
    StrategyPlaybook.PASSIVE: "Passive, calls more than raises",
    StrategyPlaybook.BLUFFY: "Likes to bluff",
    StrategyPlaybook.CALLING_STATION: "Calls down to the river",
}


def label(value: Enum) -> str:
    """Return the display text for ``value``, falling back to its raw value."""

    return _LABELS.get(value, str(value.value))


def describe_range_equity(result: RangeEquityResult) -> str:
    return (
        f"P1: {int(result.equity1 * 100)}% ({result.combos1} combos), "
        f"P2: {int(result.equity2 * 100)}% ({result.combos2} combos)"
    )
