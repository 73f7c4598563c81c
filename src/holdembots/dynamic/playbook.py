"""Personality playbooks layered on top of an AI profile.

A playbook is a named bundle of multipliers.  :class:`PlaybookModifier`
reshapes a profile for one decision (playbook, then board texture, then seat
position, always in that order), and :class:`PlaybookStore` tracks which
playbook each player currently runs, nudging it after wins and losses.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping

from ..core.models import AIProfile, HandPhase
from .board import BoardCategory

__all__ = [
    "GameOutcome",
    "PlaybookModifier",
    "PlaybookStore",
    "StrategyPlaybook",
]

logger = logging.getLogger(__name__)


class StrategyPlaybook(str, Enum):
    STANDARD = "standard"
    LOOSE = "loose"
    TIGHT = "tight"
    AGGRESSIVE = "aggressive"
    PASSIVE = "passive"
    BLUFFY = "bluffy"
    CALLING_STATION = "callingStation"


class GameOutcome(str, Enum):
    WIN = "win"
    LOSS = "loss"
    SPLIT = "split"


_CAPS: Mapping[str, float] = {
    "aggression": 1.0,
    "bluff_freq": 0.8,
    "call_down_tendency": 1.0,
}

_PLAYBOOK_MULTIPLIERS: Mapping[StrategyPlaybook, Mapping[str, float]] = {
    StrategyPlaybook.STANDARD: {},
    StrategyPlaybook.TIGHT: {"tightness": 0.7, "bluff_freq": 0.5, "call_down_tendency": 0.6},
    StrategyPlaybook.LOOSE: {"tightness": 1.3},
    StrategyPlaybook.AGGRESSIVE: {"aggression": 1.3},
    StrategyPlaybook.PASSIVE: {"aggression": 0.7},
    StrategyPlaybook.BLUFFY: {"bluff_freq": 1.5},
    StrategyPlaybook.CALLING_STATION: {"call_down_tendency": 1.4},
}

_TEXTURE_MULTIPLIERS: Mapping[BoardCategory, Mapping[str, float]] = {
    BoardCategory.DRY: {"bluff_freq": 1.2, "aggression": 1.1},
    BoardCategory.WET: {"bluff_freq": 0.7, "call_down_tendency": 1.2},
    BoardCategory.PAIRED: {"bluff_freq": 0.8, "aggression": 0.9},
    BoardCategory.RAINBOW: {},
}

_EARLY_POSITION = {"tightness": 1.1, "aggression": 0.9}
_LATE_POSITION = {"tightness": 0.9, "bluff_freq": 1.15}
_LATE_POSITION_START = 6

_ESCALATION = {
    StrategyPlaybook.TIGHT: StrategyPlaybook.STANDARD,
    StrategyPlaybook.STANDARD: StrategyPlaybook.AGGRESSIVE,
    StrategyPlaybook.AGGRESSIVE: StrategyPlaybook.BLUFFY,
}
_DEESCALATION = {
    StrategyPlaybook.AGGRESSIVE: StrategyPlaybook.PASSIVE,
    StrategyPlaybook.BLUFFY: StrategyPlaybook.TIGHT,
    StrategyPlaybook.LOOSE: StrategyPlaybook.TIGHT,
}
_WINS_PER_ESCALATION = 5
_LOSSES_PER_DEESCALATION = 3


def _scaled(profile: AIProfile, multipliers: Mapping[str, float], *, capped: bool) -> AIProfile:
    if not multipliers:
        return profile
    changes: dict[str, float] = {}
    for attr, factor in multipliers.items():
        value = getattr(profile, attr) * factor
        cap = _CAPS.get(attr) if capped else None
        if cap is not None:
            value = max(0.0, min(cap, value))
        changes[attr] = value
    return replace(profile, **changes)


@dataclass(frozen=True)
class PlaybookModifier:
    playbook: StrategyPlaybook
    hand_phase: HandPhase
    board_texture: BoardCategory
    position: int

    def apply(self, profile: AIProfile) -> AIProfile:
        adjusted = _scaled(profile, _PLAYBOOK_MULTIPLIERS[self.playbook], capped=True)
        adjusted = _scaled(adjusted, _TEXTURE_MULTIPLIERS[self.board_texture], capped=False)
        if self.position == 0:
            adjusted = _scaled(adjusted, _EARLY_POSITION, capped=False)
        elif self.position >= _LATE_POSITION_START:
            adjusted = _scaled(adjusted, _LATE_POSITION, capped=False)
        return adjusted


@dataclass
class PlaybookStore:
    """Per-player playbook state owned by whoever drives the game loop.

    Not synchronised: callers sharing a store across threads must serialise
    access themselves.
    """

    _playbooks: dict[str, StrategyPlaybook] = field(default_factory=dict)
    _outcomes: dict[str, int] = field(default_factory=dict)

    def get_playbook(self, player_id: str) -> StrategyPlaybook:
        return self._playbooks.get(player_id, StrategyPlaybook.STANDARD)

    def assign_playbook(self, player_id: str, playbook: StrategyPlaybook) -> None:
        self._playbooks[player_id] = StrategyPlaybook(playbook)

    def assign_random_playbook(self, player_id: str, rng: random.Random | None = None) -> StrategyPlaybook:
        chooser = rng or random.Random()
        playbook = chooser.choice(list(StrategyPlaybook))
        self._playbooks[player_id] = playbook
        return playbook

    def outcome_count(self, player_id: str) -> int:
        return self._outcomes.get(player_id, 0)

    def record_outcome(self, player_id: str, outcome: GameOutcome) -> StrategyPlaybook:
        """Count the outcome and apply any resulting transition."""

        outcome = GameOutcome(outcome)
        current = self.get_playbook(player_id)
        if outcome is GameOutcome.SPLIT:
            return current

        count = self._outcomes.get(player_id, 0) + 1
        self._outcomes[player_id] = count
        updated = current
        if outcome is GameOutcome.WIN and count % _WINS_PER_ESCALATION == 0:
            updated = _ESCALATION.get(current, current)
        elif outcome is GameOutcome.LOSS and count % _LOSSES_PER_DEESCALATION == 0:
            updated = _DEESCALATION.get(current, current)
        self._playbooks[player_id] = updated

        if updated is not current:
            logger.debug(
                "playbook transition",
                extra={"player_id": player_id, "from": current.value, "to": updated.value, "outcomes": count},
            )
        return updated

    def reset_playbook(self, player_id: str) -> None:
        self._playbooks.pop(player_id, None)
        self._outcomes.pop(player_id, None)
