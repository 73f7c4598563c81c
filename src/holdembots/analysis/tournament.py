"""Tournament runner contract and an aggregating implementation.

The verification harness never plays poker itself.  It drives a
:class:`TournamentRunner`, which owns the game engine and reports average
finishing ranks.  :class:`AggregatingTournamentRunner` is the stock runner:
it delegates each game to a :class:`GameSimulator` and keeps running totals
of finishing positions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from ..core.models import AIProfile

__all__ = [
    "AggregatingTournamentRunner",
    "GameSimulator",
    "RunnerFactory",
    "Standing",
    "TournamentConfig",
    "TournamentRunner",
    "UNPLAYED_RANK",
]

logger = logging.getLogger(__name__)

# Reported for a profile that has not finished a game yet.
UNPLAYED_RANK = 52.0


@dataclass(frozen=True)
class TournamentConfig:
    player_count: int
    games: int = 10
    starting_chips: int = 1000
    max_hands_per_game: int = 100


@dataclass(frozen=True)
class Standing:
    profile: AIProfile
    average_rank: float
    wins: int = 0


class TournamentRunner(Protocol):
    def register_profile(self, profile: AIProfile) -> None: ...

    def run_single_game(self, profiles: Sequence[AIProfile]) -> object: ...

    def run_full_evaluation(self, profiles: Sequence[AIProfile]) -> list[Standing]: ...


RunnerFactory = Callable[[TournamentConfig], TournamentRunner]


class GameSimulator(Protocol):
    def play(self, profiles: Sequence[AIProfile], config: TournamentConfig) -> Sequence[AIProfile]:
        """Play one game and return the profiles in finishing order, winner first."""
        ...


@dataclass
class _Tally:
    profile: AIProfile
    total_positions: int = 0
    games_played: int = 0
    wins: int = 0

    @property
    def average_rank(self) -> float:
        if self.games_played <= 0:
            return UNPLAYED_RANK
        return self.total_positions / self.games_played


class AggregatingTournamentRunner:
    def __init__(self, config: TournamentConfig, simulator: GameSimulator) -> None:
        self.config = config
        self._simulator = simulator
        self._profiles: dict[str, AIProfile] = {}
        self._tallies: dict[str, _Tally] = {}

    def register_profile(self, profile: AIProfile) -> None:
        self._profiles[profile.id] = profile

    def run_single_game(self, profiles: Sequence[AIProfile]) -> list[AIProfile]:
        finishing = list(self._simulator.play(profiles, self.config))
        for position, profile in enumerate(finishing, start=1):
            tally = self._tallies.get(profile.id)
            if tally is None:
                tally = _Tally(profile=profile)
                self._tallies[profile.id] = tally
            tally.total_positions += position
            tally.games_played += 1
            if position == 1:
                tally.wins += 1
        logger.debug("game finished", extra={"winner": finishing[0].name if finishing else None})
        return finishing

    def run_full_evaluation(self, profiles: Sequence[AIProfile]) -> list[Standing]:
        standings = []
        for profile in profiles:
            tally = self._tallies.get(profile.id)
            if tally is None:
                standings.append(Standing(profile=profile, average_rank=UNPLAYED_RANK))
            else:
                standings.append(Standing(profile=profile, average_rank=tally.average_rank, wins=tally.wins))
        return sorted(standings, key=lambda standing: standing.average_rank)
