"""Built-in AI profile catalog grouped by difficulty tier.

A tier exposes every profile whose difficulty rating is at or below the
tier's ceiling, so harder tiers are supersets of easier ones.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from ..core.models import AIProfile, Difficulty

__all__ = ["DEFAULT_PROFILES", "ProfileCatalog", "StaticProfileCatalog", "default_catalog"]


class ProfileCatalog(Protocol):
    def tiers(self) -> tuple[Difficulty, ...]: ...

    def profiles_for(self, tier: Difficulty) -> list[AIProfile]: ...


DEFAULT_PROFILES: tuple[AIProfile, ...] = (
    AIProfile("newbie_bob", "Newbie Bob", 0.25, 0.08, 0.05, 0.02, 0.90, difficulty_rating=1),
    AIProfile("pure_fish", "Pure Fish", 0.15, 0.05, 0.02, 0.05, 0.95, difficulty_rating=1),
    AIProfile("calling_station", "Anna", 0.35, 0.15, 0.20, 0.05, 0.95, difficulty_rating=1),
    AIProfile("tight_mary", "Mary", 0.88, 0.15, 0.25, 0.01, 0.40, difficulty_rating=2),
    AIProfile("rock", "Rock", 0.90, 0.80, 0.10, 0.01, 0.05, difficulty_rating=2),
    AIProfile("maniac", "Maniac Mike", 0.25, 0.95, 0.40, 0.60, 0.15, difficulty_rating=2),
    AIProfile("bluff_jack", "Jack", 0.40, 0.92, 0.70, 0.55, 0.20, difficulty_rating=2),
    AIProfile("tilt_david", "David", 0.55, 0.55, 0.50, 0.18, 0.30, difficulty_rating=3),
    AIProfile("trapper_tony", "Tony", 0.58, 0.45, 0.75, 0.15, 0.45, difficulty_rating=3),
    AIProfile("short_stack_sam", "Sam", 0.60, 0.85, 0.65, 0.35, 0.15, difficulty_rating=3),
    AIProfile("fox", "Old Fox", 0.55, 0.68, 0.80, 0.22, 0.30, difficulty_rating=3),
    AIProfile("veteran_victor", "Victor", 0.62, 0.55, 0.82, 0.18, 0.35, difficulty_rating=4),
    AIProfile("academic", "Amy", 0.52, 0.62, 0.85, 0.25, 0.35, difficulty_rating=4),
    AIProfile("prodigy_pete", "Pete", 0.45, 0.82, 0.88, 0.32, 0.22, difficulty_rating=4),
    AIProfile("shark", "Shark Tom", 0.48, 0.78, 0.95, 0.28, 0.25, difficulty_rating=4),
)


class StaticProfileCatalog:
    def __init__(self, profiles: Iterable[AIProfile] = DEFAULT_PROFILES) -> None:
        self._profiles = tuple(profiles)

    def tiers(self) -> tuple[Difficulty, ...]:
        return tuple(Difficulty)

    def profiles_for(self, tier: Difficulty) -> list[AIProfile]:
        ceiling = Difficulty(tier).max_rating
        return [profile for profile in self._profiles if profile.difficulty_rating <= ceiling]


def default_catalog() -> StaticProfileCatalog:
    return StaticProfileCatalog()
