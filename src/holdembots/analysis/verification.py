"""Self-play verification of AI profile strength.

The harness plays a batch of simulated tournaments through a
:class:`~holdembots.analysis.tournament.TournamentRunner` and checks whether
each profile finishes roughly where its behavioural vector says it should.

Threading model: the tournaments run on a worker from the shared executor.
The worker never touches harness state.  It pushes immutable events onto a
queue, and the thread that calls :meth:`TournamentVerificationHarness.pump`,
:meth:`~TournamentVerificationHarness.wait` or
:meth:`~TournamentVerificationHarness.watch` applies them, so observers never
see a half-updated snapshot.  :meth:`~TournamentVerificationHarness.stop`
marks the state stopped at once; from then on the consumer drops every
snapshot still in flight.  The worker checks cancellation once per
tournament, so a game that has started always completes.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import AsyncIterator, Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Literal

from ..core.models import AIProfile, Difficulty
from ..data.profiles import ProfileCatalog, default_catalog
from .concurrency import run_blocking, submit
from .persistence import RESULTS_KEY, ResultSink
from .schemas import VerificationRecord, VerificationReport
from .tournament import RunnerFactory, Standing, TournamentConfig

__all__ = [
    "CancellationToken",
    "TournamentVerificationHarness",
    "VerificationConfig",
    "VerificationResult",
    "VerificationSnapshot",
    "VerificationState",
    "VerificationStatus",
    "build_results",
    "classify_deviation",
    "expected_rank",
]

logger = logging.getLogger(__name__)

_STATUS_THRESHOLD = 5


class VerificationStatus(str, Enum):
    AHEAD = "ahead"
    ON_TRACK = "onTrack"
    BEHIND = "behind"


@dataclass(frozen=True)
class VerificationConfig:
    tournament_count: int = 10
    hands_per_tournament: int = 50
    starting_chips: int = 1000

    def __post_init__(self) -> None:
        if self.tournament_count <= 0:
            raise ValueError("tournament_count must be positive")
        if self.hands_per_tournament <= 0:
            raise ValueError("hands_per_tournament must be positive")
        if self.starting_chips <= 0:
            raise ValueError("starting_chips must be positive")


@dataclass(frozen=True)
class VerificationResult:
    profile_name: str
    expected_rank: int
    actual_rank: float
    deviation: int
    status: VerificationStatus

    def to_record(self) -> VerificationRecord:
        return VerificationRecord(
            profile=self.profile_name,
            expected=self.expected_rank,
            actual=self.actual_rank,
            deviation=self.deviation,
            status=self.status.value,
        )


@dataclass(frozen=True)
class VerificationSnapshot:
    current_game: int
    progress: float
    results: tuple[VerificationResult, ...]


@dataclass(frozen=True)
class VerificationState:
    is_running: bool = False
    progress: float = 0.0
    current_game: int = 0
    results: tuple[VerificationResult, ...] = ()
    completed: bool = False


class CancellationToken:
    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(frozen=True)
class _Event:
    kind: Literal["snapshot", "finished", "stopped"]
    snapshot: VerificationSnapshot | None = None

    @property
    def terminal(self) -> bool:
        return self.kind != "snapshot"


def expected_rank(profile: AIProfile, total_players: int) -> int:
    """Rank a profile should reach from its aggression, position sense and looseness."""

    score = profile.aggression * 30 + profile.position_awareness * 20 + (1 - profile.tightness) * 15
    normalised = score / 65.0
    rank = round((1 - normalised) * (total_players - 1)) + 1
    return max(1, min(total_players, rank))


def classify_deviation(deviation: int) -> VerificationStatus:
    if deviation <= -_STATUS_THRESHOLD:
        return VerificationStatus.AHEAD
    if deviation >= _STATUS_THRESHOLD:
        return VerificationStatus.BEHIND
    return VerificationStatus.ON_TRACK


def build_results(standings: Iterable[Standing], total_players: int) -> tuple[VerificationResult, ...]:
    results: list[VerificationResult] = []
    for standing in standings:
        expected = expected_rank(standing.profile, total_players)
        deviation = expected - round(standing.average_rank)
        results.append(
            VerificationResult(
                profile_name=standing.profile.name,
                expected_rank=expected,
                actual_rank=float(standing.average_rank),
                deviation=deviation,
                status=classify_deviation(deviation),
            )
        )
    results.sort(key=lambda result: result.actual_rank)
    return tuple(results)


SnapshotListener = Callable[[VerificationSnapshot], None]


class TournamentVerificationHarness:
    """Owns profile selection and one verification run at a time.

    Starting a second run while one is active is refused with a warning;
    callers are expected to wait for or stop the active run first.
    """

    def __init__(
        self,
        runner_factory: RunnerFactory,
        *,
        catalog: ProfileCatalog | None = None,
        sink: ResultSink | None = None,
    ) -> None:
        self._runner_factory = runner_factory
        self._catalog = catalog or default_catalog()
        self._sink = sink
        self._state = VerificationState()
        self._selected: list[AIProfile] = []
        self._difficulties: tuple[Difficulty, ...] = (Difficulty.EASY,)
        self._listeners: list[SnapshotListener] = []
        self._token = CancellationToken()
        self._events: queue.Queue[_Event] | None = None

    # ------------------------------------------------------------------
    # Selection

    @property
    def selected_profiles(self) -> tuple[AIProfile, ...]:
        return tuple(self._selected)

    @property
    def selected_difficulties(self) -> tuple[Difficulty, ...]:
        return self._difficulties

    def select_difficulties(self, tiers: Iterable[Difficulty]) -> None:
        self._difficulties = tuple(dict.fromkeys(Difficulty(tier) for tier in tiers))
        self._selected = self._profiles_for(self._difficulties)

    def select_all(self) -> None:
        self._difficulties = tuple(self._catalog.tiers())
        self._selected = self._profiles_for(self._difficulties)

    def deselect_all(self) -> None:
        self._difficulties = ()
        self._selected = []

    def toggle_profile(self, profile: AIProfile) -> None:
        for index, existing in enumerate(self._selected):
            if existing.id == profile.id:
                del self._selected[index]
                return
        self._selected.append(profile)

    def _profiles_for(self, tiers: Sequence[Difficulty]) -> list[AIProfile]:
        seen: set[str] = set()
        unique: list[AIProfile] = []
        for tier in tiers:
            for profile in self._catalog.profiles_for(tier):
                if profile.id not in seen:
                    seen.add(profile.id)
                    unique.append(profile)
        return unique

    # ------------------------------------------------------------------
    # Observation

    @property
    def state(self) -> VerificationState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    def add_listener(self, listener: SnapshotListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Run control

    def start(self, config: VerificationConfig) -> bool:
        """Launch a run on the worker pool; returns False when nothing was started."""

        if not self._selected:
            return False
        if self._state.is_running:
            logger.warning("verification already running; ignoring start request")
            return False

        profiles = tuple(self._selected)
        self._token = CancellationToken()
        self._events = queue.Queue()
        self._state = VerificationState(is_running=True)
        logger.debug(
            "verification started",
            extra={"profiles": len(profiles), "tournaments": config.tournament_count},
        )
        submit(self._work, config, profiles, self._token, self._events)
        return True

    def stop(self) -> None:
        """Cancel the active run.

        The state stops reporting progress immediately; the worker finishes the
        game it is playing and any snapshot it publishes afterwards is dropped.
        """

        self._token.cancel()
        if self._state.is_running:
            self._state = replace(self._state, is_running=False)
            logger.debug("verification stopped", extra={"current_game": self._state.current_game})

    def pump(self, *, block: bool = False, timeout: float | None = None) -> int:
        """Consume queued worker events on the calling thread; returns how many."""

        consumed = 0
        events = self._events
        if events is None:
            return 0
        while True:
            try:
                event = events.get(block=block and consumed == 0, timeout=timeout)
            except queue.Empty:
                return consumed
            self._apply(event)
            consumed += 1
            if event.terminal:
                return consumed

    def wait(self, timeout: float | None = None) -> VerificationState:
        """Block until the worker has published its last event, applying each one."""

        while self._events is not None:
            try:
                event = self._events.get(timeout=timeout)
            except queue.Empty:
                break
            self._apply(event)
        return self._state

    async def watch(self) -> AsyncIterator[VerificationState]:
        """Yield the state after each applied event until the worker is done."""

        while self._events is not None:
            event = await run_blocking(self._events.get)
            if self._apply(event):
                yield self._state

    def run(self, config: VerificationConfig, timeout: float | None = None) -> VerificationState:
        if not self.start(config):
            return self._state
        return self.wait(timeout)

    def _apply(self, event: _Event) -> bool:
        """Fold one worker event into the state; False when it was dropped."""

        if event.terminal:
            self._events = None
        if self._token.cancelled:
            if event.terminal:
                self._state = replace(self._state, is_running=False)
                return True
            return False

        if event.kind == "stopped":
            self._state = replace(self._state, is_running=False)
            return True

        snapshot = event.snapshot
        if snapshot is None:
            return False
        if event.kind == "finished":
            self._state = VerificationState(
                is_running=False,
                progress=1.0,
                current_game=snapshot.current_game,
                results=snapshot.results,
                completed=True,
            )
        else:
            self._state = replace(
                self._state,
                progress=snapshot.progress,
                current_game=snapshot.current_game,
                results=snapshot.results,
            )
        for listener in list(self._listeners):
            listener(snapshot)
        return True

    # ------------------------------------------------------------------
    # Worker

    def _work(
        self,
        config: VerificationConfig,
        profiles: tuple[AIProfile, ...],
        token: CancellationToken,
        events: queue.Queue[_Event],
    ) -> None:
        total_players = len(profiles)
        count = config.tournament_count
        terminal = _Event("stopped")
        try:
            runner = self._runner_factory(
                TournamentConfig(
                    player_count=total_players,
                    games=count,
                    starting_chips=config.starting_chips,
                    max_hands_per_game=config.hands_per_tournament,
                )
            )
            for profile in profiles:
                runner.register_profile(profile)

            for game in range(1, count + 1):
                if token.cancelled:
                    break
                runner.run_single_game(profiles)
                results = build_results(runner.run_full_evaluation(profiles), total_players)
                events.put(_Event("snapshot", VerificationSnapshot(game, game / count, results)))

            if not token.cancelled:
                final = build_results(runner.run_full_evaluation(profiles), total_players)
                self._persist(final)
                terminal = _Event("finished", VerificationSnapshot(count, 1.0, final))
        except Exception:
            logger.exception("verification aborted by tournament runner failure")
        finally:
            events.put(terminal)

    def _persist(self, results: tuple[VerificationResult, ...]) -> None:
        if self._sink is None:
            return
        report = VerificationReport(records=[result.to_record() for result in results])
        try:
            self._sink.write(RESULTS_KEY, report.to_list())
        except Exception:
            logger.exception("failed to persist verification results")
