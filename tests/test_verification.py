from __future__ import annotations

import asyncio
import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import pytest

from holdembots.analysis import concurrency
from holdembots.analysis.persistence import RESULTS_KEY, MemorySink, ResultSink
from holdembots.analysis.tournament import Standing, TournamentConfig
from holdembots.analysis.verification import (
    TournamentVerificationHarness,
    VerificationConfig,
    VerificationSnapshot,
    VerificationStatus,
    build_results,
    classify_deviation,
    expected_rank,
)
from holdembots.core.models import AIProfile, Difficulty
from holdembots.data.profiles import DEFAULT_PROFILES, StaticProfileCatalog


P1 = AIProfile("p1", "P1", tightness=0.2, aggression=0.8, position_awareness=0.7, difficulty_rating=1)
P2 = AIProfile("p2", "P2", tightness=0.8, aggression=0.2, position_awareness=0.2, difficulty_rating=1)
P3 = AIProfile("p3", "P3", difficulty_rating=3)

WAIT = 10.0


class _StubRunner:
    def __init__(self, ranks: dict[str, float]) -> None:
        self.ranks = ranks
        self.registered: list[AIProfile] = []
        self.games = 0
        self.evaluations = 0
        self.config: TournamentConfig | None = None
        self.on_evaluation = None
        self.on_game = None

    def register_profile(self, profile: AIProfile) -> None:
        self.registered.append(profile)

    def run_single_game(self, profiles: Sequence[AIProfile]) -> None:
        self.games += 1
        if self.on_game is not None:
            self.on_game(self.games)

    def run_full_evaluation(self, profiles: Sequence[AIProfile]) -> list[Standing]:
        self.evaluations += 1
        if self.on_evaluation is not None:
            self.on_evaluation(self.evaluations)
        return [Standing(profile, self.ranks[profile.id]) for profile in profiles]


def _harness(runner: _StubRunner, sink: ResultSink | None = None) -> TournamentVerificationHarness:
    def factory(config: TournamentConfig) -> _StubRunner:
        runner.config = config
        return runner

    catalog = StaticProfileCatalog([P1, P2, P3])
    harness = TournamentVerificationHarness(factory, catalog=catalog, sink=sink)
    harness.select_difficulties([Difficulty.EASY])
    return harness


def test_expected_rank_bounds() -> None:
    assert expected_rank(P1, 2) == 1
    assert expected_rank(P2, 2) == 2
    assert expected_rank(P2, 9) == 7
    assert expected_rank(P1, 1) == 1
    for profile in DEFAULT_PROFILES:
        for players in (1, 2, 6, 15):
            assert 1 <= expected_rank(profile, players) <= players


def test_classify_deviation_thresholds() -> None:
    assert classify_deviation(-5) is VerificationStatus.AHEAD
    assert classify_deviation(-4) is VerificationStatus.ON_TRACK
    assert classify_deviation(0) is VerificationStatus.ON_TRACK
    assert classify_deviation(4) is VerificationStatus.ON_TRACK
    assert classify_deviation(5) is VerificationStatus.BEHIND


def test_build_results_sorted_by_actual_rank() -> None:
    results = build_results([Standing(P2, 7.4), Standing(P1, 1.6)], total_players=10)
    assert [result.profile_name for result in results] == ["P1", "P2"]
    assert results[0].expected_rank == 3
    assert results[0].deviation == 3 - 2
    assert results[1].expected_rank == 8
    assert results[1].deviation == 8 - 7
    assert results[1].status is VerificationStatus.ON_TRACK


def test_config_validation() -> None:
    with pytest.raises(ValueError):
        VerificationConfig(tournament_count=0)
    with pytest.raises(ValueError):
        VerificationConfig(hands_per_tournament=-1)
    with pytest.raises(ValueError):
        VerificationConfig(starting_chips=0)


def test_selection_helpers() -> None:
    harness = _harness(_StubRunner({}))
    assert harness.selected_profiles == (P1, P2)

    harness.select_difficulties([Difficulty.HARD, Difficulty.EASY, Difficulty.HARD])
    assert harness.selected_difficulties == (Difficulty.HARD, Difficulty.EASY)
    assert [profile.id for profile in harness.selected_profiles] == ["p1", "p2", "p3"]

    harness.toggle_profile(P2)
    assert [profile.id for profile in harness.selected_profiles] == ["p1", "p3"]
    harness.toggle_profile(P2)
    assert [profile.id for profile in harness.selected_profiles] == ["p1", "p3", "p2"]

    harness.deselect_all()
    assert harness.selected_profiles == ()
    assert harness.selected_difficulties == ()

    harness.select_all()
    assert harness.selected_difficulties == tuple(Difficulty)
    assert len(harness.selected_profiles) == 3


def test_full_run_completes_and_persists() -> None:
    runner = _StubRunner({"p1": 1.0, "p2": 2.0})
    sink = MemorySink()
    harness = _harness(runner, sink)
    snapshots: list[VerificationSnapshot] = []
    harness.add_listener(snapshots.append)

    state = harness.run(VerificationConfig(tournament_count=10, hands_per_tournament=40), timeout=WAIT)

    assert state.completed is True
    assert state.is_running is False
    assert state.progress == 1.0
    assert state.current_game == 10
    assert [(r.profile_name, r.expected_rank, r.deviation, r.status) for r in state.results] == [
        ("P1", 1, 0, VerificationStatus.ON_TRACK),
        ("P2", 2, 0, VerificationStatus.ON_TRACK),
    ]
    assert len(snapshots) == 11
    assert [snapshot.current_game for snapshot in snapshots[:10]] == list(range(1, 11))
    assert snapshots[0].progress == pytest.approx(0.1)

    assert runner.registered == [P1, P2]
    assert runner.games == 10
    assert runner.config == TournamentConfig(
        player_count=2, games=10, starting_chips=1000, max_hands_per_game=40
    )
    assert sink.get(RESULTS_KEY) == [
        {"profile": "P1", "expected": 1, "actual": 1.0, "deviation": 0, "status": "onTrack"},
        {"profile": "P2", "expected": 2, "actual": 2.0, "deviation": 0, "status": "onTrack"},
    ]


def test_stop_from_listener_freezes_results_at_that_snapshot() -> None:
    runner = _StubRunner({"p1": 1.0, "p2": 2.0})
    sink = MemorySink()
    harness = _harness(runner, sink)
    snapshots: list[VerificationSnapshot] = []
    stopped = threading.Event()
    running_after_stop: list[bool] = []

    def on_snapshot(snapshot: VerificationSnapshot) -> None:
        snapshots.append(snapshot)
        if snapshot.current_game == 3:
            harness.stop()
            running_after_stop.append(harness.is_running)
            stopped.set()

    harness.add_listener(on_snapshot)
    # Game 4, if it starts at all, is still in flight when the stop lands.
    runner.on_game = lambda game: stopped.wait(WAIT) if game == 4 else None
    state = harness.run(VerificationConfig(tournament_count=10), timeout=WAIT)

    assert running_after_stop == [False]
    assert [snapshot.current_game for snapshot in snapshots] == [1, 2, 3]
    assert state.current_game == 3
    assert state.results == snapshots[2].results
    assert state.is_running is False
    assert state.completed is False
    assert runner.games in (3, 4)
    assert sink.get(RESULTS_KEY) is None


def test_stop_marks_state_stopped_immediately() -> None:
    runner = _StubRunner({"p1": 1.0, "p2": 2.0})
    harness = _harness(runner)
    entered = threading.Event()
    gate = threading.Event()

    def hold(game: int) -> None:
        entered.set()
        gate.wait(WAIT)

    runner.on_game = hold
    assert harness.start(VerificationConfig(tournament_count=5)) is True
    assert entered.wait(WAIT)
    harness.stop()
    assert harness.is_running is False
    assert harness.state.completed is False

    gate.set()
    state = harness.wait(timeout=WAIT)
    assert runner.games == 1
    assert state.current_game == 0
    assert state.results == ()

    runner.on_game = None
    assert harness.run(VerificationConfig(tournament_count=2), timeout=WAIT).completed is True



def test_runner_failure_keeps_partial_results() -> None:
    runner = _StubRunner({"p1": 1.0, "p2": 2.0})
    sink = MemorySink()
    harness = _harness(runner, sink)

    def explode(game: int) -> None:
        if game == 4:
            raise RuntimeError("engine crashed")

    runner.on_game = explode
    state = harness.run(VerificationConfig(tournament_count=10), timeout=WAIT)

    assert state.is_running is False
    assert state.completed is False
    assert state.current_game == 3
    assert len(state.results) == 2
    assert sink.get(RESULTS_KEY) is None


def test_empty_selection_is_a_noop() -> None:
    runner = _StubRunner({})
    harness = _harness(runner)
    harness.deselect_all()
    assert harness.start(VerificationConfig()) is False
    assert harness.state.is_running is False
    assert harness.pump() == 0
    assert runner.config is None


def test_second_start_is_refused_while_running() -> None:
    runner = _StubRunner({"p1": 1.0, "p2": 2.0})
    harness = _harness(runner)
    gate = threading.Event()
    runner.on_game = lambda game: gate.wait(WAIT)

    assert harness.start(VerificationConfig(tournament_count=2)) is True
    assert harness.is_running is True
    assert harness.start(VerificationConfig(tournament_count=2)) is False

    gate.set()
    state = harness.wait(timeout=WAIT)
    assert state.completed is True
    assert runner.games == 2


def test_pump_applies_events_on_caller_thread() -> None:
    runner = _StubRunner({"p1": 1.0, "p2": 2.0})
    harness = _harness(runner)
    harness.start(VerificationConfig(tournament_count=3))

    applied = 0
    while harness.is_running:
        applied += harness.pump(block=True, timeout=WAIT)
    assert applied == 4
    assert harness.state.completed is True


def test_watch_yields_each_state() -> None:
    runner = _StubRunner({"p1": 1.0, "p2": 2.0})
    harness = _harness(runner)

    async def collect():
        assert harness.start(VerificationConfig(tournament_count=4))
        return [state async for state in harness.watch()]

    states = asyncio.run(collect())
    assert [state.current_game for state in states] == [1, 2, 3, 4, 4]
    assert [state.is_running for state in states] == [True, True, True, True, False]
    assert states[-1].completed is True


def test_watch_reports_progress_while_worker_pool_is_saturated(monkeypatch: pytest.MonkeyPatch) -> None:
    pool = ThreadPoolExecutor(max_workers=1)
    monkeypatch.setattr(concurrency, "_WORKERS", pool)
    runner = _StubRunner({"p1": 1.0, "p2": 2.0})
    harness = _harness(runner)
    first_seen = threading.Event()
    seen_in_time: list[bool] = []
    runner.on_game = lambda game: seen_in_time.append(first_seen.wait(WAIT)) if game == 2 else None

    async def collect() -> list[int]:
        assert harness.start(VerificationConfig(tournament_count=3))
        games: list[int] = []
        async for state in harness.watch():
            games.append(state.current_game)
            first_seen.set()
        return games

    try:
        games = asyncio.run(collect())
    finally:
        pool.shutdown(wait=True)
    assert seen_in_time == [True]
    assert games == [1, 2, 3, 3]


class _BrokenSink:
    def write(self, key: str, payload: list[dict[str, Any]]) -> None:
        raise RuntimeError("storage unavailable")


def test_sink_failure_still_completes_the_run() -> None:
    runner = _StubRunner({"p1": 1.0, "p2": 2.0})
    harness = _harness(runner, _BrokenSink())

    state = harness.run(VerificationConfig(tournament_count=3), timeout=WAIT)
    assert state.is_running is False
    assert state.completed is True
    assert state.current_game == 3

    assert harness.start(VerificationConfig(tournament_count=1)) is True
    assert harness.wait(timeout=WAIT).completed is True
