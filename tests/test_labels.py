from __future__ import annotations

from holdembots.analysis.verification import VerificationStatus
from holdembots.labels import describe_range_equity, label
from holdembots.dynamic.bluff import CallingAdvice
from holdembots.dynamic.board import BoardCategory
from holdembots.dynamic.playbook import StrategyPlaybook
from holdembots.dynamic.pot_odds import SprCategory
from holdembots.dynamic.range_equity import RangeEquityResult


def test_labels_for_known_enums() -> None:
    assert label(SprCategory.LOW) == "low (set-mining)"
    assert label(CallingAdvice.WIDEN).startswith("High bluff probability")
    assert label(VerificationStatus.ON_TRACK) == "on track"
    assert label(StrategyPlaybook.CALLING_STATION) == "Calls down to the river"


def test_every_playbook_and_spr_category_has_text() -> None:
    for value in (*StrategyPlaybook, *SprCategory, *CallingAdvice):
        assert label(value) != value.value


def test_unlabelled_enum_falls_back_to_value() -> None:
    assert label(BoardCategory.RAINBOW) == BoardCategory.RAINBOW.value


def test_describe_range_equity() -> None:
    result = RangeEquityResult(equity1=0.5, equity2=0.5, tie_equity=0.0, combos1=1326, combos2=4)
    assert describe_range_equity(result) == "P1: 50% (1326 combos), P2: 50% (4 combos)"
