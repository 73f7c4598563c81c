from __future__ import annotations

import pytest

from holdembots.dynamic.cards import (
    RANKS,
    SUITS,
    card_int_to_str,
    combo_key,
    parse_cards,
    rank_of,
    split_combo,
    str_to_int,
    suit_of,
)


def test_str_to_int_covers_the_deck():
    seen = set()
    for r in RANKS:
        for s in SUITS:
            ci = str_to_int(r + s)
            assert 0 <= ci < 52
            assert card_int_to_str(ci) == r + s
            assert RANKS[rank_of(ci)] == r
            assert SUITS[suit_of(ci)] == s
            seen.add(ci)
    assert len(seen) == 52


def test_str_to_int_is_case_tolerant_and_strict_on_shape():
    assert str_to_int("aS") == str_to_int("As")
    for bad in ("A", "Ax", "1h", "Ahh", ""):
        with pytest.raises(ValueError):
            str_to_int(bad)


def test_parse_cards_mixes_ints_and_strings():
    assert parse_cards(["Ah", 0, "2c"]) == [str_to_int("Ah"), 0, str_to_int("2c")]
    with pytest.raises(ValueError):
        parse_cards([52])


def test_combo_helpers():
    a, b = split_combo("AhKd")
    assert card_int_to_str(a) + card_int_to_str(b) == "AhKd"
    assert combo_key([a, b]) == combo_key([b, a])
    with pytest.raises(ValueError):
        split_combo("AhK")
