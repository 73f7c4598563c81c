"""Static preflop range tables and shorthand expansion.

Tables are indexed by seat position; positions past the end of a table reuse
its last (tightest) entry.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

__all__ = ["RangeConstructionHelper", "expand_shorthand"]

_COMBO_SUITS = ("h", "d", "c", "s")

_OPEN_RAISE: tuple[tuple[str, ...], ...] = (
    ("AA", "KK", "QQ", "JJ", "TT", "99", "88", "77", "AKs", "AQs", "AJs", "ATs", "AKo"),
    ("AA", "KK", "QQ", "JJ", "TT", "99", "88", "AKs", "AQs", "AJs", "ATs", "AKo", "KQs"),
    ("AA", "KK", "QQ", "JJ", "TT", "99", "AKs", "AQs", "AJs", "AKo", "KQs", "KJs"),
    ("AA", "KK", "QQ", "JJ", "TT", "AKs", "AQs", "AKo", "KQs", "AJs"),
    ("AA", "KK", "QQ", "JJ", "AKs", "AQs", "AKo"),
    ("AA", "KK", "QQ", "AKs", "AQs", "AKo"),
    ("AA", "KK", "AKs", "AKo"),
)

_THREE_BET_OOP: tuple[tuple[str, ...], ...] = (
    ("AA", "KK", "QQ", "JJ", "TT", "99", "88", "77", "AKs", "AQs", "AJs", "ATs", "AKo", "KQs", "KJs", "QJs", "JTs"),
    ("AA", "KK", "QQ", "JJ", "TT", "99", "88", "AKs", "AQs", "AJs", "ATs", "AKo", "KQs"),
    ("AA", "KK", "QQ", "JJ", "TT", "AKs", "AQs", "AJs", "AKo", "KQs"),
)

_THREE_BET_IP: tuple[tuple[str, ...], ...] = (
    (
        "AA", "KK", "QQ", "JJ", "TT", "99", "88", "77", "66", "55", "44", "33", "22",
        "AKs", "AQs", "AJs", "ATs", "A9s", "A8s", "A7s", "A6s", "A5s", "A4s", "A3s", "A2s",
        "KQs", "KJs", "KTs", "QJs", "JTs", "T9s", "98s", "87s", "76s", "65s", "54s",
        "AKo", "KKo", "QQo", "JJo", "TTo", "AQo", "KQo",
    ),
    (
        "AA", "KK", "QQ", "JJ", "TT", "99", "88", "77", "66", "55", "44", "33", "22",
        "AKs", "AQs", "AJs", "ATs", "A9s", "KQs", "KJs", "QJs", "JTs", "T9s", "98s",
        "AKo", "KKo", "QQo", "JJo", "TTo", "AQo", "KQo",
    ),
    (
        "AA", "KK", "QQ", "JJ", "TT", "99", "88", "AKs", "AQs", "AJs", "ATs", "KQs", "QJs", "JTs",
        "AKo", "KKo", "QQo", "JJo", "TTo", "AQo",
    ),
)

_COLD_CALL: tuple[tuple[str, ...], ...] = (
    (
        "AA", "KK", "QQ", "JJ", "TT", "99", "88", "77", "66", "55", "44", "33", "22",
        "AKs", "AQs", "AJs", "ATs", "A9s", "KQs", "KJs", "KTs", "QJs", "JTs", "T9s",
        "AKo", "KKo", "QQo", "JJo", "TTo", "AQo", "KQo",
    ),
    (
        "AA", "KK", "QQ", "JJ", "TT", "99", "88", "77", "66", "55", "44", "33", "22",
        "AKs", "AQs", "AJs", "ATs", "KQs", "KJs", "QJs", "JTs", "T9s",
        "AKo", "KKo", "QQo", "JJo", "TTo", "AQo", "KQo",
    ),
    (
        "AA", "KK", "QQ", "JJ", "TT", "99", "88", "77", "66", "55",
        "AKs", "AQs", "AJs", "KQs", "KJs", "QJs", "JTs",
        "AKo", "KKo", "QQo", "JJo", "TTo", "AQo",
    ),
)


def _pick(table: Sequence[tuple[str, ...]], position: int) -> list[str]:
    index = max(0, min(position, len(table) - 1))
    return list(table[index])


def expand_shorthand(hand: str) -> list[str]:
    """Expand one shorthand class (``AKs``, ``AKo``, ``AA``) into combos.

    Suited hands yield four combos, offsuit hands all twelve ordered suit
    pairings, and anything else a single literal ``hand + "hh"`` combo.
    """

    if "s" in hand:
        high, low = hand[0], hand[1]
        return [f"{high}{suit}{low}{suit}" for suit in _COMBO_SUITS]
    if "o" in hand:
        high, low = hand[0], hand[1]
        combos: list[str] = []
        for i, first in enumerate(_COMBO_SUITS):
            for second in _COMBO_SUITS[i + 1 :]:
                combos.append(f"{high}{first}{low}{second}")
                combos.append(f"{high}{second}{low}{first}")
        return combos
    return [hand + "hh"]


class RangeConstructionHelper:
    def open_raise_range(self, position: int, table_size: int = 9) -> list[str]:
        return _pick(_OPEN_RAISE, position)

    def three_bet_range(self, position: int, out_of_position: bool) -> list[str]:
        return _pick(_THREE_BET_OOP if out_of_position else _THREE_BET_IP, position)

    def cold_call_range(self, position: int, open_position: int = 0) -> list[str]:
        return _pick(_COLD_CALL, position)

    def convert_to_combos(self, hands: Iterable[str]) -> list[str]:
        combos: list[str] = []
        for hand in hands:
            combos.extend(expand_shorthand(hand))
        return combos
