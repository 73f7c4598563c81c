from __future__ import annotations

from collections.abc import Iterable, Sequence

RANKS = "23456789TJQKA"
SUITS = "shdc"  # spades, hearts, diamonds, clubs


def card_int_to_str(c: int) -> str:
    r = RANKS[c // 4]
    s = SUITS[c % 4]
    return r + s


def str_to_int(card: str) -> int:
    if len(card) != 2:
        raise ValueError(f"invalid card '{card}'")
    r, s = card[0].upper(), card[1].lower()
    if r not in RANKS or s not in SUITS:
        raise ValueError(f"invalid card '{card}'")
    return RANKS.index(r) * 4 + SUITS.index(s)


def rank_of(c: int) -> int:
    return c // 4


def suit_of(c: int) -> int:
    return c % 4


def parse_cards(cards: Iterable[int | str]) -> list[int]:
    """Accept ints (0..51) or two-character strings and return ints."""

    out: list[int] = []
    for card in cards:
        if isinstance(card, str):
            out.append(str_to_int(card))
        else:
            value = int(card)
            if not 0 <= value < 52:
                raise ValueError(f"card index out of range: {value}")
            out.append(value)
    return out


def split_combo(combo: str) -> tuple[int, int]:
    """Decode a four-character combo such as ``"AhKd"``."""

    if len(combo) != 4:
        raise ValueError(f"invalid combo '{combo}'")
    return str_to_int(combo[:2]), str_to_int(combo[2:])


def combo_key(cards: Sequence[int]) -> tuple[int, int]:
    """Order-independent identity of a two-card hand."""

    a, b = int(cards[0]), int(cards[1])
    return (a, b) if a < b else (b, a)

