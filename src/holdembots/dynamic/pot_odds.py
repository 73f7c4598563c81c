"""Pot odds and stack-to-pot heuristics.

Every odds value here is the share of the final pot the caller contributes,
i.e. the equity required to break even.  Implied odds scale that requirement
with the chips still to be won on later streets; reverse implied odds shave
it for the risk of drawing to a second-best hand.  The effective requirement
is the minimum of the two.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..core.models import Street

__all__ = [
    "PotOddsCalculator",
    "PotOddsKind",
    "PotOddsResult",
    "SprCategory",
    "StackPotRatioCalculator",
    "remaining_streets",
]

_IMPLIED_CAP = 0.95
_REMAINING_STREETS = {
    Street.PREFLOP: 4,
    Street.FLOP: 3,
    Street.TURN: 2,
    Street.RIVER: 1,
}
_BASE_CONFIDENCE = {
    Street.PREFLOP: 0.6,
    Street.FLOP: 0.85,
    Street.TURN: 0.9,
    Street.RIVER: 1.0,
}


class PotOddsKind(str, Enum):
    DIRECT = "direct"
    IMPLIED = "implied"
    REVERSE_IMPLIED = "reverse_implied"
    EFFECTIVE = "effective"


@dataclass(frozen=True)
class PotOddsResult:
    kind: PotOddsKind
    odds: float
    required_equity: float
    break_even_pot: int
    is_profitable: bool
    confidence: float


def remaining_streets(street: Street) -> int:
    return _REMAINING_STREETS[Street(street)]


class PotOddsCalculator:
    """Closed-form pot odds evaluation; stateless."""

    def direct_odds(self, call_amount: int, pot_size: int) -> float:
        if call_amount <= 0:
            return 0.0
        return call_amount / (pot_size + call_amount)

    def implied_odds(
        self,
        call_amount: int,
        pot_size: int,
        stack_size: int,
        street: Street,
        hand_strength: float,
        is_draw: bool,
    ) -> float:
        direct = self.direct_odds(call_amount, pot_size)
        streets_left = remaining_streets(street)
        stack_to_pot = stack_size / max(pot_size, 1)

        multiplier = 1.0
        if is_draw and streets_left > 0:
            multiplier = 1.0 + min(hand_strength * 2.0, 0.8) + streets_left * 0.05

        if stack_to_pot > 5.0:
            multiplier *= 1.2
        elif stack_to_pot < 2.0:
            multiplier *= 0.8

        return min(direct * multiplier, _IMPLIED_CAP)

    def reverse_implied_odds(
        self,
        call_amount: int,
        pot_size: int,
        stack_size: int,
        opponent_stack: int,
        street: Street,
        drawing_dead_risk: float,
    ) -> float:
        direct = self.direct_odds(call_amount, pot_size)
        effective_stack = min(stack_size, opponent_stack)
        stack_to_pot = effective_stack / max(pot_size, 1)

        penalty = 0.0
        if stack_to_pot > 3.0 and drawing_dead_risk > 0.2:
            penalty = drawing_dead_risk * 0.15 * (remaining_streets(street) + 1)
        return max(0.0, direct - penalty)

    def effective_odds(
        self,
        call_amount: int,
        pot_size: int,
        my_stack: int,
        opponent_stack: int,
        street: Street,
        has_draw: bool,
        draw_equity: float,
    ) -> PotOddsResult:
        """Combine implied and reverse implied odds into one call decision.

        ``draw_equity`` doubles as the hand strength fed to the implied odds
        multiplier and, when drawing, as ``1 - drawing_dead_risk``.
        """

        implied = self.implied_odds(call_amount, pot_size, my_stack, street, draw_equity, has_draw)
        reverse = self.reverse_implied_odds(
            call_amount,
            pot_size,
            my_stack,
            opponent_stack,
            street,
            (1.0 - draw_equity) if has_draw else 0.0,
        )
        effective = min(implied, reverse)
        confidence = self._confidence(
            street,
            has_draw,
            min(my_stack, opponent_stack) / max(pot_size, 1),
        )
        if call_amount > 0:
            break_even = int(call_amount / max(draw_equity, 0.01)) - call_amount
        else:
            break_even = 0
        return PotOddsResult(
            kind=PotOddsKind.EFFECTIVE,
            odds=effective,
            required_equity=effective,
            break_even_pot=break_even,
            is_profitable=draw_equity > effective,
            confidence=confidence,
        )

    def should_call_with_draw(
        self,
        call_amount: int,
        pot_size: int,
        outs: int,
        street: Street,
        my_stack: int,
        opponent_stack: int,
        current_equity: float,
    ) -> bool:
        # outs are already folded into current_equity by the caller
        result = self.effective_odds(
            call_amount,
            pot_size,
            my_stack,
            opponent_stack,
            street,
            has_draw=True,
            draw_equity=current_equity,
        )
        return result.is_profitable

    @staticmethod
    def _confidence(street: Street, has_draw: bool, stack_to_pot: float) -> float:
        confidence = _BASE_CONFIDENCE[Street(street)]
        if has_draw:
            confidence *= 0.9
        if stack_to_pot > 10.0:
            confidence *= 0.85
        return confidence


class SprCategory(str, Enum):
    LOW = "low"
    MID = "mid"
    HIGH = "high"
    VERY_HIGH = "very_high"


class StackPotRatioCalculator:
    """SPR banding and bet sizing.

    With the default ``spr_uses_stack=False`` the "current" SPR inside
    :meth:`optimal_bet_size` is the pot measured against itself; pass True to
    size against the caller-supplied ``spr`` instead.
    """

    def __init__(self, spr_uses_stack: bool = False) -> None:
        self.spr_uses_stack = spr_uses_stack

    def spr(self, stack_size: int, pot_size: int) -> float:
        if pot_size <= 0:
            return float(stack_size)
        return stack_size / pot_size

    def category(self, spr: float) -> SprCategory:
        if spr < 3:
            return SprCategory.LOW
        if spr < 8:
            return SprCategory.MID
        if spr < 15:
            return SprCategory.HIGH
        return SprCategory.VERY_HIGH

    def optimal_bet_size(self, spr: float, pot_size: int, hand_strength: float, is_value_bet: bool) -> int:
        """Return pot/2, pot/3 or pot/4 depending on how far SPR sits from target.

        ``spr`` is ignored unless the calculator was built with
        ``spr_uses_stack=True``.
        """

        if is_value_bet:
            if hand_strength > 0.8:
                target = 0.5
            elif hand_strength > 0.6:
                target = 0.75
            else:
                target = 1.0
        else:
            target = 1.5

        if self.spr_uses_stack:
            current = spr
        else:
            current = self.spr(pot_size, pot_size)

        if current < target:
            return pot_size // 2
        if current < target * 1.5:
            return pot_size // 3
        return pot_size // 4
