"""
Random Bot Policies.

WeightedRandomPolicy is the default table opponent: it checks whenever it
can, and facing a bet it folds, raises or calls on a weighted roll.
CallingPolicy always checks or calls, which makes hands deterministic in
tests.
"""

import random
from typing import Optional

from pokercoach.agents.base import BotDecision, BotPolicy
from pokercoach.core.game import TableState
from pokercoach.core.rules import ActionType, BOT_RAISE_CEILING


class WeightedRandomPolicy(BotPolicy):
    """
    A policy that mixes folds, calls and small raises.

    Facing a bet, a uniform roll decides:
    - roll < fold_probability: fold
    - roll > 1 - raise_probability, while the bet is under raise_ceiling:
      raise by two big blinds
    - otherwise: call
    With nothing to call the policy always checks.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        fold_probability: float = 0.15,
        raise_probability: float = 0.15,
        raise_ceiling: int = BOT_RAISE_CEILING,
    ):
        """
        Args:
            rng: Random source; inject a seeded one for replayable games
            fold_probability: Chance of folding when facing a bet (0-1)
            raise_probability: Chance of raising when facing a bet (0-1)
            raise_ceiling: No raises once the bet to match reaches this
        """
        self.rng = rng if rng is not None else random.Random()
        self.fold_probability = fold_probability
        self.raise_probability = raise_probability
        self.raise_ceiling = raise_ceiling

    def decide(self, state: TableState, seat_id: str) -> BotDecision:
        seat = state.seat(seat_id)
        to_call = state.to_call(seat_id)

        if to_call == 0:
            return BotDecision(ActionType.CHECK)

        roll = self.rng.random()

        if roll < self.fold_probability:
            return BotDecision(ActionType.FOLD)

        raise_amount = state.big_blind * 2
        if (
            roll > 1 - self.raise_probability
            and state.current_bet < self.raise_ceiling
            and to_call + raise_amount <= seat.chips
        ):
            return BotDecision(ActionType.RAISE, raise_amount)

        return BotDecision(ActionType.CALL)

    def __repr__(self) -> str:
        return (
            f"WeightedRandomPolicy(fold={self.fold_probability}, "
            f"raise={self.raise_probability}, ceiling={self.raise_ceiling})"
        )


class CallingPolicy(BotPolicy):
    """Always check or call."""

    def decide(self, state: TableState, seat_id: str) -> BotDecision:
        if state.to_call(seat_id) == 0:
            return BotDecision(ActionType.CHECK)
        return BotDecision(ActionType.CALL)
