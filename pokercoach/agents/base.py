"""
Bot Policy Interface for PokerCoach.

The engine only depends on ``decide(state, seat_id)``: a policy reads a
read-only TableState and returns a BotDecision. Policies can be swapped
without touching the state machine.

Usage:
    class MyPolicy(BotPolicy):
        def decide(self, state, seat_id):
            return BotDecision(ActionType.CALL)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from pokercoach.core.game import TableState
from pokercoach.core.rules import ActionType


@dataclass(frozen=True)
class BotDecision:
    """An action chosen by a policy; ``amount`` is the raise increment."""
    action: ActionType
    amount: int = 0


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    Implementations must only return actions that are legal for ``seat_id``
    in ``state``; the engine rejects anything else.
    """

    @abstractmethod
    def decide(self, state: TableState, seat_id: str) -> BotDecision:
        """
        Choose an action for ``seat_id``.

        Args:
            state: Snapshot of the table, taken while ``seat_id`` holds the turn
            seat_id: The seat to decide for

        Returns:
            BotDecision with the action and, for raises, the increment
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
