"""
Typed failures raised by the game core.

Hosts catch PokerError to reject a request without touching game state.
"""


class PokerError(Exception):
    """Base class for all game-core errors."""


class DeckExhausted(PokerError):
    """Raised when more cards are requested than the deck holds."""

    def __init__(self, requested: int, remaining: int):
        super().__init__(f"Cannot deal {requested} cards, only {remaining} remain")
        self.requested = requested
        self.remaining = remaining


class InvalidActionError(PokerError):
    """An action that is not legal in the current table state."""


class NotYourTurnError(InvalidActionError):
    """A seat tried to act while another seat holds the turn."""


class HandNotRunningError(InvalidActionError):
    """An action or transition was attempted with no hand in progress."""
