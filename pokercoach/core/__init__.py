"""
PokerCoach Core - Pure Python Texas Hold'em Game Logic

This module contains all game logic without any network dependencies.
"""

from pokercoach.core.card import Card, Deck, Rank, Suit, new_deck, shuffle_cards
from pokercoach.core.errors import (
    PokerError,
    DeckExhausted,
    InvalidActionError,
    NotYourTurnError,
    HandNotRunningError,
)
from pokercoach.core.player import Player
from pokercoach.core.hand import HandCategory, HandValue, evaluate_hand
from pokercoach.core.showdown import ShowdownResult, resolve_showdown
from pokercoach.core.rules import GamePhase, ActionType
from pokercoach.core.game import (
    TexasHoldemGame,
    TableState,
    SeatView,
    ActionLogEntry,
    LogEvent,
)

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "new_deck",
    "shuffle_cards",
    "PokerError",
    "DeckExhausted",
    "InvalidActionError",
    "NotYourTurnError",
    "HandNotRunningError",
    "Player",
    "HandCategory",
    "HandValue",
    "evaluate_hand",
    "ShowdownResult",
    "resolve_showdown",
    "GamePhase",
    "ActionType",
    "TexasHoldemGame",
    "TableState",
    "SeatView",
    "ActionLogEntry",
    "LogEvent",
]
