"""
PokerCoach - Texas Hold'em Training Table

A Texas Hold'em practice table with:
- Pure Python game core (deck, hand evaluator, betting state machine)
- Bot opponents behind a replaceable policy interface
- A coaching layer: advice, hand reviews and skill assessment
- FastAPI server for a browser front end

Usage:
    from pokercoach.core import TexasHoldemGame, evaluate_hand
    from pokercoach.coach import GameSession
"""

__version__ = "0.2.0"

from pokercoach.core.card import Card, Deck
from pokercoach.core.player import Player
from pokercoach.core.game import TexasHoldemGame
from pokercoach.core.hand import HandCategory, evaluate_hand

__all__ = [
    "Card",
    "Deck",
    "Player",
    "TexasHoldemGame",
    "HandCategory",
    "evaluate_hand",
    "__version__",
]
