"""
Texas Hold'em Rules and Constants.

Table conventions used by the engine:

1. Heads-up (2 players): Dealer posts small blind, non-dealer posts big blind.
   Preflop: Dealer acts first. Postflop: Non-dealer acts first.

2. Three or more players: small blind sits left of the dealer, big blind
   left of the small blind, and under-the-gun (left of the big blind) acts
   first preflop.

3. Postflop the first seat left of the dealer that is still in the hand
   acts first.

4. A raise of N makes the bet to match current_bet + N.
"""

from enum import Enum
from typing import Tuple


class GamePhase(Enum):
    """Phases of a Texas Hold'em hand, in order."""
    WAITING = "WAITING"      # No hand dealt yet
    PREFLOP = "PREFLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"
    SHOWDOWN = "SHOWDOWN"
    GAME_OVER = "GAME_OVER"  # Pot awarded, waiting for the next hand


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"


# Phase order used for monotonic advancement
PHASE_ORDER = (
    GamePhase.PREFLOP,
    GamePhase.FLOP,
    GamePhase.TURN,
    GamePhase.RIVER,
    GamePhase.SHOWDOWN,
    GamePhase.GAME_OVER,
)

BETTING_PHASES = (
    GamePhase.PREFLOP,
    GamePhase.FLOP,
    GamePhase.TURN,
    GamePhase.RIVER,
)

# Default game settings
DEFAULT_SMALL_BLIND = 10
DEFAULT_BIG_BLIND = 20
DEFAULT_BUY_IN = 1000
MIN_PLAYERS = 2
MAX_PLAYERS = 5

# Bots stop raising once the bet to match reaches this amount
BOT_RAISE_CEILING = 200

# Cards per phase
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Community cards visible in each phase
COMMUNITY_CARDS_BY_PHASE = {
    GamePhase.WAITING: 0,
    GamePhase.PREFLOP: 0,
    GamePhase.FLOP: 3,
    GamePhase.TURN: 4,
    GamePhase.RIVER: 5,
    GamePhase.SHOWDOWN: 5,
}

USER_ID = "user"
USER_NAME = "You"
BOT_NAMES = ("AlphaBot", "BetaBot", "GammaBot", "DeltaBot")


def next_phase(phase: GamePhase) -> GamePhase:
    """Return the phase that follows ``phase`` within a hand."""
    if phase not in PHASE_ORDER or phase == GamePhase.GAME_OVER:
        raise ValueError(f"No phase follows {phase.name}")
    return PHASE_ORDER[PHASE_ORDER.index(phase) + 1]


def get_blind_positions(num_players: int, dealer_position: int) -> Tuple[int, int]:
    """
    Calculate small blind and big blind positions.

    In heads-up play, the dealer posts the small blind.

    Args:
        num_players: Number of seats
        dealer_position: Position of the dealer (0-indexed)

    Returns:
        Tuple of (small_blind_position, big_blind_position)
    """
    if num_players < 2:
        raise ValueError("Need at least 2 players")

    if num_players == 2:
        sb_pos = dealer_position
        bb_pos = (dealer_position + 1) % num_players
    else:
        sb_pos = (dealer_position + 1) % num_players
        bb_pos = (dealer_position + 2) % num_players

    return sb_pos, bb_pos


def get_first_to_act_preflop(num_players: int, dealer_position: int) -> int:
    """
    Get the position of the first player to act preflop.

    - Heads-up: Dealer (small blind) acts first preflop
    - Otherwise: UTG (left of big blind) acts first
    """
    if num_players == 2:
        return dealer_position
    return (dealer_position + 3) % num_players


def get_first_to_act_postflop(num_players: int, dealer_position: int) -> int:
    """
    Get the position where the search for the first postflop actor starts.

    Always the seat left of the dealer; the caller skips seats that
    cannot act.
    """
    return (dealer_position + 1) % num_players
