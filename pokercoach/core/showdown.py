"""
Showdown resolution.

Evaluates every seat still in the hand and picks a single winner: best
category first, then the tie-break vector compared element by element.
Exact ties go to the earliest contender in seat order, so the whole pot
always has exactly one recipient.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from pokercoach.core.card import Card
from pokercoach.core.hand import HandValue, evaluate_hand
from pokercoach.core.player import Player


@dataclass
class ShowdownResult:
    """Winner of a showdown plus every contender's evaluated hand."""
    winner: Player
    hand: HandValue
    hands: Dict[str, HandValue] = field(default_factory=dict)


def resolve_showdown(
    players: Sequence[Player],
    community_cards: Sequence[Card],
) -> Optional[ShowdownResult]:
    """
    Pick the single best hand among the unfolded seats.

    Returns:
        ShowdownResult, or None when no seat is left in the hand
    """
    contenders: List[Player] = [p for p in players if not p.is_folded]
    if not contenders:
        return None

    hands = {
        p.player_id: evaluate_hand(p.hole_cards, community_cards)
        for p in contenders
    }

    best = contenders[0]
    for player in contenders[1:]:
        if hands[player.player_id] > hands[best.player_id]:
            best = player

    return ShowdownResult(winner=best, hand=hands[best.player_id], hands=hands)
