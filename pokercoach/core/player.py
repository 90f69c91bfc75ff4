"""
Player (seat) class for Texas Hold'em.

Manages seat state including:
- Chip count (carried across hands)
- Hole cards
- Current bet in the betting round
- Folded flag and last action in the round
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pokercoach.core.card import Card
from pokercoach.core.rules import ActionType


@dataclass
class Player:
    """
    A seat at the table.

    Attributes:
        player_id: Unique identifier ("user", "bot-1", ...)
        name: Display name
        chips: Chip count, long-lived across hands
        hole_cards: The player's private cards (0 or 2)
        is_folded: Whether the player folded this hand
        current_bet: Amount put in during the current betting round
        is_bot: Whether a bot policy drives this seat
        last_action: Last action taken in the current betting round
    """
    player_id: str
    name: str
    chips: int
    is_bot: bool = False
    hole_cards: List[Card] = field(default_factory=list)
    is_folded: bool = False
    current_bet: int = 0
    last_action: Optional[ActionType] = None

    def reset_for_new_hand(self, buy_in: int) -> None:
        """Clear hand state; a busted stack is topped back up to ``buy_in``."""
        self.hole_cards = []
        self.is_folded = False
        self.current_bet = 0
        self.last_action = None
        if self.chips <= 0:
            self.chips = buy_in

    def reset_for_new_round(self) -> None:
        """Reset round state for a new betting round (flop, turn, river)."""
        self.current_bet = 0
        self.last_action = None

    def commit(self, amount: int) -> int:
        """
        Move up to ``amount`` chips from the stack into this round's bet.

        Returns:
            Actual amount committed (less than asked when all-in)
        """
        actual = max(0, min(amount, self.chips))
        self.chips -= actual
        self.current_bet += actual
        return actual

    @property
    def has_acted(self) -> bool:
        return self.last_action is not None

    @property
    def is_all_in(self) -> bool:
        """Still in the hand with no chips behind."""
        return not self.is_folded and self.chips == 0

    @property
    def can_act(self) -> bool:
        return not self.is_folded and self.chips > 0

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        result = {
            "id": self.player_id,
            "name": self.name,
            "chips": self.chips,
            "bet": self.current_bet,
            "is_folded": self.is_folded,
            "is_all_in": self.is_all_in,
            "is_bot": self.is_bot,
            "last_action": self.last_action.value if self.last_action else None,
        }
        if not hide_cards and self.hole_cards:
            result["cards"] = [card.to_dict() for card in self.hole_cards]
        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.player_id}, chips={self.chips}, "
            f"bet={self.current_bet}, folded={self.is_folded})"
        )
