"""
Persisted coaching data: hand records and the training profile.

These are pydantic models so they round-trip through JSON storage
unchanged.
"""

from __future__ import annotations
from enum import Enum
from typing import List, Optional
import time
import uuid

from pydantic import BaseModel, Field

from pokercoach.core.card import Card
from pokercoach.core.game import ActionLogEntry, TexasHoldemGame


class SkillLevel(str, Enum):
    """Coarse skill tiers reported by an assessment."""
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    PRO = "PRO"


class CardModel(BaseModel):
    """Card as stored: rank character and suit symbol."""
    rank: str
    suit: str

    @classmethod
    def from_card(cls, card: Card) -> CardModel:
        data = card.to_dict()
        return cls(rank=data["rank"], suit=data["suit"])

    def to_card(self) -> Card:
        return Card.from_string(f"{self.rank}{self.suit}")

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"


class LogEntryModel(BaseModel):
    phase: str
    actor: str
    action: str
    amount: Optional[int] = None
    details: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: ActionLogEntry) -> LogEntryModel:
        return cls(**entry.to_dict())


class HandRecord(BaseModel):
    """One completed hand, as kept in history."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: float = Field(default_factory=time.time)
    user_hand: List[CardModel] = []
    bot_hand: List[CardModel] = []
    community_cards: List[CardModel] = []
    winner_id: Optional[str] = None
    pot: int = 0
    logs: List[LogEntryModel] = []
    analysis: Optional[str] = None

    @classmethod
    def from_game(cls, game: TexasHoldemGame) -> HandRecord:
        """
        Capture a finished hand. ``bot_hand`` is the first bot seat's cards,
        the opponent a heads-up review talks about.
        """
        user = game.players[0]
        bot = game.players[1]
        return cls(
            user_hand=[CardModel.from_card(c) for c in user.hole_cards],
            bot_hand=[CardModel.from_card(c) for c in bot.hole_cards],
            community_cards=[CardModel.from_card(c) for c in game.community_cards],
            winner_id=game.winner_id,
            pot=game.last_pot,
            logs=[LogEntryModel.from_entry(e) for e in game.action_log],
        )


class SkillAssessment(BaseModel):
    skill_level: SkillLevel = SkillLevel.BEGINNER
    strengths: List[str] = []
    weaknesses: List[str] = []


class TrainingProfile(BaseModel):
    """Long-lived stats for the human seat."""
    games_played: int = 0
    hands_won: int = 0
    total_winnings: int = 0
    skill_level: SkillLevel = SkillLevel.BEGINNER
    strengths: List[str] = []
    weaknesses: List[str] = []
    assessment_complete: bool = False

    def record_hand(self, won: bool, net_chips: int) -> None:
        self.games_played += 1
        if won:
            self.hands_won += 1
        self.total_winnings += net_chips

    def apply_assessment(self, assessment: SkillAssessment) -> None:
        self.skill_level = assessment.skill_level
        self.strengths = list(assessment.strengths)
        self.weaknesses = list(assessment.weaknesses)
        self.assessment_complete = True
