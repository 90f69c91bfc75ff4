"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

from pokercoach.coach.records import HandRecord, SkillAssessment, TrainingProfile
from pokercoach.core.rules import MIN_PLAYERS, MAX_PLAYERS


# ============= Request Schemas =============

class InitGameRequest(BaseModel):
    """Request to initialize a game."""
    player_count: int = Field(ge=MIN_PLAYERS, le=MAX_PLAYERS, default=2)


class StartHandRequest(BaseModel):
    """Request to deal a hand, optionally reseating the table."""
    player_count: Optional[int] = Field(default=None, ge=MIN_PLAYERS, le=MAX_PLAYERS)


class ActionRequest(BaseModel):
    """Request to take a game action."""
    action_type: str = Field(..., description="Action type: FOLD, CHECK, CALL, RAISE")
    amount: Optional[int] = Field(default=0, ge=0, description="Raise increment for RAISE")


# ============= Response Schemas =============

class MessageSchema(BaseModel):
    success: bool = True
    message: str


class StartHandSchema(MessageSchema):
    """Result of /start_hand; ``started`` is False when an assessment ran instead."""
    started: bool
    hand_number: int


class ActionResultSchema(BaseModel):
    """Result of an action."""
    success: bool
    message: str
    action_type: str
    amount: int = 0
    hand_over: bool = False
    # Filled in once the hand is over
    winner_id: Optional[str] = None
    pot: Optional[int] = None
    board: Optional[List[Dict[str, Any]]] = None
    players_cards: Optional[List[Dict[str, Any]]] = None


class LegalActionsSchema(BaseModel):
    actions: List[Dict[str, Any]]
    message: Optional[str] = None


class AdviceSchema(BaseModel):
    advice: str


class ProfileSchema(BaseModel):
    profile: TrainingProfile
    last_assessment: Optional[SkillAssessment] = None
    assessment_mode: bool = False
    assessment_hands_played: int = 0


class HistorySchema(BaseModel):
    history: List[HandRecord]


class AssessmentStartSchema(MessageSchema):
    assessment_hands: int
    hand_number: int
