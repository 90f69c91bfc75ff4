"""
HTTP API Routes for PokerCoach.

One process-wide GameSession serves the single human player. Bot turns and
phase transitions run on the server's event loop; clients poll
/get_game_state to follow them.
"""

from typing import Any, Dict, Optional
import logging

from fastapi import APIRouter, HTTPException

from pokercoach.coach.session import GameSession, SessionConfig
from pokercoach.coach.storage import KeyValueStore
from pokercoach.core.errors import PokerError
from pokercoach.core.rules import USER_ID
from pokercoach.server.schemas import (
    InitGameRequest, StartHandRequest, ActionRequest,
    ActionResultSchema, AdviceSchema, AssessmentStartSchema, HistorySchema,
    LegalActionsSchema, MessageSchema, ProfileSchema, StartHandSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Single-table mode: one session per process
_session: Optional[GameSession] = None
_config = SessionConfig()
_store: Optional[KeyValueStore] = None

LATEST_RECORD = "latest"


def configure(config: SessionConfig, store: Optional[KeyValueStore] = None) -> None:
    """Set the config and store used by the next /init_game."""
    global _config, _store
    close_session()
    _config = config
    _store = store if store is not None else config.make_store()


def close_session() -> None:
    global _session
    if _session is not None:
        _session.close()
    _session = None


def get_session() -> GameSession:
    """Get the current session."""
    if _session is None:
        raise HTTPException(status_code=400, detail="Game not initialized")
    return _session


@router.post("/init_game", response_model=MessageSchema)
async def init_game(req: InitGameRequest) -> Dict[str, Any]:
    """
    Initialize a new table with the specified number of players.

    Profile and history are reloaded from the store.
    """
    global _session, _store

    if _store is None:
        _store = _config.make_store()
    close_session()
    _session = GameSession(config=_config, store=_store, player_count=req.player_count)
    _session.load()

    return {
        "success": True,
        "message": f"Game initialized with {req.player_count} players",
    }


@router.post("/start_hand", response_model=StartHandSchema)
async def start_hand(req: Optional[StartHandRequest] = None) -> Dict[str, Any]:
    """
    Deal a new hand.

    While an assessment is due this runs the assessment instead of dealing.
    """
    session = get_session()
    player_count = req.player_count if req is not None else None

    try:
        started = session.start_hand(player_count)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    message = (
        f"Hand #{session.game.hand_number} started" if started
        else "Assessment hands complete, evaluating"
    )
    return {
        "success": True,
        "message": message,
        "started": started,
        "hand_number": session.game.hand_number,
    }


@router.get("/get_game_state")
async def get_game_state() -> Dict[str, Any]:
    """
    Get the current game state.

    Private information is always for the human seat.
    """
    return get_session().to_dict()


@router.post("/take_action", response_model=ActionResultSchema)
async def take_action(req: ActionRequest) -> Dict[str, Any]:
    """
    Take an action for the human seat.

    If the hand ends, the response includes the winner and board.
    """
    session = get_session()

    try:
        result = session.act(req.action_type.upper(), req.amount or 0)
    except PokerError as e:
        raise HTTPException(status_code=400, detail=str(e))

    response: Dict[str, Any] = {
        "success": True,
        "message": result.message,
        "action_type": result.action_type.value,
        "amount": result.amount,
        "hand_over": result.hand_over,
    }

    game = session.game
    if result.hand_over:
        response["winner_id"] = game.winner_id
        response["pot"] = game.last_pot
        response["board"] = [card.to_dict() for card in game.community_cards]
        if game.showdown is not None:
            response["players_cards"] = [
                {"id": p.player_id, "cards": [c.to_dict() for c in p.hole_cards]}
                for p in game.players
                if not p.is_folded
            ]

    return response


@router.get("/legal_actions", response_model=LegalActionsSchema)
async def get_legal_actions() -> Dict[str, Any]:
    """
    Get legal actions for the human seat.
    """
    game = get_session().game

    if not game.is_hand_running():
        return {"actions": [], "message": "No hand in progress"}

    return {"actions": game.get_legal_actions(USER_ID)}


@router.get("/profile", response_model=ProfileSchema)
async def get_profile() -> Dict[str, Any]:
    session = get_session()
    return {
        "profile": session.profile,
        "last_assessment": session.last_assessment,
        "assessment_mode": session.assessment_mode,
        "assessment_hands_played": session.assessment_hands_played,
    }


@router.get("/history", response_model=HistorySchema)
async def get_history() -> Dict[str, Any]:
    """Completed hands, newest first."""
    return {"history": get_session().history}


@router.post("/history/{record_id}/analysis")
async def analyze_hand(record_id: str) -> Dict[str, Any]:
    """
    Review a completed hand. ``latest`` picks the most recent one.
    """
    session = get_session()
    record = await session.analyze_hand(None if record_id == LATEST_RECORD else record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No hand record {record_id}")
    return {"id": record.id, "analysis": record.analysis}


@router.post("/advice", response_model=AdviceSchema)
async def get_advice() -> Dict[str, Any]:
    """Ask the coach about the human seat's current decision."""
    return {"advice": await get_session().request_advice()}


@router.post("/assessment", response_model=AssessmentStartSchema)
async def start_assessment() -> Dict[str, Any]:
    """Enter assessment mode and deal its first hand."""
    session = get_session()
    session.start_assessment()
    return {
        "success": True,
        "message": f"Assessment started: play {session.config.assessment_hands} hands",
        "assessment_hands": session.config.assessment_hands,
        "hand_number": session.game.hand_number,
    }


@router.post("/reset_game", response_model=MessageSchema)
async def reset_game() -> Dict[str, Any]:
    """
    Drop the current table. Profile and history stay in the store.
    """
    close_session()
    return {"success": True, "message": "Game reset"}
