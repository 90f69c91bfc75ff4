"""
Coaching collaborators.

A Coach produces three kinds of out-of-band feedback:
- strategic advice for the human seat's current decision
- a skill assessment over recent hand records
- a post-hand review of one record

Coaches never raise into game code and never touch game state: every
failure degrades to a fixed fallback text.

OfflineCoach works without a network and bases its advice on the hand
evaluator and pot odds. RemoteCoach sends a prompt to a text-generation
HTTP endpoint through httpx.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence
import json
import logging

import httpx
from pydantic import ValidationError

from pokercoach.coach.records import HandRecord, SkillAssessment, SkillLevel, TrainingProfile
from pokercoach.core.game import TableState
from pokercoach.core.hand import HandCategory, evaluate_hand, get_hand_description
from pokercoach.core.rules import GamePhase, TOTAL_COMMUNITY_CARDS, USER_ID, USER_NAME


logger = logging.getLogger(__name__)

FOLDED_ADVICE = "You have folded. Watch the betting to learn how the others play."
WAITING_ADVICE = "Start a hand to get advice."
ADVICE_DEFAULT = "Read the board and make your best decision."
ADVICE_FALLBACK = "The coach is unavailable right now. Trust your instincts."
ANALYSIS_DEFAULT = "This hand could not be analysed."
ANALYSIS_FALLBACK = "Hand analysis is unavailable right now."
ASSESSMENT_FALLBACK = SkillAssessment(
    skill_level=SkillLevel.BEGINNER,
    strengths=["Willing to play hands out"],
    weaknesses=["Not enough experience yet"],
)


def format_cards(cards: Sequence[Any]) -> str:
    return " ".join(str(c) for c in cards) or "-"


class Coach(ABC):
    """Source of advice, assessments and hand reviews."""

    @abstractmethod
    async def strategic_advice(self, state: TableState, profile: TrainingProfile) -> str:
        """Advice for the human seat in ``state``."""

    @abstractmethod
    async def assess_skill(self, records: Sequence[HandRecord]) -> SkillAssessment:
        """Skill tier plus strengths and weaknesses from recent hands."""

    @abstractmethod
    async def analyze_hand(self, record: HandRecord) -> str:
        """Review of a completed hand."""


def _user_seat_advice_precheck(state: TableState) -> Optional[str]:
    """Fixed answers for states where there is nothing to advise on."""
    if state.phase == GamePhase.WAITING:
        return WAITING_ADVICE
    user = state.seat(USER_ID)
    if user.is_folded:
        return FOLDED_ADVICE
    return None


class OfflineCoach(Coach):
    """
    Rule-of-thumb coach that needs no network.

    Advice weighs hand category against the price of a call; the
    assessment looks at win rate and how often the human folded.
    """

    async def strategic_advice(self, state: TableState, profile: TrainingProfile) -> str:
        fixed = _user_seat_advice_precheck(state)
        if fixed is not None:
            return fixed

        user = state.seat(USER_ID)
        value = evaluate_hand(user.hole_cards, state.community_cards)
        description = get_hand_description(value)
        to_call = state.to_call(USER_ID)
        pot_odds = to_call / (state.pot + to_call) if to_call else 0.0

        if value.category >= HandCategory.TWO_PAIR:
            return f"{description} is strong here. Raise for value."
        if value.category == HandCategory.ONE_PAIR:
            if to_call == 0:
                return f"{description}. Bet or check; a pair is worth seeing more cards."
            if pot_odds <= 0.33:
                return f"{description}. The price is right ({to_call} to call), call."
            return f"{description} against a big bet. Consider folding unless your pair is high."
        if to_call == 0:
            return f"{description}. Check and see the next card for free."
        if state.phase == GamePhase.PREFLOP and max(c.value for c in user.hole_cards) >= 12:
            return f"{description} preflop with a big card. Calling {to_call} is reasonable."
        return f"{description}. Nothing made yet and {to_call} to call: folding is fine."

    async def assess_skill(self, records: Sequence[HandRecord]) -> SkillAssessment:
        if not records:
            return ASSESSMENT_FALLBACK

        won = sum(1 for r in records if r.winner_id == USER_ID)
        folds = sum(
            1 for r in records for entry in r.logs
            if entry.action == "FOLD" and entry.actor == USER_NAME
        )
        win_rate = won / len(records)

        if win_rate >= 0.8:
            level = SkillLevel.ADVANCED
        elif win_rate >= 0.5:
            level = SkillLevel.INTERMEDIATE
        else:
            level = SkillLevel.BEGINNER

        strengths = ["Wins a good share of pots"] if win_rate >= 0.5 else ["Plays hands to the end"]
        weaknesses = (
            ["Folds too often"] if folds > len(records) // 2
            else ["Could fold weak hands more"]
        )
        return SkillAssessment(skill_level=level, strengths=strengths, weaknesses=weaknesses)

    async def analyze_hand(self, record: HandRecord) -> str:
        if not record.user_hand:
            return ANALYSIS_DEFAULT
        user = [c.to_card() for c in record.user_hand]
        board = [c.to_card() for c in record.community_cards]
        value = evaluate_hand(user, board)
        outcome = "won" if record.winner_id == USER_ID else "lost"
        return (
            f"You {outcome} a pot of {record.pot} holding {format_cards(record.user_hand)} "
            f"({get_hand_description(value)}) on board {format_cards(record.community_cards)}."
        )


def build_advice_prompt(state: TableState, profile: TrainingProfile) -> str:
    user = state.seat(USER_ID)
    value = evaluate_hand(user.hole_cards, state.community_cards)
    user_index = next(i for i, s in enumerate(state.seats) if s.player_id == USER_ID)
    position = "dealer (late)" if user_index == state.dealer_index else "early/blind"
    return (
        "You are a professional Texas Hold'em coach.\n"
        f"- Student level: {profile.skill_level.value} "
        f"(assessment complete: {profile.assessment_complete})\n"
        f"- Phase: {state.phase.value}\n"
        f"- Hole cards: {format_cards(user.hole_cards)}\n"
        f"- Board: {format_cards(state.community_cards)}\n"
        f"- Cards to come: {TOTAL_COMMUNITY_CARDS - len(state.community_cards)}\n"
        f"- Pot: {state.pot}, to call: {state.to_call(USER_ID)}\n"
        f"- Made hand: {value.name} (score {value.score})\n"
        f"- Position: {position}\n"
        f"- Stack: {user.chips}\n"
        "In at most two sentences, say whether to check, call, raise or fold "
        "and why. Focus on pot odds, hand potential or bluffing chances."
    )


def build_assessment_prompt(records: Sequence[HandRecord]) -> str:
    summary = [
        {
            "user_hand": format_cards(r.user_hand),
            "board": format_cards(r.community_cards),
            "winner": "User" if r.winner_id == USER_ID else "Bot",
            "pot": r.pot,
            "actions": " | ".join(
                f"{e.actor}: {e.action}{' ' + str(e.amount) if e.amount else ''}"
                for e in r.logs
            ),
        }
        for r in records
    ]
    levels = ", ".join(level.value for level in SkillLevel)
    return (
        f"Rate this student from their last {len(records)} Texas Hold'em hands.\n"
        f"{json.dumps(summary, indent=2, ensure_ascii=False)}\n"
        f"Return only a JSON object: "
        f'{{"skill_level": one of [{levels}], "strengths": ["..."], "weaknesses": ["..."]}}'
    )


def build_analysis_prompt(record: HandRecord) -> str:
    actions = "\n".join(
        f"[{e.phase}] {e.actor}: {e.action} {e.amount or ''} {e.details or ''}".rstrip()
        for e in record.logs
    )
    return (
        "Review this Texas Hold'em hand as an expert.\n"
        f"- Player hand: {format_cards(record.user_hand)}\n"
        f"- Opponent hand: {format_cards(record.bot_hand)}\n"
        f"- Board: {format_cards(record.community_cards)}\n"
        f"- Winner: {'Player' if record.winner_id == USER_ID else 'Opponent'}\n"
        f"- Pot: {record.pot}\n"
        f"Actions:\n{actions}\n"
        "Comment on the player's key decisions and give three concrete improvements."
    )


class RemoteCoach(Coach):
    """
    Coach backed by a text-generation HTTP endpoint.

    The endpoint receives ``{"model": ..., "prompt": ..., "json": bool}``
    and must answer ``{"text": "..."}``.
    """

    def __init__(
        self,
        endpoint: str,
        model: str = "default",
        api_key: Optional[str] = None,
        timeout: float = 20.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.endpoint = endpoint
        self.model = model
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    async def _generate(self, prompt: str, expect_json: bool = False) -> str:
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        payload = {"model": self.model, "prompt": prompt, "json": expect_json}

        if self._client is not None:
            response = await self._client.post(self.endpoint, json=payload, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected coach response: {data!r}")
        return str(data.get("text") or "")

    async def strategic_advice(self, state: TableState, profile: TrainingProfile) -> str:
        fixed = _user_seat_advice_precheck(state)
        if fixed is not None:
            return fixed
        try:
            text = await self._generate(build_advice_prompt(state, profile))
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Advice request failed, using fallback: {e}")
            return ADVICE_FALLBACK
        return text.strip() or ADVICE_DEFAULT

    async def assess_skill(self, records: Sequence[HandRecord]) -> SkillAssessment:
        try:
            text = await self._generate(build_assessment_prompt(records), expect_json=True)
            return SkillAssessment.model_validate(json.loads(text))
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.error(f"Assessment request failed, using fallback: {e}")
            return ASSESSMENT_FALLBACK

    async def analyze_hand(self, record: HandRecord) -> str:
        try:
            text = await self._generate(build_analysis_prompt(record))
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Hand analysis failed, using fallback: {e}")
            return ANALYSIS_FALLBACK
        return text.strip() or ANALYSIS_DEFAULT
