"""
Host session: one table, its timers, and the human's coaching data.

GameSession owns the game (created with ``auto_advance=False``) and drives
everything the engine leaves to its host:
- bot turns after a random delay
- pending phase transitions and showdown resolution after a fixed delay
- recording each finished hand in history and the training profile
- advice, hand analysis and the five-hand skill assessment

Timers are DeferredTasks on the running asyncio loop, so the mutating
methods must be called from inside that loop (FastAPI route handlers or
``asyncio.run``).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Set, Union
import asyncio
import logging
import os
import random

from pydantic import ValidationError

from pokercoach.agents.base import BotPolicy
from pokercoach.agents.random_agent import WeightedRandomPolicy
from pokercoach.coach.advisor import Coach, OfflineCoach, RemoteCoach
from pokercoach.coach.records import HandRecord, SkillAssessment, TrainingProfile
from pokercoach.coach.storage import JsonFileStore, KeyValueStore, MemoryStore
from pokercoach.coach.timer import DeferredTask
from pokercoach.core.errors import InvalidActionError
from pokercoach.core.game import ActionResult, TexasHoldemGame
from pokercoach.core.rules import ActionType, GamePhase, USER_ID


logger = logging.getLogger(__name__)

PROFILE_KEY = "pokerProfile"
HISTORY_KEY = "pokerHistory"


@dataclass
class SessionConfig:
    """Delays, persistence and coach settings for a GameSession."""
    bot_delay_min: float = 1.0
    bot_delay_max: float = 2.0
    phase_delay: float = 1.0
    showdown_delay: float = 1.0
    history_path: Optional[str] = None
    history_limit: int = 100
    coach_endpoint: Optional[str] = None
    coach_model: str = "default"
    coach_api_key: Optional[str] = None
    coach_timeout: float = 20.0
    assessment_hands: int = 5

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> SessionConfig:
        """
        Build a config from ``POKERCOACH_*`` variables, e.g.
        POKERCOACH_BOT_DELAY_MIN, POKERCOACH_HISTORY_PATH,
        POKERCOACH_COACH_ENDPOINT. Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        config = cls()
        for name, default in vars(cls()).items():
            raw = env.get(f"POKERCOACH_{name.upper()}")
            if raw is None or raw == "":
                continue
            if isinstance(default, bool):
                value: Any = raw.lower() in ("1", "true", "yes")
            elif isinstance(default, int):
                value = int(raw)
            elif isinstance(default, float):
                value = float(raw)
            else:
                value = raw
            setattr(config, name, value)
        return config

    def make_store(self) -> KeyValueStore:
        if self.history_path:
            return JsonFileStore(self.history_path)
        return MemoryStore()

    def make_coach(self) -> Coach:
        if self.coach_endpoint:
            return RemoteCoach(
                self.coach_endpoint,
                model=self.coach_model,
                api_key=self.coach_api_key,
                timeout=self.coach_timeout,
            )
        return OfflineCoach()


class GameSession:
    """
    The single table a host serves to one human player.

    Usage (inside a running event loop):
        session = GameSession(SessionConfig.from_env())
        session.load()
        session.start_hand()
        session.act(ActionType.CALL)
        advice = await session.request_advice()
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        store: Optional[KeyValueStore] = None,
        coach: Optional[Coach] = None,
        policy: Optional[BotPolicy] = None,
        rng: Optional[random.Random] = None,
        player_count: int = 2,
    ):
        self.config = config or SessionConfig()
        self.rng = rng if rng is not None else random.Random()
        self.store = store if store is not None else self.config.make_store()
        self.coach = coach if coach is not None else self.config.make_coach()
        self.policy = policy if policy is not None else WeightedRandomPolicy(rng=self.rng)

        self.game = TexasHoldemGame(num_players=player_count, rng=self.rng, auto_advance=False)

        self.profile = TrainingProfile()
        self.history: List[HandRecord] = []
        self.advice = ""
        self.assessment_mode = False
        self.assessment_hands_played = 0
        self.last_assessment: Optional[SkillAssessment] = None
        self.is_assessing = False

        self._timer: Optional[DeferredTask] = None
        self._background: Set[asyncio.Task] = set()
        self._recorded_hand = 0

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Restore profile and history; bad stored data is logged and skipped."""
        raw_profile = self.store.get(PROFILE_KEY)
        if raw_profile is not None:
            try:
                self.profile = TrainingProfile.model_validate(raw_profile)
            except ValidationError as e:
                logger.error(f"Stored profile is invalid, starting fresh: {e}")

        raw_history = self.store.get(HISTORY_KEY)
        if raw_history is not None:
            try:
                self.history = [HandRecord.model_validate(r) for r in raw_history]
            except (ValidationError, TypeError) as e:
                logger.error(f"Stored history is invalid, starting fresh: {e}")
        logger.info(f"Loaded profile ({self.profile.games_played} hands) and {len(self.history)} records")

    def save(self) -> None:
        self.store.set(PROFILE_KEY, self.profile.model_dump(mode="json"))
        self.store.set(HISTORY_KEY, [r.model_dump(mode="json") for r in self.history])

    # ------------------------------------------------------------------
    # Hand flow
    # ------------------------------------------------------------------

    def start_hand(self, player_count: Optional[int] = None) -> bool:
        """
        Cancel pending timers and deal a new hand.

        When assessment mode has collected its hands this runs the skill
        assessment instead and returns False.
        """
        self.cancel_timers()

        if self.assessment_mode and self.assessment_hands_played >= self.config.assessment_hands:
            self.assessment_mode = False
            records = self.history[:self.assessment_hands_played]
            self.assessment_hands_played = 0
            self._spawn(self.run_assessment(records))
            return False

        self.game.start_hand(player_count)
        self.advice = ""
        self._after_transition()
        return True

    def act(self, action: Union[ActionType, str], amount: int = 0) -> ActionResult:
        """Apply the human's action; engine errors propagate unchanged."""
        result = self.game.take_action(USER_ID, action, amount)
        self.advice = ""
        self._after_transition()
        return result

    def run_bot_turn(self) -> None:
        """Let the bot holding the turn act through the policy."""
        player = self.game.current_player
        if player is None or not player.is_bot:
            return

        decision = self.policy.decide(self.game.snapshot(viewer=player.player_id), player.player_id)
        try:
            self.game.take_action(player.player_id, decision.action, decision.amount)
        except InvalidActionError as e:
            logger.warning(f"{player.player_id} chose an illegal {decision.action.value}: {e}")
            fallback = ActionType.CHECK if player.current_bet == self.game.current_bet else ActionType.CALL
            self.game.take_action(player.player_id, fallback)
        self._after_transition()

    def advance(self) -> None:
        """Fire a pending phase transition."""
        if not self.game.pending_advance:
            return
        self.game.advance_phase()
        self._after_transition()

    def _after_transition(self) -> None:
        """Schedule whatever has to happen next, or record a finished hand."""
        game = self.game

        if game.phase == GamePhase.GAME_OVER:
            self._finish_hand()
            return

        if game.pending_advance:
            delay = self.config.showdown_delay if game.phase == GamePhase.SHOWDOWN else self.config.phase_delay
            self._schedule(delay, self.advance, f"advance-{game.phase.value}")
            return

        current = game.current_player
        if current is not None and current.is_bot:
            delay = self.rng.uniform(self.config.bot_delay_min, self.config.bot_delay_max)
            self._schedule(delay, self.run_bot_turn, f"bot-turn-{current.player_id}")

    def _finish_hand(self) -> None:
        game = self.game
        if self._recorded_hand == game.hand_number:
            return
        self._recorded_hand = game.hand_number

        record = HandRecord.from_game(game)
        self.history.insert(0, record)
        del self.history[self.config.history_limit:]

        user = game.get_player(USER_ID)
        net = user.chips - game.starting_chips.get(USER_ID, user.chips)
        self.profile.record_hand(won=game.winner_id == USER_ID, net_chips=net)
        if self.assessment_mode:
            self.assessment_hands_played += 1

        logger.info(f"Recorded hand #{game.hand_number}: winner {game.winner_id}, net {net:+d}")
        self.save()

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _schedule(self, delay: float, callback, name: str) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = DeferredTask(delay, callback, name=name).start()

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    @property
    def timer(self) -> Optional[DeferredTask]:
        return self._timer

    def cancel_timers(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def wait_idle(self) -> None:
        """Wait until no timer or background job is left; used by tests and shutdown."""
        while True:
            if self._timer is not None and self._timer.pending:
                await self._timer.wait()
                continue
            if self._background:
                await asyncio.wait(set(self._background))
                continue
            return

    def close(self) -> None:
        self.cancel_timers()
        for task in list(self._background):
            task.cancel()

    # ------------------------------------------------------------------
    # Coaching
    # ------------------------------------------------------------------

    async def request_advice(self) -> str:
        """
        Ask the coach about the human seat's current decision.

        The text is only shown as advice while the table is still at the
        decision it was asked for.
        """
        asked_at = (self.game.hand_number, len(self.game.action_log))
        text = await self.coach.strategic_advice(self.game.snapshot(viewer=USER_ID), self.profile)
        if (self.game.hand_number, len(self.game.action_log)) == asked_at:
            self.advice = text
        else:
            logger.debug("Dropping advice for an earlier decision")
        return text

    def get_record(self, record_id: Optional[str] = None) -> Optional[HandRecord]:
        """A history record by id, or the newest one."""
        if record_id is None:
            return self.history[0] if self.history else None
        for record in self.history:
            if record.id == record_id:
                return record
        return None

    async def analyze_hand(self, record_id: Optional[str] = None) -> Optional[HandRecord]:
        """
        Attach a review to a record, reusing one that already exists.

        Returns:
            The annotated record, or None if there is no such record
        """
        record = self.get_record(record_id)
        if record is None:
            return None
        if record.analysis is None:
            record.analysis = await self.coach.analyze_hand(record)
            self.save()
        return record

    def start_assessment(self) -> bool:
        """Enter assessment mode and deal its first hand."""
        self.assessment_mode = True
        self.assessment_hands_played = 0
        logger.info(f"Assessment started over {self.config.assessment_hands} hands")
        return self.start_hand()

    async def run_assessment(self, records: List[HandRecord]) -> SkillAssessment:
        self.is_assessing = True
        try:
            assessment = await self.coach.assess_skill(records)
        finally:
            self.is_assessing = False
        self.last_assessment = assessment
        self.profile.apply_assessment(assessment)
        self.save()
        logger.info(f"Assessment complete: {assessment.skill_level.value}")
        return assessment

    def to_dict(self) -> Dict[str, Any]:
        """Game state for the human seat plus the session's coaching fields."""
        state = self.game.get_state(for_player_id=USER_ID)
        state["session"] = {
            "advice": self.advice,
            "assessment_mode": self.assessment_mode,
            "assessment_hands_played": self.assessment_hands_played,
            "assessment_hands": self.config.assessment_hands,
            "is_assessing": self.is_assessing,
            "timer": self._timer.name if self._timer is not None and self._timer.pending else None,
        }
        return state
