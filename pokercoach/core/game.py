"""
Texas Hold'em Game Engine - State Machine Implementation.

This module implements the core game logic for a single Texas Hold'em table.
It handles:
- Hand lifecycle (phases: preflop, flop, turn, river, showdown, game over)
- Player actions (fold, check, call, raise) and turn order
- Blind posting and dealer button rotation
- Heads-up special rules
- An append-only action log and read-only table snapshots

The whole pot goes to one winner: there are no side pots and exact ties
are settled in seat order (see showdown.py). Calls and blinds that a stack
cannot cover are taken all-in; raises a stack cannot cover are rejected.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union
import logging
import random

from pokercoach.core.card import Card, Deck
from pokercoach.core.errors import (
    HandNotRunningError,
    InvalidActionError,
    NotYourTurnError,
)
from pokercoach.core.hand import evaluate_hand, get_hand_description
from pokercoach.core.player import Player
from pokercoach.core.rules import (
    GamePhase, ActionType,
    BETTING_PHASES, BOT_NAMES, USER_ID, USER_NAME,
    get_blind_positions, get_first_to_act_preflop, get_first_to_act_postflop,
    next_phase,
    DEFAULT_BIG_BLIND, DEFAULT_SMALL_BLIND, DEFAULT_BUY_IN,
    MIN_PLAYERS, MAX_PLAYERS,
    HOLE_CARDS, FLOP_CARDS, TURN_CARDS, RIVER_CARDS, COMMUNITY_CARDS_BY_PHASE,
)
from pokercoach.core.showdown import ShowdownResult, resolve_showdown


logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "System"


class LogEvent(Enum):
    """Every kind of entry the action log can hold."""
    HAND_START = "HAND_START"
    SMALL_BLIND = "SMALL_BLIND"
    BIG_BLIND = "BIG_BLIND"
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"
    DEAL_FLOP = "DEAL_FLOP"
    DEAL_TURN = "DEAL_TURN"
    DEAL_RIVER = "DEAL_RIVER"
    SHOWDOWN = "SHOWDOWN"
    WIN = "WIN"


_DEAL_EVENTS = {
    GamePhase.FLOP: (LogEvent.DEAL_FLOP, FLOP_CARDS),
    GamePhase.TURN: (LogEvent.DEAL_TURN, TURN_CARDS),
    GamePhase.RIVER: (LogEvent.DEAL_RIVER, RIVER_CARDS),
}


@dataclass(frozen=True)
class ActionLogEntry:
    """One immutable line of hand history."""
    phase: GamePhase
    actor: str
    event: LogEvent
    amount: Optional[int] = None
    details: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.value,
            "actor": self.actor,
            "action": self.event.value,
            "amount": self.amount,
            "details": self.details,
        }


@dataclass(frozen=True)
class SeatView:
    """Read-only copy of a seat."""
    player_id: str
    name: str
    chips: int
    current_bet: int
    is_folded: bool
    is_bot: bool
    last_action: Optional[ActionType]
    hole_cards: Tuple[Card, ...]


@dataclass(frozen=True)
class TableState:
    """Read-only snapshot of the table after a transition."""
    phase: GamePhase
    hand_number: int
    community_cards: Tuple[Card, ...]
    pot: int
    current_bet: int
    seats: Tuple[SeatView, ...]
    current_seat_index: int
    dealer_index: int
    small_blind: int
    big_blind: int
    winner_id: Optional[str]
    pending_advance: bool
    action_log: Tuple[ActionLogEntry, ...]

    @property
    def current_seat(self) -> SeatView:
        return self.seats[self.current_seat_index]

    def seat(self, seat_id: str) -> SeatView:
        for seat in self.seats:
            if seat.player_id == seat_id:
                return seat
        raise KeyError(seat_id)

    def to_call(self, seat_id: str) -> int:
        return max(0, self.current_bet - self.seat(seat_id).current_bet)


@dataclass
class ActionResult:
    """Result of an applied player action."""
    action_type: ActionType
    amount: int = 0
    message: str = ""
    hand_over: bool = False


class TexasHoldemGame:
    """
    Texas Hold'em game engine implementing a state machine.

    Usage:
        game = TexasHoldemGame(num_players=3, rng=random.Random(1))
        game.start_hand()

        while game.is_hand_running():
            seat = game.current_player
            game.take_action(seat.player_id, ActionType.CALL)  # From UI or bot

        print(game.winner_id)

    With ``auto_advance=False`` a completed betting round leaves
    ``pending_advance`` set and the host calls ``advance_phase()`` when it
    is ready, which is how deferred transitions are modelled.
    """

    def __init__(
        self,
        num_players: int = 2,
        small_blind: int = DEFAULT_SMALL_BLIND,
        big_blind: int = DEFAULT_BIG_BLIND,
        buy_in: int = DEFAULT_BUY_IN,
        rng: Optional[random.Random] = None,
        auto_advance: bool = True,
    ):
        """
        Initialize a table with no hand dealt yet.

        Args:
            num_players: Number of seats (2-5); seat 0 is the human
            small_blind: Small blind amount
            big_blind: Big blind amount
            buy_in: Starting (and reset) stack for each seat
            rng: Random source for shuffling; a fresh one if omitted
            auto_advance: Run phase transitions inside take_action
        """
        _check_player_count(num_players)
        if small_blind <= 0 or big_blind < small_blind:
            raise ValueError("Blinds must be positive with big_blind >= small_blind")

        self.small_blind = small_blind
        self.big_blind = big_blind
        self.buy_in = buy_in
        self.rng = rng if rng is not None else random.Random()
        self.auto_advance = auto_advance

        self.players: List[Player] = self._create_players(num_players)

        self.deck = Deck(rng=self.rng, shuffle=False)
        self.community_cards: List[Card] = []
        self.phase = GamePhase.WAITING
        self.hand_number = 0

        self.dealer_index = 0
        self.small_blind_position = 0
        self.big_blind_position = 0
        self.current_seat_index = 0

        self.pot = 0
        self.current_bet = 0
        self.pending_advance = False

        self.winner_id: Optional[str] = None
        self.last_pot = 0
        self.showdown: Optional[ShowdownResult] = None
        self.action_log: List[ActionLogEntry] = []

        # Stacks at the start of the hand, before blinds
        self.starting_chips: Dict[str, int] = {}
        # Chips each seat has put in this hand, used to void an abandoned hand
        self._committed: Dict[str, int] = {}

    def _create_players(self, num_players: int) -> List[Player]:
        players = [Player(player_id=USER_ID, name=USER_NAME, chips=self.buy_in)]
        for i in range(1, num_players):
            players.append(Player(
                player_id=f"bot-{i}",
                name=BOT_NAMES[i - 1],
                chips=self.buy_in,
                is_bot=True,
            ))
        return players

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def num_in_hand(self) -> int:
        """Number of seats that have not folded."""
        return sum(1 for p in self.players if not p.is_folded)

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if not self.is_betting_open():
            return None
        return self.players[self.current_seat_index]

    @property
    def total_chips(self) -> int:
        """Chips on the table: every stack plus the pot."""
        return sum(p.chips for p in self.players) + self.pot

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def is_hand_running(self) -> bool:
        """Check if a hand is currently in progress."""
        return self.phase not in (GamePhase.WAITING, GamePhase.GAME_OVER)

    def is_betting_open(self) -> bool:
        """True while a seat is expected to act."""
        return self.phase in BETTING_PHASES and not self.pending_advance

    # ------------------------------------------------------------------
    # Hand lifecycle
    # ------------------------------------------------------------------

    def start_hand(self, player_count: Optional[int] = None) -> None:
        """
        Start a new hand, replacing whatever hand came before.

        A different ``player_count`` reseats the table with fresh stacks and
        puts the button on seat 0. Otherwise stacks carry over (busted
        stacks are reset to the buy-in) and the button moves one seat.
        """
        count = self.num_players if player_count is None else player_count
        _check_player_count(count)

        if self.is_hand_running():
            self._void_current_hand()

        reseated = count != self.num_players
        if reseated:
            self.players = self._create_players(count)

        if reseated or self.hand_number == 0:
            self.dealer_index = 0
        else:
            self.dealer_index = (self.dealer_index + 1) % self.num_players

        self.hand_number += 1
        logger.info(f"Starting hand #{self.hand_number} with {count} players")

        self.deck = Deck(rng=self.rng, shuffle=True)
        self.community_cards = []
        self.pot = 0
        self.pending_advance = False
        self.winner_id = None
        self.last_pot = 0
        self.showdown = None
        self.action_log = []
        self._committed = {p.player_id: 0 for p in self.players}

        for player in self.players:
            player.reset_for_new_hand(self.buy_in)
        self.starting_chips = {p.player_id: p.chips for p in self.players}

        self._deal_hole_cards()
        self.phase = GamePhase.PREFLOP

        self.small_blind_position, self.big_blind_position = get_blind_positions(
            self.num_players, self.dealer_index
        )
        self._log(LogEvent.HAND_START, SYSTEM_ACTOR, details=(
            f"hand #{self.hand_number}, dealer {self.players[self.dealer_index].name}"
        ))
        self._post_blinds()

        first = get_first_to_act_preflop(self.num_players, self.dealer_index)
        self.current_seat_index = self._next_actor(first - 1)

        if self._is_betting_round_complete():
            self._on_round_complete()

    def _deal_hole_cards(self) -> None:
        for player in self.players:
            player.hole_cards = self.deck.deal(HOLE_CARDS)

    def _post_blinds(self) -> None:
        """Post small and big blinds; a short stack posts what it has."""
        sb_player = self.players[self.small_blind_position]
        bb_player = self.players[self.big_blind_position]

        sb_amount = self._commit(sb_player, self.small_blind)
        self._log(LogEvent.SMALL_BLIND, sb_player.name, amount=sb_amount)

        bb_amount = self._commit(bb_player, self.big_blind)
        self._log(LogEvent.BIG_BLIND, bb_player.name, amount=bb_amount)

        self.current_bet = self.big_blind
        logger.debug(f"Blinds posted: SB={sb_amount} BB={bb_amount}")

    def _commit(self, player: Player, amount: int) -> int:
        actual = player.commit(amount)
        self.pot += actual
        self._committed[player.player_id] = self._committed.get(player.player_id, 0) + actual
        return actual

    def _void_current_hand(self) -> None:
        """Hand every committed chip back when a hand is abandoned midway."""
        logger.warning(f"Hand #{self.hand_number} abandoned in {self.phase.name}, refunding bets")
        for player in self.players:
            player.chips += self._committed.get(player.player_id, 0)
        self.pot = 0
        self._committed = {}

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def take_action(
        self,
        seat_id: str,
        action_type: Union[ActionType, str],
        amount: int = 0,
    ) -> ActionResult:
        """
        Validate and apply one player action.

        Args:
            seat_id: Id of the acting seat; must hold the turn
            action_type: FOLD, CHECK, CALL or RAISE
            amount: Raise increment over the current bet (RAISE only)

        Returns:
            ActionResult with the chips the seat put in

        Raises:
            HandNotRunningError: No betting round is open
            NotYourTurnError: Another seat holds the turn
            InvalidActionError: The action is not legal right now
        """
        if self.phase not in BETTING_PHASES:
            raise HandNotRunningError(f"No betting round open in phase {self.phase.name}")
        if self.pending_advance:
            raise InvalidActionError("Betting round is complete, waiting for the next phase")

        try:
            action_type = ActionType(action_type)
        except ValueError:
            raise InvalidActionError(f"Unknown action: {action_type}")

        player = self.players[self.current_seat_index]
        if player.player_id != seat_id:
            logger.warning(f"Seat {seat_id} tried to act during {player.player_id}'s turn")
            raise NotYourTurnError(f"It is {player.player_id}'s turn, not {seat_id}'s")

        chips_to_call = self.current_bet - player.current_bet
        self._validate_action(player, action_type, amount, chips_to_call)

        if action_type == ActionType.FOLD:
            player.is_folded = True
            paid, message = 0, f"{player.name} folds"
            self._log(LogEvent.FOLD, player.name, details=message)

        elif action_type == ActionType.CHECK:
            paid, message = 0, f"{player.name} checks"
            self._log(LogEvent.CHECK, player.name, details=message)

        elif action_type == ActionType.CALL:
            paid = self._commit(player, chips_to_call)
            message = f"{player.name} calls {paid}"
            if player.is_all_in:
                message += " (all-in)"
            self._log(LogEvent.CALL, player.name, amount=paid, details=message)

        else:
            new_bet = self.current_bet + amount
            paid = self._commit(player, new_bet - player.current_bet)
            self.current_bet = new_bet
            message = f"{player.name} raises to {new_bet}"
            self._log(LogEvent.RAISE, player.name, amount=paid, details=message)

        player.last_action = action_type
        logger.debug(f"[{self.phase.name}] {message}")

        self._after_action()
        return ActionResult(action_type, paid, message, hand_over=not self.is_hand_running())

    def _validate_action(
        self,
        player: Player,
        action_type: ActionType,
        amount: int,
        chips_to_call: int,
    ) -> None:
        if action_type == ActionType.CHECK and chips_to_call > 0:
            raise InvalidActionError(f"Cannot check, must call {chips_to_call}")

        if action_type == ActionType.CALL and chips_to_call <= 0:
            raise InvalidActionError("Nothing to call, use CHECK")

        if action_type == ActionType.RAISE:
            if amount <= 0:
                raise InvalidActionError(f"Raise amount must be positive, got {amount}")
            cost = chips_to_call + amount
            if cost > player.chips:
                raise InvalidActionError(
                    f"Raise costs {cost} but {player.name} only has {player.chips}"
                )

    def _after_action(self) -> None:
        """Decide between hand end, phase advance and passing the turn."""
        remaining = [p for p in self.players if not p.is_folded]
        if len(remaining) == 1:
            self._end_hand(remaining[0], details="all other players folded")
            return

        self.current_seat_index = self._next_actor(self.current_seat_index)
        if self._is_betting_round_complete():
            self._on_round_complete()

    def _next_actor(self, start: int) -> int:
        """
        First seat after ``start`` (wrapping) that can still act, falling
        back to the first unfolded seat when everyone left is all-in.
        """
        seats = [(start + offset) % self.num_players for offset in range(1, self.num_players + 1)]
        for idx in seats:
            if self.players[idx].can_act:
                return idx
        for idx in seats:
            if not self.players[idx].is_folded:
                return idx
        return start

    def _is_betting_round_complete(self) -> bool:
        """
        Every unfolded seat with chips behind has acted this round and
        matched the bet. All-in seats have nothing left to decide.
        """
        for player in self.players:
            if not player.can_act:
                continue
            if not player.has_acted or player.current_bet != self.current_bet:
                return False
        return True

    def _on_round_complete(self) -> None:
        self.pending_advance = True
        logger.debug(f"Betting round complete in {self.phase.name}")
        if self.auto_advance:
            while self.pending_advance:
                self.advance_phase()

    # ------------------------------------------------------------------
    # Phase transitions
    # ------------------------------------------------------------------

    def advance_phase(self) -> None:
        """
        Fire the pending transition.

        From a betting phase: reset round state, burn and reveal the next
        street, and hand the turn to the first seat after the dealer. From
        SHOWDOWN: resolve the showdown and award the pot.

        Raises:
            HandNotRunningError: No hand in progress
            InvalidActionError: The betting round is still open
        """
        if not self.is_hand_running():
            raise HandNotRunningError("No hand in progress")
        if not self.pending_advance:
            raise InvalidActionError("Betting round is still in progress")

        self.pending_advance = False

        if self.phase == GamePhase.SHOWDOWN:
            self._resolve_showdown()
            return

        new_phase = next_phase(self.phase)
        for player in self.players:
            player.reset_for_new_round()
        self.current_bet = 0

        if new_phase in _DEAL_EVENTS:
            event, count = _DEAL_EVENTS[new_phase]
            self.deck.burn()
            dealt = self.deck.deal(count)
            self.community_cards.extend(dealt)
            self.phase = new_phase
            self._log(event, SYSTEM_ACTOR, details=" ".join(str(c) for c in dealt))
        else:
            self.phase = new_phase

        expected = COMMUNITY_CARDS_BY_PHASE[self.phase]
        if len(self.community_cards) != expected:
            logger.warning(
                f"{self.phase.name} has {len(self.community_cards)} board cards, expected {expected}"
            )
        logger.debug(f"Advanced to {self.phase.name}, board: {self._board_str()}")

        if self.phase == GamePhase.SHOWDOWN:
            self._log(LogEvent.SHOWDOWN, SYSTEM_ACTOR, details=self._board_str())
            self.pending_advance = True
            return

        start = get_first_to_act_postflop(self.num_players, self.dealer_index)
        # _next_actor searches after its argument, so start one seat back
        self.current_seat_index = self._next_actor(start - 1)

        if sum(1 for p in self.players if p.can_act) <= 1:
            # Nobody left to bet against: run out the board
            self.pending_advance = True

    def _resolve_showdown(self) -> None:
        result = resolve_showdown(self.players, self.community_cards)
        self.showdown = result
        if result is None:
            logger.warning("Showdown reached with no players in the hand")
            self.phase = GamePhase.GAME_OVER
            return
        self._end_hand(result.winner, details=get_hand_description(result.hand))

    def _end_hand(self, winner: Player, details: str) -> None:
        """Award the whole pot to ``winner`` and close the hand."""
        amount = self.pot
        winner.chips += amount
        self.last_pot = amount
        self.pot = 0
        self._committed = {}
        self.winner_id = winner.player_id
        self.pending_advance = False
        self.phase = GamePhase.GAME_OVER
        self._log(LogEvent.WIN, winner.name, amount=amount,
                  details=f"{winner.name} wins {amount}: {details}")
        logger.info(f"Hand #{self.hand_number} won by {winner.player_id} ({amount} chips, {details})")

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def get_legal_actions(self, seat_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Get legal actions for the given seat (or the seat holding the turn).

        Returns:
            List of action dicts with type and constraints; RAISE bounds
            are increments over the current bet
        """
        player = self.current_player
        if player is None or (seat_id is not None and player.player_id != seat_id):
            return []

        actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD.value}]
        chips_to_call = self.current_bet - player.current_bet

        if chips_to_call == 0:
            actions.append({"type": ActionType.CHECK.value})
        else:
            actions.append({
                "type": ActionType.CALL.value,
                "amount": min(chips_to_call, player.chips),
            })

        if player.chips > chips_to_call:
            actions.append({
                "type": ActionType.RAISE.value,
                "min": 1,
                "max": player.chips - chips_to_call,
            })

        return actions

    def snapshot(self, viewer: Optional[str] = None) -> TableState:
        """
        Return an immutable copy of the table.

        Args:
            viewer: If given, other seats' hole cards are left out
        """
        return TableState(
            phase=self.phase,
            hand_number=self.hand_number,
            community_cards=tuple(self.community_cards),
            pot=self.pot,
            current_bet=self.current_bet,
            seats=tuple(
                SeatView(
                    player_id=p.player_id,
                    name=p.name,
                    chips=p.chips,
                    current_bet=p.current_bet,
                    is_folded=p.is_folded,
                    is_bot=p.is_bot,
                    last_action=p.last_action,
                    hole_cards=tuple(p.hole_cards) if viewer in (None, p.player_id) else (),
                )
                for p in self.players
            ),
            current_seat_index=self.current_seat_index,
            dealer_index=self.dealer_index,
            small_blind=self.small_blind,
            big_blind=self.big_blind,
            winner_id=self.winner_id,
            pending_advance=self.pending_advance,
            action_log=tuple(self.action_log),
        )

    def get_state(self, for_player_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Get the current game state as JSON-ready data.

        Other seats' hole cards stay hidden until a showdown reveals them.
        Folded hands are never shown.

        Args:
            for_player_id: If specified, include private info for this player
        """
        revealed = self.phase == GamePhase.GAME_OVER and self.showdown is not None
        current = self.current_player
        public_info = {
            "phase": self.phase.value,
            "hand_number": self.hand_number,
            "pot": self.pot,
            "current_bet": self.current_bet,
            "board": [c.to_dict() for c in self.community_cards],
            "dealer_position": self.dealer_index,
            "small_blind_position": self.small_blind_position,
            "big_blind_position": self.big_blind_position,
            "current_player": current.player_id if current else None,
            "players": [p.to_dict(hide_cards=not revealed or p.is_folded) for p in self.players],
            "winner_id": self.winner_id,
            "last_pot": self.last_pot,
            "log": [entry.to_dict() for entry in self.action_log],
        }

        private_info: Dict[str, Any] = {}
        player = self.get_player(for_player_id) if for_player_id else None
        if player is not None:
            private_info = {
                "hand": [c.to_dict() for c in player.hole_cards],
                "available_moves": [a["type"] for a in self.get_legal_actions(player.player_id)],
                "chips_to_call": max(0, self.current_bet - player.current_bet),
                "current_bet": player.current_bet,
            }
            if player.hole_cards:
                value = evaluate_hand(player.hole_cards, self.community_cards)
                private_info["hand_value"] = value.to_dict()
                private_info["hand_description"] = get_hand_description(value)

        return {
            "public_info": public_info,
            "private_info": private_info,
        }

    def _board_str(self) -> str:
        return " ".join(str(c) for c in self.community_cards) or "-"

    def _log(
        self,
        event: LogEvent,
        actor: str,
        amount: Optional[int] = None,
        details: Optional[str] = None,
    ) -> None:
        self.action_log.append(ActionLogEntry(
            phase=self.phase,
            actor=actor,
            event=event,
            amount=amount,
            details=details,
        ))


def _check_player_count(num_players: int) -> None:
    if num_players < MIN_PLAYERS or num_players > MAX_PLAYERS:
        raise ValueError(f"Number of players must be {MIN_PLAYERS}-{MAX_PLAYERS}")
