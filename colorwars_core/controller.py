from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

from .ai import select_bot_move
from .board import Player, Result
from .config import Settings
from .deal import new_game
from .moves import Move, apply_move, legal_moves
from .state import GameState, Variant
from .winner import evaluate_terminal

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    BOT = "bot"
    HUMAN = "human"


@dataclass(frozen=True)
class BotTicket:
    """A bot decision, valid only while the controller is still at `generation`."""
    generation: int
    player: Player
    move: Move


class GameController:
    """
    Owns the live game. Every accepted move and every reset bumps `generation`;
    bot moves are planned against a generation and dropped if it has moved on.
    """

    def __init__(
        self,
        variant: Union[Variant, str] = Variant.CHAIN,
        size: Optional[int] = None,
        seed: Optional[int] = None,
        palette: Optional[int] = None,
        mode: Union[Mode, str] = Mode.BOT,
        bot_player: Player = Player.P2,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.mode = Mode(mode)
        self.bot_player = bot_player
        self.generation = 0
        self._lock = threading.RLock()
        self._timer: Optional[threading.Timer] = None
        self._variant = Variant(variant)
        self._size = size
        self._palette = palette
        self.state: GameState
        self.result: Optional[Result] = None
        self.reset(seed=seed)

    @property
    def variant(self) -> Variant:
        return self._variant

    def reset(
        self,
        variant: Union[Variant, str, None] = None,
        size: Optional[int] = None,
        seed: Optional[int] = None,
        palette: Optional[int] = None,
    ) -> GameState:
        """Starts a new game; any pending bot move becomes stale."""
        with self._lock:
            next_variant, next_size, next_palette = self._variant, self._size, self._palette
            if variant is not None and Variant(variant) is not self._variant:
                next_variant, next_size, next_palette = Variant(variant), None, None
            if size is not None:
                next_size = size
            if palette is not None:
                next_palette = palette
            # Validate before touching the live game.
            state = new_game(next_variant, next_size, seed, next_palette, self.settings)
            self._cancel_timer()
            self._variant, self._size, self._palette = next_variant, next_size, next_palette
            self.state = state
            self.result = None
            self.generation += 1
            logger.info("reset variant=%s size=%d generation=%d",
                        self._variant.value, self.state.board.size, self.generation)
            return self.state

    def is_bot_turn(self) -> bool:
        return self.mode is Mode.BOT and self.result is None and self.state.turn is self.bot_player

    def legal_moves(self) -> List[Move]:
        if self.result is not None:
            return []
        return legal_moves(self.state)

    def play(self, move: Move) -> bool:
        """Human move for the side to move. False when refused or illegal."""
        with self._lock:
            if self.result is not None:
                logger.debug("move_refused reason=game_over move=%s", move)
                return False
            if self.is_bot_turn():
                logger.debug("move_refused reason=bot_turn move=%s", move)
                return False
            return self._commit_move(move, self.state.turn)

    def _commit_move(self, move: Move, player: Player) -> bool:
        next_state, accepted = apply_move(self.state, move, player, self.settings.max_explosions)
        if not accepted:
            logger.debug("move_rejected player=%s move=%s", player.value, move)
            return False
        self.state = next_state
        self.generation += 1
        self.result = evaluate_terminal(next_state)
        logger.debug("move_accepted player=%s move=%s generation=%d", player.value, move, self.generation)
        if self.result is not None:
            logger.info("game_over result=%s moves=%d", self.result.value, next_state.moves_played)
        return True

    def plan_bot_move(self) -> Optional[BotTicket]:
        """Computes the bot's move for the live position, or None when it is not the bot's turn."""
        with self._lock:
            if not self.is_bot_turn():
                return None
            move = select_bot_move(self.state, self.bot_player, self.settings.max_explosions)
            return BotTicket(generation=self.generation, player=self.bot_player, move=move)

    def commit(self, ticket: BotTicket) -> bool:
        """Applies a planned bot move unless the game moved on since it was planned."""
        with self._lock:
            if ticket.generation != self.generation or not self.is_bot_turn():
                logger.info("bot_ticket_stale ticket_generation=%d generation=%d",
                            ticket.generation, self.generation)
                return False
            return self._commit_move(ticket.move, ticket.player)

    def schedule_bot_move(
        self,
        delay: Optional[float] = None,
        on_done: Optional[Callable[[bool], None]] = None,
    ) -> Optional[BotTicket]:
        """Plans the bot move now and commits it after `delay` seconds on a timer thread."""
        with self._lock:
            ticket = self.plan_bot_move()
            if ticket is None:
                return None
            self._cancel_timer()
            wait = self.settings.bot_delay if delay is None else delay
            timer = threading.Timer(wait, self._fire, args=(ticket, on_done))
            timer.daemon = True
            self._timer = timer
            timer.start()
            return ticket

    def _fire(self, ticket: BotTicket, on_done: Optional[Callable[[bool], None]]) -> None:
        applied = self.commit(ticket)
        if on_done is not None:
            on_done(applied)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
