from __future__ import annotations

import logging
from typing import Optional

from .board import Player
from .moves import Move, apply_move, legal_moves
from .state import ChainState, FloodState, GameState

logger = logging.getLogger(__name__)


def chain_score(state: ChainState, player: Player) -> int:
    """Orb difference from `player`'s point of view."""
    board = state.board
    return board.orbs(player) - board.orbs(player.other())


def flood_gain(before: FloodState, after: FloodState, player: Player) -> int:
    """Cells the move added to `player`'s territory."""
    return len(after.territory(player)) - len(before.territory(player))


def score_move(state: GameState, move: Move, player: Player, max_explosions: Optional[int] = None) -> int:
    """Scores the position reached by playing `move`; the live state is left untouched."""
    after, accepted = apply_move(state, move, player, max_explosions)
    if not accepted:
        raise ValueError(f'bot considered illegal move {move!r}')
    if isinstance(state, ChainState):
        return chain_score(after, player)  # type: ignore[arg-type]
    return flood_gain(state, after, player)  # type: ignore[arg-type]


def select_bot_move(state: GameState, player: Optional[Player] = None, max_explosions: Optional[int] = None) -> Move:
    """Greedy one-ply pick: best immediate score, first candidate wins ties."""
    player = player or state.turn
    candidates = legal_moves(state, player)
    if not candidates:
        raise ValueError(f'no legal moves for {player.value}')
    best_move = candidates[0]
    best_score: Optional[int] = None
    for move in candidates:
        score = score_move(state, move, player, max_explosions)
        if best_score is None or score > best_score:
            best_move, best_score = move, score
    logger.debug("bot_pick variant=%s player=%s move=%s score=%s candidates=%d",
                 state.variant.value, player.value, best_move, best_score, len(candidates))
    return best_move
