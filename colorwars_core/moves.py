from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Tuple, Union

from .board import Coord, Player
from .chain import apply_chain_move, chain_legal_moves
from .flood import expand_territory, legal_colors
from .state import ChainState, FloodState, GameState

Move = Union[Coord, int]


def _as_index(value) -> int:
    """Whole numbers only: JSON booleans and floats are not board indices."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f'expected an integer, got {value!r}')
    return int(value)


def parse_move(state: GameState, raw) -> Move:
    """Coerces a JSON/CLI move into a coordinate tuple (chain) or a color index (flood)."""
    if isinstance(state, ChainState):
        if isinstance(raw, str):
            sep = ',' if ',' in raw else ' '
            raw = [t for t in raw.split(sep) if t.strip() != '']
        r, c = raw
        return (_as_index(r), _as_index(c))
    if isinstance(raw, (list, tuple)):
        raise ValueError('flood moves are a single color index')
    return _as_index(raw)


def legal_moves(state: GameState, player: Optional[Player] = None) -> List[Move]:
    """Candidate moves for `player` (default: side to move), in deterministic order."""
    player = player or state.turn
    if isinstance(state, ChainState):
        return list(chain_legal_moves(state.board, player))
    return list(legal_colors(state.board, state.territories, player))


def apply_move(
    state: GameState,
    move: Move,
    player: Optional[Player] = None,
    max_explosions: Optional[int] = None,
) -> Tuple[GameState, bool]:
    """
    Plays `move` for `player` (default: side to move).

    Returns (next_state, accepted). Accepted moves bump the move counter and
    pass the turn to the other player; rejected moves return `state` itself.
    """
    player = player or state.turn
    if isinstance(state, ChainState):
        board, accepted = apply_chain_move(state.board, move, player, max_explosions)  # type: ignore[arg-type]
        if not accepted:
            return state, False
        return replace(state, board=board, turn=player.other(), moves_played=state.moves_played + 1), True
    if isinstance(state, FloodState):
        board, territories, accepted = expand_territory(state.board, state.territories, move, player)  # type: ignore[arg-type]
        if not accepted:
            return state, False
        return FloodState(board, territories, player.other(), state.moves_played + 1), True
    raise TypeError(f'unsupported state type: {type(state).__name__}')
