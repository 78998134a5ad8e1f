from __future__ import annotations

from typing import Any, Dict, Optional

from .board import ChainBoard, FloodBoard, Player, Result, Territories
from .state import ChainState, FloodState, GameState


def chain_result(board: ChainBoard, moves_played: int) -> Optional[Result]:
    """Decided once somebody has moved and exactly one player still owns cells."""
    if moves_played <= 0:
        return None
    p1 = board.owned(Player.P1)
    p2 = board.owned(Player.P2)
    if p1 > 0 and p2 == 0:
        return Result.P1
    if p2 > 0 and p1 == 0:
        return Result.P2
    return None


def flood_result(board: FloodBoard, territories: Territories) -> Optional[Result]:
    """Decided once the two territories cover the board; bigger territory wins."""
    p1 = len(territories.p1)
    p2 = len(territories.p2)
    if p1 + p2 < board.size * board.size:
        return None
    if p1 == p2:
        return Result.DRAW
    return Result.P1 if p1 > p2 else Result.P2


def evaluate_terminal(state: GameState, moves_played: Optional[int] = None) -> Optional[Result]:
    if isinstance(state, ChainState):
        return chain_result(state.board, state.moves_played if moves_played is None else moves_played)
    return flood_result(state.board, state.territories)


def chain_stats(board: ChainBoard) -> Dict[str, Dict[str, int]]:
    return {p.value: {"cells": board.owned(p), "orbs": board.orbs(p)} for p in Player}


def flood_stats(state: FloodState) -> Dict[str, Dict[str, int]]:
    return {
        p.value: {"cells": len(state.territory(p)), "color": state.color(p)}
        for p in Player
    }


def stats(state: GameState) -> Dict[str, Any]:
    if isinstance(state, ChainState):
        return chain_stats(state.board)
    return flood_stats(state)
