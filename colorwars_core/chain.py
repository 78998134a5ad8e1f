from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Tuple

from .board import Cell, ChainBoard, Coord, Player

logger = logging.getLogger(__name__)

EXPLOSIONS_PER_CELL = 64


class CascadeLimitExceeded(RuntimeError):
    """Raised when a single move needs more explosions than the configured guard allows."""


def default_explosion_limit(size: int) -> int:
    return EXPLOSIONS_PER_CELL * size * size


def can_place(board: ChainBoard, coord: Coord, player: Player) -> bool:
    """A player may add an orb to any cell that is empty or already theirs."""
    owner = board.at(*coord).owner
    return owner is None or owner is player


def chain_legal_moves(board: ChainBoard, player: Player) -> List[Coord]:
    """All cells the player may press, in row-major order."""
    return [coord for coord in board.coords() if can_place(board, coord, player)]


def apply_chain_move(
    board: ChainBoard,
    coord: Coord,
    player: Player,
    max_explosions: Optional[int] = None,
) -> Tuple[ChainBoard, bool]:
    """
    Adds one orb for `player` at `coord` and resolves the resulting cascade.

    Returns (new_board, accepted). A cell owned by the opponent is rejected and
    the input board is returned as is. Overfull cells are processed from a FIFO
    queue: each explosion removes exactly `capacity` orbs from the cell and
    hands one orb, and ownership, to every neighbour. Resolution stops early
    once an opponent who held cells before the move has none left.
    """
    if not board.in_bounds(coord):
        raise ValueError(f'coordinate {coord} outside {board.size}x{board.size} board')
    if not can_place(board, coord, player):
        return board, False

    size = board.size
    owners: List[Optional[Player]] = [cell.owner for cell in board.cells]
    counts: List[int] = [cell.count for cell in board.cells]
    opponent = player.other()
    opp_cells = owners.count(opponent)
    opp_had_cells = opp_cells > 0
    limit = max_explosions if max_explosions is not None else default_explosion_limit(size)

    idx = coord[0] * size + coord[1]
    owners[idx] = player
    counts[idx] += 1

    queue: Deque[Coord] = deque()
    if counts[idx] >= board.capacity(coord):
        queue.append(coord)

    explosions = 0
    while queue:
        current = queue.popleft()
        cur = current[0] * size + current[1]
        cap = board.capacity(current)
        if counts[cur] < cap:
            # relieved by an earlier visit
            continue
        explosions += 1
        if explosions > limit:
            raise CascadeLimitExceeded(f'cascade from {coord} exceeded {limit} explosions')
        counts[cur] -= cap
        for nxt in board.neighbors(current):
            n = nxt[0] * size + nxt[1]
            if owners[n] is opponent:
                opp_cells -= 1
            owners[n] = player
            counts[n] += 1
            if counts[n] >= board.capacity(nxt):
                queue.append(nxt)
        if opp_had_cells and opp_cells == 0:
            logger.debug("cascade_stopped reason=opponent_eliminated player=%s explosions=%d", player.value, explosions)
            break

    if explosions:
        logger.debug("cascade player=%s origin=%s explosions=%d", player.value, coord, explosions)
    cells = tuple(Cell(owner, count) for owner, count in zip(owners, counts))
    return ChainBoard(size=size, cells=cells), True
