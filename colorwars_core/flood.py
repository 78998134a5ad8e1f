from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Set, Tuple

from .board import Coord, FloodBoard, Player, Territories

logger = logging.getLogger(__name__)


def legal_colors(board: FloodBoard, territories: Territories, player: Player) -> List[int]:
    """Palette colors the player may pick: anything but the two colors currently in play."""
    taken = {territories.color_of(player), territories.color_of(player.other())}
    return [color for color in range(board.palette) if color not in taken]


def expand_territory(
    board: FloodBoard,
    territories: Territories,
    color: int,
    player: Player,
) -> Tuple[FloodBoard, Territories, bool]:
    """
    Repaints the player's territory to `color` and absorbs every connected cell of that color.

    Returns (new_board, new_territories, accepted). Growth is a breadth-first
    flood fill seeded from the whole existing territory and never enters the
    opponent's cells, even when their color matches.
    """
    if not 0 <= color < board.palette:
        raise ValueError(f'color {color} outside palette of {board.palette}')
    if color not in legal_colors(board, territories, player):
        return board, territories, False

    own = territories.of(player)
    blocked = territories.of(player.other())
    painted = board.repaint(own, color)

    visited: Set[Coord] = set(own)
    frontier: Deque[Coord] = deque(sorted(own))
    gained: List[Coord] = []
    while frontier:
        current = frontier.popleft()
        for nxt in painted.neighbors(current):
            if nxt in visited or nxt in blocked:
                continue
            if painted.at(*nxt) != color:
                continue
            visited.add(nxt)
            gained.append(nxt)
            frontier.append(nxt)

    logger.debug("flood player=%s color=%d gained=%d", player.value, color, len(gained))
    new_territory = frozenset(visited)
    return painted.repaint(gained, color), territories.with_player(player, new_territory, color), True
