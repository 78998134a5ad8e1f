from __future__ import annotations

import random
from typing import Optional, Tuple, Union

from .board import Cell, ChainBoard, Coord, FloodBoard, Player, Territories
from .config import CHAIN_MIN_SIZE, FLOOD_MIN_SIZE, MIN_PALETTE, Settings
from .state import ChainState, FloodState, GameState, Variant

SEED_ORBS = 3


def chain_seed_coords(size: int) -> Tuple[Coord, Coord]:
    """Starting cells on the middle row, two columns either side of the centre."""
    mid = size // 2
    return (mid, max(1, mid - 2)), (mid, min(size - 2, mid + 2))


def deal_chain_board(size: int, seed_orbs: int = SEED_ORBS) -> ChainBoard:
    """Creates an empty chain board with one seeded cell per player."""
    if size < CHAIN_MIN_SIZE:
        raise ValueError(f'chain board needs size >= {CHAIN_MIN_SIZE}, got {size}')
    p1_start, p2_start = chain_seed_coords(size)
    board = ChainBoard.empty(size)
    return board.replace({
        p1_start: Cell(Player.P1, seed_orbs),
        p2_start: Cell(Player.P2, seed_orbs),
    })


def deal_flood_board(size: int, palette: int, seed: Optional[int] = None) -> Tuple[FloodBoard, Territories]:
    """Random colors everywhere; P1 takes the top-left corner, P2 the bottom-right one."""
    if size < FLOOD_MIN_SIZE:
        raise ValueError(f'flood board needs size >= {FLOOD_MIN_SIZE}, got {size}')
    if palette < MIN_PALETTE:
        raise ValueError(f'palette needs at least {MIN_PALETTE} colors, got {palette}')
    rng = random.Random(seed)
    grid = [rng.randrange(palette) for _ in range(size * size)]
    # Corners must start on different colors.
    if grid[-1] == grid[0]:
        grid[-1] = (grid[-1] + 1) % palette
    board = FloodBoard(size=size, palette=palette, grid=tuple(grid))
    p1_corner = (0, 0)
    p2_corner = (size - 1, size - 1)
    territories = Territories(
        p1=frozenset([p1_corner]),
        p2=frozenset([p2_corner]),
        p1_color=board.at(*p1_corner),
        p2_color=board.at(*p2_corner),
    )
    return board, territories


def new_game(
    variant: Union[Variant, str],
    size: Optional[int] = None,
    seed: Optional[int] = None,
    palette: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> GameState:
    """Seeds a fresh game. Missing size/palette fall back to the configured defaults."""
    settings = settings or Settings()
    variant = Variant(variant)
    if variant is Variant.CHAIN:
        board = deal_chain_board(settings.chain_size if size is None else size)
        return ChainState(board=board, seed_total=board.total_orbs())
    board, territories = deal_flood_board(
        settings.flood_size if size is None else size,
        settings.palette if palette is None else palette,
        seed,
    )
    return FloodState(board=board, territories=territories)
