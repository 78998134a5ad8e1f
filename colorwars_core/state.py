from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from .board import ChainBoard, FloodBoard, Player, Territories


class Variant(str, Enum):
    CHAIN = "chain"
    FLOOD = "flood"


@dataclass(frozen=True)
class ChainState:
    """A chain reaction position: the board, whose turn it is, and how many moves got it here."""
    board: ChainBoard
    turn: Player = Player.P1
    moves_played: int = 0
    seed_total: int = 0  # orbs on the board before the first move

    variant = Variant.CHAIN

    def with_turn(self, next_turn: Player) -> 'ChainState':
        return replace(self, turn=next_turn)


@dataclass(frozen=True)
class FloodState:
    """A color flood position: colors, both territories, turn and move counter."""
    board: FloodBoard
    territories: Territories
    turn: Player = Player.P1
    moves_played: int = 0

    variant = Variant.FLOOD

    def territory(self, player: Player):
        return self.territories.of(player)

    def color(self, player: Player) -> int:
        return self.territories.color_of(player)

    def with_turn(self, next_turn: Player) -> 'FloodState':
        return replace(self, turn=next_turn)


GameState = Union[ChainState, FloodState]
