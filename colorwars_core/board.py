from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

Coord = Tuple[int, int]


class Player(str, Enum):
    P1 = "P1"
    P2 = "P2"

    def other(self) -> 'Player':
        return Player.P2 if self is Player.P1 else Player.P1


class Result(str, Enum):
    """Terminal outcome of a game. In-progress games have no result (None)."""
    P1 = "P1"
    P2 = "P2"
    DRAW = "draw"

    @classmethod
    def winner(cls, player: Player) -> 'Result':
        return cls(player.value)


def _grid_neighbors(size: int, coord: Coord) -> List[Coord]:
    r, c = coord
    out: List[Coord] = []
    if r > 0:
        out.append((r - 1, c))
    if r < size - 1:
        out.append((r + 1, c))
    if c > 0:
        out.append((r, c - 1))
    if c < size - 1:
        out.append((r, c + 1))
    return out


@dataclass(frozen=True)
class Cell:
    owner: Optional[Player] = None
    count: int = 0


EMPTY = Cell()


@dataclass(frozen=True)
class ChainBoard:
    """Chain reaction board: N x N cells stored row-major, each an owner and an orb count."""
    size: int
    cells: Tuple[Cell, ...]  # row-major, length == size * size

    @classmethod
    def empty(cls, size: int) -> 'ChainBoard':
        if size < 2:
            raise ValueError(f'board size must be at least 2, got {size}')
        return cls(size=size, cells=(EMPTY,) * (size * size))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> 'ChainBoard':
        """Builds a board from a square list of rows (mostly for fixtures)."""
        size = len(rows)
        flat: List[Cell] = []
        for row in rows:
            if len(row) != size:
                raise ValueError('rows must form a square grid')
            flat.extend(row)
        return cls(size=size, cells=tuple(flat))

    def in_bounds(self, coord: Coord) -> bool:
        r, c = coord
        return 0 <= r < self.size and 0 <= c < self.size

    def index(self, r: int, c: int) -> int:
        if not self.in_bounds((r, c)):
            raise ValueError(f'coordinate {(r, c)} outside {self.size}x{self.size} board')
        return r * self.size + c

    def at(self, r: int, c: int) -> Cell:
        return self.cells[self.index(r, c)]

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates in row-major order."""
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def neighbors(self, coord: Coord) -> List[Coord]:
        """Orthogonal neighbours inside the grid (up, down, left, right)."""
        return _grid_neighbors(self.size, coord)

    def capacity(self, coord: Coord) -> int:
        """Orbs a cell can hold before it explodes: 2 in corners, 3 on edges, 4 inside."""
        return len(self.neighbors(coord))

    def owned(self, player: Player) -> int:
        return sum(1 for cell in self.cells if cell.owner is player)

    def orbs(self, player: Player) -> int:
        return sum(cell.count for cell in self.cells if cell.owner is player)

    def total_orbs(self) -> int:
        return sum(cell.count for cell in self.cells)

    def replace(self, updates: Mapping[Coord, Cell]) -> 'ChainBoard':
        cells = list(self.cells)
        for (r, c), cell in updates.items():
            cells[self.index(r, c)] = cell
        return ChainBoard(size=self.size, cells=tuple(cells))

    def pretty(self) -> str:
        """Human-readable grid: '.' for empty cells, otherwise owner digit and orb count (e.g. 1:3)."""
        lines: List[str] = []
        for r in range(self.size):
            row: List[str] = []
            for c in range(self.size):
                cell = self.at(r, c)
                if cell.owner is None:
                    row.append(" . ")
                else:
                    row.append(f"{cell.owner.value[1]}:{cell.count}")
            lines.append(" ".join(row))
        return "\n".join(lines)


@dataclass(frozen=True)
class FloodBoard:
    """Color flood board: N x N color indices in [0, palette), stored row-major."""
    size: int
    palette: int
    grid: Tuple[int, ...]  # row-major, length == size * size

    def in_bounds(self, coord: Coord) -> bool:
        r, c = coord
        return 0 <= r < self.size and 0 <= c < self.size

    def index(self, r: int, c: int) -> int:
        if not self.in_bounds((r, c)):
            raise ValueError(f'coordinate {(r, c)} outside {self.size}x{self.size} board')
        return r * self.size + c

    def at(self, r: int, c: int) -> int:
        return self.grid[self.index(r, c)]

    def coords(self) -> Iterable[Coord]:
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def neighbors(self, coord: Coord) -> List[Coord]:
        return _grid_neighbors(self.size, coord)

    def repaint(self, coords: Iterable[Coord], color: int) -> 'FloodBoard':
        grid = list(self.grid)
        for r, c in coords:
            grid[self.index(r, c)] = color
        return FloodBoard(size=self.size, palette=self.palette, grid=tuple(grid))

    def rows(self) -> List[List[int]]:
        return [list(self.grid[r * self.size:(r + 1) * self.size]) for r in range(self.size)]

    def pretty(self, p1: FrozenSet[Coord] = frozenset(), p2: FrozenSet[Coord] = frozenset()) -> str:
        """Color digits per cell; owned cells are bracketed, P1 with [] and P2 with <>."""
        lines: List[str] = []
        for r in range(self.size):
            row: List[str] = []
            for c in range(self.size):
                color = self.at(r, c)
                if (r, c) in p1:
                    row.append(f"[{color}]")
                elif (r, c) in p2:
                    row.append(f"<{color}>")
                else:
                    row.append(f" {color} ")
            lines.append("".join(row))
        return "\n".join(lines)


@dataclass(frozen=True)
class Territories:
    """Both players' owned cells in the flood variant plus the color each last chose."""
    p1: FrozenSet[Coord]
    p2: FrozenSet[Coord]
    p1_color: int
    p2_color: int

    def of(self, player: Player) -> FrozenSet[Coord]:
        return self.p1 if player is Player.P1 else self.p2

    def color_of(self, player: Player) -> int:
        return self.p1_color if player is Player.P1 else self.p2_color

    def owner_of(self, coord: Coord) -> Optional[Player]:
        if coord in self.p1:
            return Player.P1
        if coord in self.p2:
            return Player.P2
        return None

    def with_player(self, player: Player, territory: FrozenSet[Coord], color: int) -> 'Territories':
        if player is Player.P1:
            return Territories(territory, self.p2, color, self.p2_color)
        return Territories(self.p1, territory, self.p1_color, color)

    def sizes(self) -> Dict[Player, int]:
        return {Player.P1: len(self.p1), Player.P2: len(self.p2)}
