"""
Maze grid primitives.

Cell states:
    e = Entrance
    s = Exit (goal)
    x = Open path
    . = Visited (claimed by a worker)
    * = Frontier (reserved for a branch task, not yet processed)
    # = Wall (any unrecognised character in a maze file)

The grid has no synchronization of its own. All traversal decisions go
through SharedExplorationState, which holds the lock.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class CellState(Enum):
    """States a maze cell can be in."""
    WALL = "#"
    OPEN = "x"
    ENTRANCE = "e"
    EXIT = "s"
    VISITED = "."
    FRONTIER = "*"

    @classmethod
    def from_char(cls, char: str) -> "CellState":
        """Convert a maze file character to a CellState."""
        mapping = {
            "x": cls.OPEN,
            "e": cls.ENTRANCE,
            "s": cls.EXIT,
        }
        return mapping.get(char, cls.WALL)


@dataclass(frozen=True)
class Position:
    """(row, col) position in the maze."""
    row: int
    col: int

    def neighbors(self) -> tuple["Position", ...]:
        """Axis-aligned neighbours: up, down, left, right."""
        return (
            Position(self.row - 1, self.col),
            Position(self.row + 1, self.col),
            Position(self.row, self.col - 1),
            Position(self.row, self.col + 1),
        )

    def is_valid(self) -> bool:
        return self.row >= 0 and self.col >= 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"row": self.row, "col": self.col}


# Returned by loaders when no entrance could be located
INVALID_POSITION = Position(-1, -1)


class Grid:
    """
    Rectangular table of cell states with fixed dimensions.

    Example usage:
        grid = Grid.from_rows(["xex", "xxx", "xxs"])
        if grid.in_bounds(0, 1):
            grid.set(0, 1, CellState.VISITED)
    """

    def __init__(self, rows: int, cols: int, fill: CellState = CellState.WALL):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self._cells: list[list[CellState]] = [
            [fill] * cols for _ in range(rows)
        ]

    @classmethod
    def from_rows(cls, lines: Iterable[str]) -> "Grid":
        """Build a grid from maze body lines, one string per row."""
        lines = list(lines)
        if not lines:
            raise ValueError("Grid needs at least one row")
        grid = cls(len(lines), len(lines[0]))
        for row, line in enumerate(lines):
            if len(line) != grid.cols:
                raise ValueError(
                    f"Row {row} has {len(line)} cells, expected {grid.cols}"
                )
            for col, char in enumerate(line):
                grid._cells[row][col] = CellState.from_char(char)
        return grid

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def at(self, row: int, col: int) -> CellState:
        return self._cells[row][col]

    def set(self, row: int, col: int, state: CellState) -> None:
        self._cells[row][col] = state

    def find(self, state: CellState) -> list[Position]:
        """All positions currently holding the given state, row-major."""
        return [
            Position(row, col)
            for row, cells in enumerate(self._cells)
            for col, cell in enumerate(cells)
            if cell == state
        ]

    def render(self) -> str:
        """ASCII snapshot of the grid, one line per row."""
        return "\n".join(
            "".join(cell.value for cell in cells) for cells in self._cells
        )
