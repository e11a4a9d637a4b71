"""Grid model for the sliding maze.

Cells are stored row-major as a ``bytes`` object, one wall mask per cell.
A grid is never modified in place: every rotation returns a new grid.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import IntFlag

from backend.models.move import Move, MoveKind

MAX_CELLS = 256


class Opening(IntFlag):
    """Sides of a cell that are open."""

    WEST = 1
    SOUTH = 2
    EAST = 4
    NORTH = 8

    @property
    def opposite(self) -> Opening:
        return _OPPOSITE[self]


_OPPOSITE = {
    Opening.WEST: Opening.EAST,
    Opening.EAST: Opening.WEST,
    Opening.NORTH: Opening.SOUTH,
    Opening.SOUTH: Opening.NORTH,
}


@dataclass(frozen=True)
class Grid:
    """An immutable rectangular maze.

    ``cells`` holds one 4-bit :class:`Opening` mask per cell, row-major.
    """

    cells: bytes
    columns: int

    def __post_init__(self) -> None:
        if self.columns <= 0:
            raise ValueError(f"Column count must be positive, got {self.columns}.")
        if not self.cells:
            raise ValueError("Maze has no cells.")
        if len(self.cells) > MAX_CELLS:
            raise ValueError(
                f"Maze is too large: {len(self.cells)} cells "
                f"(at most {MAX_CELLS})."
            )
        if len(self.cells) % self.columns:
            raise ValueError(
                f"Maze has mismatched row sizes: {len(self.cells)} cells "
                f"do not split into rows of {self.columns}."
            )
        if any(c > 0xF for c in self.cells):
            raise ValueError("Cell masks must fit in four bits.")

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_pattern(cls, pattern: str, columns: int, rows: int | None = None) -> Grid:
        """Create a grid from a hex pattern, one nibble per cell.

        Example::

            Grid.from_pattern("534f08", columns=3)
        """
        bad = [ch for ch in pattern if ch not in string.hexdigits]
        if bad:
            raise ValueError(f"Invalid hex character in maze pattern: {bad[0]!r}")
        grid = cls(cells=bytes(int(ch, 16) for ch in pattern), columns=columns)
        if rows is not None and rows != grid.rows:
            raise ValueError(
                f"Maze pattern is not of size {rows}x{columns} "
                f"({len(pattern)} cells)."
            )
        return grid

    # -- queries --------------------------------------------------------------

    @property
    def rows(self) -> int:
        return len(self.cells) // self.columns

    def __len__(self) -> int:
        return len(self.cells)

    def cell(self, index: int) -> Opening:
        return Opening(self.cells[index])

    def position(self, index: int) -> tuple[int, int]:
        """Return the ``(row, column)`` of a cell index."""
        return divmod(index, self.columns)

    def index(self, row: int, column: int) -> int:
        return row * self.columns + column

    def neighbor(self, index: int, side: Opening) -> int | None:
        """Return the adjacent cell index on *side*, or ``None`` at the edge.

        Edges never wrap around.
        """
        r, c = self.position(index)
        if side is Opening.WEST:
            return index - 1 if c > 0 else None
        if side is Opening.EAST:
            return index + 1 if c < self.columns - 1 else None
        if side is Opening.NORTH:
            return index - self.columns if r > 0 else None
        if side is Opening.SOUTH:
            return index + self.columns if r < self.rows - 1 else None
        raise ValueError(f"Not a single side: {side!r}")

    def is_open(self, index: int, side: Opening) -> bool:
        """True if a walk may cross from *index* through *side*.

        Both this cell and its neighbour must expose the reciprocal opening.
        """
        other = self.neighbor(index, side)
        if other is None:
            return False
        return bool(self.cells[index] & side) and bool(
            self.cells[other] & side.opposite
        )

    def to_pattern(self) -> str:
        return "".join(f"{c:x}" for c in self.cells)

    # -- transforms -----------------------------------------------------------

    def rotate_row_right(self, row: int) -> Grid:
        start, end = self._row_bounds(row)
        cells = bytearray(self.cells)
        cells[start:end] = self.cells[end - 1 : end] + self.cells[start : end - 1]
        return Grid(cells=bytes(cells), columns=self.columns)

    def rotate_row_left(self, row: int) -> Grid:
        start, end = self._row_bounds(row)
        cells = bytearray(self.cells)
        cells[start:end] = self.cells[start + 1 : end] + self.cells[start : start + 1]
        return Grid(cells=bytes(cells), columns=self.columns)

    def rotate_column_down(self, column: int) -> Grid:
        self._check_column(column)
        cells = bytearray(self.cells)
        # Extended slice steps through the column from top to bottom.
        col = self.cells[column :: self.columns]
        cells[column :: self.columns] = col[-1:] + col[:-1]
        return Grid(cells=bytes(cells), columns=self.columns)

    def rotate_column_up(self, column: int) -> Grid:
        self._check_column(column)
        cells = bytearray(self.cells)
        col = self.cells[column :: self.columns]
        cells[column :: self.columns] = col[1:] + col[:1]
        return Grid(cells=bytes(cells), columns=self.columns)

    def apply(self, move: Move) -> Grid:
        """Return the grid after *move*; a walk leaves the grid unchanged."""
        if move.kind is MoveKind.WALK:
            return self
        return _TRANSFORMS[move.kind](self, move.argument)

    # -- helpers --------------------------------------------------------------

    def _row_bounds(self, row: int) -> tuple[int, int]:
        if not 0 <= row < self.rows:
            raise ValueError(f"Invalid row: {row} (maze has {self.rows} rows).")
        start = row * self.columns
        return start, start + self.columns

    def _check_column(self, column: int) -> None:
        if not 0 <= column < self.columns:
            raise ValueError(
                f"Invalid column: {column} (maze has {self.columns} columns)."
            )


_TRANSFORMS = {
    MoveKind.ROTATE_ROW_RIGHT: Grid.rotate_row_right,
    MoveKind.ROTATE_ROW_LEFT: Grid.rotate_row_left,
    MoveKind.ROTATE_COLUMN_DOWN: Grid.rotate_column_down,
    MoveKind.ROTATE_COLUMN_UP: Grid.rotate_column_up,
}
