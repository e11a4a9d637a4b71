"""Moves a solver can make in one turn, and their text notation.

Notation::

    (1,2)   walk to row 1, column 2
    R0 L0   rotate row 0 right / left
    D3 U3   rotate column 3 down / up
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from backend.models.grid import Grid


class MoveKind(StrEnum):
    WALK = "walk"
    ROTATE_ROW_RIGHT = "R"
    ROTATE_ROW_LEFT = "L"
    ROTATE_COLUMN_DOWN = "D"
    ROTATE_COLUMN_UP = "U"

    @property
    def is_row(self) -> bool:
        return self in (MoveKind.ROTATE_ROW_RIGHT, MoveKind.ROTATE_ROW_LEFT)

    @property
    def is_column(self) -> bool:
        return self in (MoveKind.ROTATE_COLUMN_DOWN, MoveKind.ROTATE_COLUMN_UP)

    @property
    def inverse(self) -> MoveKind:
        return _INVERSE[self]


_INVERSE = {
    MoveKind.WALK: MoveKind.WALK,
    MoveKind.ROTATE_ROW_RIGHT: MoveKind.ROTATE_ROW_LEFT,
    MoveKind.ROTATE_ROW_LEFT: MoveKind.ROTATE_ROW_RIGHT,
    MoveKind.ROTATE_COLUMN_DOWN: MoveKind.ROTATE_COLUMN_UP,
    MoveKind.ROTATE_COLUMN_UP: MoveKind.ROTATE_COLUMN_DOWN,
}

_WALK_RE = re.compile(r"^\(\s*(\d+)\s*,\s*(\d+)\s*\)$")
_ROTATE_RE = re.compile(r"^([RLDU])(\d+)$")


@dataclass(frozen=True)
class Move:
    """A single turn: a walk to a cell index or a row/column rotation."""

    kind: MoveKind
    argument: int

    # -- constructors ---------------------------------------------------------

    @classmethod
    def walk(cls, cell: int) -> Move:
        return cls(MoveKind.WALK, cell)

    @classmethod
    def rotate_row_right(cls, row: int) -> Move:
        return cls(MoveKind.ROTATE_ROW_RIGHT, row)

    @classmethod
    def rotate_row_left(cls, row: int) -> Move:
        return cls(MoveKind.ROTATE_ROW_LEFT, row)

    @classmethod
    def rotate_column_down(cls, column: int) -> Move:
        return cls(MoveKind.ROTATE_COLUMN_DOWN, column)

    @classmethod
    def rotate_column_up(cls, column: int) -> Move:
        return cls(MoveKind.ROTATE_COLUMN_UP, column)

    @classmethod
    def parse(cls, text: str, grid: Grid) -> Move:
        """Parse one move in notation form, checking it against *grid*."""
        token = text.strip().upper()
        if m := _WALK_RE.match(token):
            r, c = int(m.group(1)), int(m.group(2))
            if r >= grid.rows or c >= grid.columns:
                raise ValueError(f"Movement is out of boundaries: {text}")
            return cls.walk(grid.index(r, c))
        if m := _ROTATE_RE.match(token):
            move = cls(MoveKind(m.group(1)), int(m.group(2)))
            move.validate(grid)
            return move
        raise ValueError(f"Can not parse move: {text!r}")

    # -- queries --------------------------------------------------------------

    @property
    def is_walk(self) -> bool:
        return self.kind is MoveKind.WALK

    @property
    def inverse(self) -> Move | None:
        """The move that undoes this one, or ``None`` for a walk."""
        if self.is_walk:
            return None
        return Move(self.kind.inverse, self.argument)

    def validate(self, grid: Grid) -> None:
        """Raise ``ValueError`` if the argument is out of range for *grid*."""
        if self.kind.is_row:
            limit, what = grid.rows, "row"
        elif self.kind.is_column:
            limit, what = grid.columns, "column"
        else:
            limit, what = len(grid), "cell"
        if not 0 <= self.argument < limit:
            raise ValueError(
                f"Invalid {what} for {self.kind.name}: {self.argument} "
                f"(must be below {limit})."
            )

    def notation(self, columns: int) -> str:
        if self.is_walk:
            r, c = divmod(self.argument, columns)
            return f"({r},{c})"
        return f"{self.kind.value}{self.argument}"


def parse_moves(text: str, grid: Grid) -> list[Move]:
    """Parse a whitespace-separated move sequence such as ``"R0 (1,2)"``."""
    return [Move.parse(token, grid) for token in text.split()]
