"""Which rotations a scenario lets the search explore."""

from __future__ import annotations

from dataclasses import dataclass

from backend.models.grid import Grid
from backend.models.move import MoveKind


@dataclass(frozen=True)
class RotationPolicy:
    """Allow-lists of rotatable rows and columns.

    ``None`` means every row (or column) of the grid. With ``reverse``
    enabled, left/up rotations are explored next to right/down.
    """

    rows: tuple[int, ...] | None = None
    columns: tuple[int, ...] | None = None
    reverse: bool = False

    def resolve(self, grid: Grid) -> RotationPolicy:
        """Return a policy with explicit, sorted, bounds-checked allow-lists."""
        rows = _checked(self.rows, grid.rows, "row")
        columns = _checked(self.columns, grid.columns, "column")
        return RotationPolicy(rows=rows, columns=columns, reverse=self.reverse)

    @property
    def row_kinds(self) -> tuple[MoveKind, ...]:
        if self.reverse:
            return (MoveKind.ROTATE_ROW_RIGHT, MoveKind.ROTATE_ROW_LEFT)
        return (MoveKind.ROTATE_ROW_RIGHT,)

    @property
    def column_kinds(self) -> tuple[MoveKind, ...]:
        if self.reverse:
            return (MoveKind.ROTATE_COLUMN_DOWN, MoveKind.ROTATE_COLUMN_UP)
        return (MoveKind.ROTATE_COLUMN_DOWN,)


def _checked(allowed: tuple[int, ...] | None, limit: int, what: str) -> tuple[int, ...]:
    if allowed is None:
        return tuple(range(limit))
    for value in allowed:
        if not 0 <= value < limit:
            raise ValueError(
                f"Rotation allow-list has invalid {what} {value} "
                f"(maze has {limit} {what}s)."
            )
    return tuple(sorted(set(allowed)))
