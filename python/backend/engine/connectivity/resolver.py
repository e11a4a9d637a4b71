"""Flood fill over reciprocally open passages.

Walking costs no turns, so the cells a token can reach in one walk are the
whole connected component around it.
"""

from __future__ import annotations

from collections.abc import Iterator

from backend.models.grid import Grid, Opening

# Order in which sides are tried from each cell.
_SIDES = (Opening.NORTH, Opening.EAST, Opening.SOUTH, Opening.WEST)


class Reachable:
    """Lazy, restartable sequence of the cells reachable from *start*.

    Each iteration runs a fresh traversal with its own visited markers, so
    one instance can be iterated repeatedly and from several threads.
    """

    __slots__ = ("grid", "start")

    def __init__(self, grid: Grid, start: int) -> None:
        if not 0 <= start < len(grid):
            raise ValueError(
                f"Start cell {start} is outside the maze (0..{len(grid) - 1})."
            )
        self.grid = grid
        self.start = start

    def __iter__(self) -> Iterator[int]:
        grid = self.grid
        visited = bytearray(len(grid))
        stack = [self.start]
        visited[self.start] = 1
        while stack:
            cell = stack.pop()
            yield cell
            # Reversed so that sides are explored in _SIDES order.
            for side in reversed(_SIDES):
                if not grid.is_open(cell, side):
                    continue
                nxt = grid.neighbor(cell, side)
                if not visited[nxt]:
                    visited[nxt] = 1
                    stack.append(nxt)

    def __contains__(self, cell: object) -> bool:
        return any(c == cell for c in self)

    def __repr__(self) -> str:
        return f"Reachable(start={self.start}, cells={sorted(self)})"


def reachable_from(grid: Grid, start: int) -> Reachable:
    """Return the cells reachable from *start*, *start* included."""
    return Reachable(grid, start)
