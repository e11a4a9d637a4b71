"""Generates solvable sliding maze scenarios."""

from __future__ import annotations

import random

from backend.models.grid import Grid, Opening
from backend.models.move import Move, MoveKind
from backend.models.scenario import Scenario


class MazeGenerator:
    """Creates solvable mazes by scrambling an open path with rotations."""

    @staticmethod
    def solved(rows: int, columns: int, rng: random.Random | None = None) -> Grid:
        """Return a random grid with an open path from cell 0 to the exit.

        The path only heads east or south, so it never revisits a cell.
        """
        rng = rng or random.Random()
        cells = [rng.randrange(16) for _ in range(rows * columns)]
        r, c = 0, 0
        while (r, c) != (rows - 1, columns - 1):
            options: list[Opening] = []
            if c < columns - 1:
                options.append(Opening.EAST)
            if r < rows - 1:
                options.append(Opening.SOUTH)
            side = rng.choice(options)
            here = r * columns + c
            if side is Opening.EAST:
                c += 1
            else:
                r += 1
            cells[here] |= side
            cells[r * columns + c] |= side.opposite
        return Grid(cells=bytes(cells), columns=columns)

    @staticmethod
    def scramble(grid: Grid, count: int, rng: random.Random | None = None) -> tuple[Grid, list[Move]]:
        """Apply *count* random right/down rotations; return grid and moves."""
        rng = rng or random.Random()
        moves: list[Move] = []
        for _ in range(count):
            if rng.random() < 0.5:
                move = Move(MoveKind.ROTATE_ROW_RIGHT, rng.randrange(grid.rows))
            else:
                move = Move(MoveKind.ROTATE_COLUMN_DOWN, rng.randrange(grid.columns))
            grid = grid.apply(move)
            moves.append(move)
        return grid, moves

    @staticmethod
    def generate(
        rows: int,
        columns: int,
        scrambles: int,
        rng: random.Random | None = None,
    ) -> Scenario:
        """Return a scenario solvable within ``scrambles + 1`` turns.

        Undoing the scramble with left/up rotations and then walking to the
        exit is always a solution, so reverse rotations are enabled.
        """
        if rows < 1 or columns < 1:
            raise ValueError(f"Maze must be at least 1x1, got {rows}x{columns}.")
        if scrambles < 0:
            raise ValueError(f"Scramble count must be >= 0, got {scrambles}.")
        rng = rng or random.Random()
        grid, _ = MazeGenerator.scramble(
            MazeGenerator.solved(rows, columns, rng), scrambles, rng
        )
        return Scenario(
            turns=scrambles + 1,
            columns=columns,
            rows=rows,
            maze_pattern=grid.to_pattern(),
            reverse_rotations=True,
        )
