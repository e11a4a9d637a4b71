"""Scenario files: a maze to be solved within a number of turns."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from backend.models.grid import Grid

if TYPE_CHECKING:
    from backend.engine.gamestate import RotationPolicy, StateNode

# Key names used by older scenario files.
_LEGACY_KEYS = {
    "Turns": "turns",
    "Columns": "columns",
    "Rows": "rows",
    "MazePattern": "maze_pattern",
}


@dataclass
class Scenario:
    turns: int
    columns: int
    rows: int
    maze_pattern: str
    rotate_rows: list[int] | None = None
    rotate_columns: list[int] | None = None
    reverse_rotations: bool = False

    def __post_init__(self) -> None:
        for name in ("turns", "columns", "rows"):
            if not _is_int(getattr(self, name)):
                raise ValueError(f"Malformed scenario: {name} must be an integer.")
        if not isinstance(self.maze_pattern, str):
            raise ValueError("Malformed scenario: maze_pattern must be a string.")
        for name in ("rotate_rows", "rotate_columns"):
            allowed = getattr(self, name)
            if allowed is not None and not (
                isinstance(allowed, list) and all(_is_int(v) for v in allowed)
            ):
                raise ValueError(f"Malformed scenario: {name} must be a list of integers.")
        if not isinstance(self.reverse_rotations, bool):
            raise ValueError("Malformed scenario: reverse_rotations must be true or false.")

    # -- persistence ----------------------------------------------------------

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Scenario:
        fields = {_LEGACY_KEYS.get(k, k): v for k, v in data.items()}
        try:
            return cls(**fields)
        except TypeError as exc:
            raise ValueError(f"Malformed scenario: {exc}") from exc

    @classmethod
    def load(cls, filepath: Path) -> Scenario:
        data = json.loads(Path(filepath).read_text())
        if not isinstance(data, dict):
            raise ValueError(f"Scenario file {filepath} must hold a JSON object.")
        return cls.from_json(data)

    def save(self, filepath: Path) -> None:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(json.dumps(self.to_json(), indent=2) + "\n")

    def to_json(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}

    # -- core objects ---------------------------------------------------------

    def grid(self) -> Grid:
        return Grid.from_pattern(self.maze_pattern, self.columns, self.rows)

    def policy(self) -> RotationPolicy:
        from backend.engine.gamestate import RotationPolicy

        return RotationPolicy(
            rows=None if self.rotate_rows is None else tuple(self.rotate_rows),
            columns=None if self.rotate_columns is None else tuple(self.rotate_columns),
            reverse=self.reverse_rotations,
        )

    def root(self) -> StateNode:
        """Build the starting search node, validating every field."""
        from backend.engine.gamestate import StateNode

        return StateNode.root(self.grid(), self.turns, self.policy())


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
