"""Replays a move sequence against a scenario and checks the win condition."""

from __future__ import annotations

from backend.engine.gamestate import StateNode
from backend.models.move import Move, parse_moves
from backend.models.scenario import Scenario


class GamePlay:
    """Orchestrates a single replay session."""

    def __init__(self, scenario: Scenario) -> None:
        self.state = scenario.root()

    @classmethod
    def from_node(cls, node: StateNode) -> GamePlay:
        """Continue a session from an existing node (e.g. a search result)."""
        obj = object.__new__(cls)
        obj.state = node
        return obj

    # -- movement -------------------------------------------------------------

    def move(self, move: Move) -> bool:
        """Apply *move* if it is legal. Returns True if it was applied."""
        if not self.state.can_apply(move):
            return False
        self.state = self.state.apply(move)
        return True

    def play(self, notation: str) -> None:
        """Apply every move in *notation*, e.g. ``"R0 (1,2)"``.

        Raises ``ValueError`` on the first move that cannot be parsed or
        is not legal at that point.
        """
        for move in parse_moves(notation, self.state.grid):
            self.state = self.state.apply(move)

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_goal()

    @property
    def turns_remaining(self) -> int:
        return self.state.turns_remaining
