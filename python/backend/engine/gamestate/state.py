"""Immutable search state: one point in a sequence of turns.

Each node keeps a reference to the node it was generated from, so a whole
solution is recovered by walking ``parent`` links instead of copying the
move history into every node. Many frontier nodes share the same ancestors.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from backend.engine.connectivity import reachable_from
from backend.engine.gamestate.policy import RotationPolicy
from backend.models.grid import Grid
from backend.models.move import Move, MoveKind


@dataclass(frozen=True, eq=False)
class StateNode:
    """Grid, token location and turn budget after a sequence of moves.

    Nodes are never mutated after construction, which lets search workers
    expand the same node concurrently without locking.
    """

    grid: Grid
    location: int
    turns_remaining: int
    move: Move | None = None
    parent: StateNode | None = field(default=None, repr=False)
    policy: RotationPolicy = field(default_factory=RotationPolicy, repr=False)

    def __post_init__(self) -> None:
        if not 0 <= self.location < len(self.grid):
            raise ValueError(
                f"Location {self.location} is outside the maze "
                f"(0..{len(self.grid) - 1})."
            )
        if self.turns_remaining < 0:
            raise ValueError(f"Turns remaining must be >= 0, got {self.turns_remaining}.")
        if (self.parent is None) != (self.move is None):
            raise ValueError("Only the root node may lack a move.")
        if self.parent is None:
            object.__setattr__(self, "policy", self.policy.resolve(self.grid))
        elif self.turns_remaining != self.parent.turns_remaining - 1:
            raise ValueError(
                f"Child must have one turn fewer than its parent "
                f"({self.parent.turns_remaining} -> {self.turns_remaining})."
            )

    @classmethod
    def root(cls, grid: Grid, turns: int, policy: RotationPolicy | None = None) -> StateNode:
        """Build the starting node: token on cell 0 with the full budget."""
        return cls(grid=grid, location=0, turns_remaining=turns, policy=policy or RotationPolicy())

    # -- search capability ----------------------------------------------------

    def is_goal(self) -> bool:
        return self.location == len(self.grid) - 1

    def score(self) -> int:
        """Higher is better: goals reached with more turns to spare win."""
        return self.turns_remaining

    def expand(self, emit: Callable[[StateNode], None]) -> None:
        """Pass every canonical successor of this node to *emit*.

        Consecutive walks are never generated, since one walk already
        reaches the whole connected component. Consecutive rotations of the
        same kind are only generated in non-decreasing argument order, and
        a rotation is never followed by its own inverse.
        """
        if self.turns_remaining <= 0:
            return

        if self.move is None or not self.move.is_walk:
            for cell in reachable_from(self.grid, self.location):
                if cell != self.location:
                    emit(self._child(Move.walk(cell)))

        for kind in self.policy.row_kinds:
            self._expand_rotations(kind, self.policy.rows, emit)
        for kind in self.policy.column_kinds:
            self._expand_rotations(kind, self.policy.columns, emit)

    def children(self) -> list[StateNode]:
        out: list[StateNode] = []
        self.expand(out.append)
        return out

    # -- replay ---------------------------------------------------------------

    def can_apply(self, move: Move) -> bool:
        """True if *move* is a legal next turn from this node."""
        if self.turns_remaining <= 0:
            return False
        try:
            move.validate(self.grid)
        except ValueError:
            return False
        if move.is_walk:
            return move.argument in reachable_from(self.grid, self.location)
        return True

    def apply(self, move: Move) -> StateNode:
        """Return the node reached by *move*, or raise ``ValueError``."""
        if self.turns_remaining <= 0:
            raise ValueError("No turns remaining.")
        if not self.can_apply(move):
            raise ValueError(
                f"Illegal move {move.notation(self.grid.columns)} "
                f"from cell {self.location}."
            )
        return self._child(move)

    # -- path reconstruction --------------------------------------------------

    def lineage(self) -> list[StateNode]:
        """Nodes from the root to this node, inclusive."""
        nodes: list[StateNode] = []
        node: StateNode | None = self
        while node is not None:
            nodes.append(node)
            node = node.parent
        nodes.reverse()
        return nodes

    def path(self) -> list[Move]:
        """Moves from the root to this node."""
        return [n.move for n in self.lineage()[1:] if n.move is not None]

    def notation(self) -> str:
        return " ".join(m.notation(self.grid.columns) for m in self.path())

    # -- helpers --------------------------------------------------------------

    def _expand_rotations(
        self,
        kind: MoveKind,
        allowed: tuple[int, ...] | None,
        emit: Callable[[StateNode], None],
    ) -> None:
        prev = self.move
        for arg in allowed or ():
            # R0 R1 and R1 R0 give the same grid; keep only the sorted order.
            if prev is not None and prev.kind is kind and prev.argument > arg:
                continue
            move = Move(kind, arg)
            if prev is not None and move.inverse == prev:
                continue
            emit(self._child(move))

    def _child(self, move: Move) -> StateNode:
        return StateNode(
            grid=self.grid.apply(move),
            location=move.argument if move.is_walk else self.location,
            turns_remaining=self.turns_remaining - 1,
            move=move,
            parent=self,
            policy=self.policy,
        )
