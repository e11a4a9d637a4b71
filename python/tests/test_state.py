"""State nodes: move generation, turn accounting and path reconstruction."""

from __future__ import annotations

import itertools

import pytest

from backend.engine.connectivity import reachable_from
from backend.engine.gamestate import RotationPolicy, StateNode
from backend.models.grid import Grid
from backend.models.move import Move, MoveKind

_GRID = Grid.from_pattern("534f08", 3)  # 2 rows x 3 columns


# -- helpers ------------------------------------------------------------------


def _walk_tree(node: StateNode) -> list[StateNode]:
    """Return every node of the tree below *node*, *node* included."""
    nodes = [node]
    stack = [node]
    while stack:
        for child in stack.pop().children():
            nodes.append(child)
            stack.append(child)
    return nodes


def _moves(node: StateNode) -> list[Move]:
    return [child.move for child in node.children()]


# -- construction -------------------------------------------------------------


def test_root() -> None:
    root = StateNode.root(_GRID, 3)
    assert root.location == 0
    assert root.turns_remaining == 3
    assert root.move is None
    assert root.parent is None
    assert root.policy.rows == (0, 1)
    assert root.policy.columns == (0, 1, 2)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"location": 6, "turns_remaining": 1},
        {"location": -1, "turns_remaining": 1},
        {"location": 0, "turns_remaining": -1},
        {"location": 0, "turns_remaining": 1, "move": Move.walk(1)},
    ],
    ids=["location-too-big", "location-negative", "negative-turns", "root-with-move"],
)
def test_invalid_nodes(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        StateNode(grid=_GRID, **kwargs)


def test_child_must_spend_one_turn() -> None:
    root = StateNode.root(_GRID, 3)
    with pytest.raises(ValueError):
        StateNode(grid=_GRID, location=1, turns_remaining=3, move=Move.walk(1), parent=root)


def test_policy_out_of_range() -> None:
    with pytest.raises(ValueError):
        StateNode.root(_GRID, 2, RotationPolicy(rows=(2,)))
    with pytest.raises(ValueError):
        StateNode.root(_GRID, 2, RotationPolicy(columns=(0, 3)))


def test_policy_is_sorted_and_deduplicated() -> None:
    root = StateNode.root(_GRID, 2, RotationPolicy(rows=(1, 0, 1), columns=()))
    assert root.policy.rows == (0, 1)
    assert root.policy.columns == ()


# -- expansion ----------------------------------------------------------------


def test_root_children() -> None:
    root = StateNode.root(_GRID, 2)
    assert _moves(root) == [
        Move.walk(1),
        Move.rotate_row_right(0),
        Move.rotate_row_right(1),
        Move.rotate_column_down(0),
        Move.rotate_column_down(1),
        Move.rotate_column_down(2),
    ]


def test_children_apply_their_move() -> None:
    root = StateNode.root(_GRID, 2)
    for child in root.children():
        assert child.parent is root
        assert child.policy is root.policy
        if child.move.is_walk:
            assert child.grid is root.grid
            assert child.location == child.move.argument
        else:
            assert child.grid == root.grid.apply(child.move)
            assert child.location == root.location


def test_rotation_keeps_token_index() -> None:
    root = StateNode.root(_GRID, 1)
    child = root.apply(Move.rotate_row_right(0))
    assert child.location == 0
    assert child.grid.cell(0) == _GRID.cell(2)


def test_expansion_is_deterministic() -> None:
    root = StateNode.root(_GRID, 2, RotationPolicy(reverse=True))
    first = [(c.move, c.grid, c.location) for c in root.children()]
    second = [(c.move, c.grid, c.location) for c in root.children()]
    assert first == second


def test_turn_accounting() -> None:
    root = StateNode.root(_GRID, 3, RotationPolicy(reverse=True))
    for node in _walk_tree(root):
        if node.turns_remaining == 0:
            assert node.children() == []
        for child in node.children():
            assert child.turns_remaining == node.turns_remaining - 1


def test_no_children_without_turns() -> None:
    assert StateNode.root(Grid.from_pattern("ffff", 2), 0).children() == []


def test_no_consecutive_walks() -> None:
    root = StateNode.root(Grid.from_pattern("f" * 9, 3), 3)
    for node in _walk_tree(root):
        if node.move is not None and node.move.is_walk:
            assert not any(m.is_walk for m in _moves(node))


def test_walk_after_rotation_is_generated() -> None:
    root = StateNode.root(_GRID, 2)
    rotated = root.apply(Move.rotate_row_right(0))
    walks = [m for m in _moves(rotated) if m.is_walk]
    assert Move.walk(5) in walks


@pytest.mark.parametrize(
    "maze",
    [("534f08", 3), ("e7d0", 2), ("f" * 9, 3), ("6c3a569c3a569c3a", 4)],
)
def test_walk_collapse_is_sound(maze: tuple[str, int]) -> None:
    # Anything two walks reach, one walk from the same place reaches too.
    grid = Grid.from_pattern(*maze)
    for start in range(len(grid)):
        once = set(reachable_from(grid, start))
        for middle in once:
            assert set(reachable_from(grid, middle)) <= once


def test_same_kind_rotations_are_non_decreasing() -> None:
    grid = Grid.from_pattern("0123456789abcdef", 4)
    root = StateNode.root(grid, 3)
    after = root.apply(Move.rotate_row_right(2))
    rows = [m.argument for m in _moves(after) if m.kind is MoveKind.ROTATE_ROW_RIGHT]
    columns = [m.argument for m in _moves(after) if m.kind is MoveKind.ROTATE_COLUMN_DOWN]
    assert rows == [2, 3]
    assert columns == [0, 1, 2, 3]


def test_ordering_is_per_kind() -> None:
    grid = Grid.from_pattern("0123456789abcdef", 4)
    root = StateNode.root(grid, 3, RotationPolicy(reverse=True))
    after = root.apply(Move.rotate_row_right(2))
    lefts = [m.argument for m in _moves(after) if m.kind is MoveKind.ROTATE_ROW_LEFT]
    # Left rotations are not constrained by a preceding right rotation,
    # but the immediate inverse L2 is skipped.
    assert lefts == [0, 1, 3]


def test_inverse_of_previous_move_is_skipped() -> None:
    grid = Grid.from_pattern("0123456789abcdef", 4)
    root = StateNode.root(grid, 3, RotationPolicy(reverse=True))
    after = root.apply(Move.rotate_column_up(1))
    assert Move.rotate_column_down(1) not in _moves(after)
    assert Move.rotate_column_up(1) in _moves(after)


@pytest.mark.parametrize(
    "kind",
    [
        MoveKind.ROTATE_ROW_RIGHT,
        MoveKind.ROTATE_ROW_LEFT,
        MoveKind.ROTATE_COLUMN_DOWN,
        MoveKind.ROTATE_COLUMN_UP,
    ],
)
def test_canonical_order_loses_no_grid(kind: MoveKind) -> None:
    grid = Grid.from_pattern("0123456789ab", 4)
    limit = grid.rows if kind.is_row else grid.columns
    pairs = list(itertools.product(range(limit), repeat=2))

    def final(a: int, b: int) -> Grid:
        return grid.apply(Move(kind, a)).apply(Move(kind, b))

    every_order = {final(a, b) for a, b in pairs}
    sorted_only = {final(a, b) for a, b in pairs if a <= b}
    assert every_order == sorted_only


def test_generated_two_rotation_grids_match_all_orders() -> None:
    grid = Grid.from_pattern("0123456789ab", 4)
    root = StateNode.root(grid, 2, RotationPolicy(columns=()))
    generated = {
        grandchild.grid
        for child in root.children() if not child.move.is_walk
        for grandchild in child.children() if not grandchild.move.is_walk
    }
    expected = {
        grid.rotate_row_right(a).rotate_row_right(b)
        for a, b in itertools.product(range(grid.rows), repeat=2)
    }
    assert generated == expected


def test_allow_lists_limit_rotations() -> None:
    root = StateNode.root(_GRID, 2, RotationPolicy(rows=(1,), columns=(2,)))
    rotations = [m for m in _moves(root) if not m.is_walk]
    assert rotations == [Move.rotate_row_right(1), Move.rotate_column_down(2)]


# -- capability ---------------------------------------------------------------


def test_goal_and_score() -> None:
    root = StateNode.root(_GRID, 2)
    assert not root.is_goal()
    assert root.score() == 2
    goal = root.apply(Move.rotate_row_right(0)).apply(Move.walk(5))
    assert goal.is_goal()
    assert goal.score() == 0


# -- replay -------------------------------------------------------------------


def test_can_apply() -> None:
    root = StateNode.root(_GRID, 1)
    assert root.can_apply(Move.walk(1))
    assert root.can_apply(Move.walk(0))
    assert not root.can_apply(Move.walk(5))
    assert not root.can_apply(Move.rotate_row_right(2))
    assert root.can_apply(Move.rotate_column_up(2))
    spent = root.apply(Move.walk(1))
    assert not spent.can_apply(Move.rotate_row_right(0))


def test_apply_rejects_illegal_moves() -> None:
    root = StateNode.root(_GRID, 1)
    with pytest.raises(ValueError):
        root.apply(Move.walk(5))
    with pytest.raises(ValueError):
        root.apply(Move.walk(1)).apply(Move.walk(0))


# -- path reconstruction ------------------------------------------------------


def test_lineage_and_path() -> None:
    root = StateNode.root(_GRID, 3)
    a = root.apply(Move.rotate_row_right(0))
    b = a.apply(Move.walk(5))
    assert b.lineage() == [root, a, b]
    assert b.path() == [Move.rotate_row_right(0), Move.walk(5)]
    assert b.notation() == "R0 (1,2)"
    assert root.path() == []
    assert root.lineage() == [root]


def test_siblings_share_ancestors() -> None:
    root = StateNode.root(_GRID, 3)
    a = root.apply(Move.rotate_row_right(0))
    left, right = a.apply(Move.walk(5)), a.apply(Move.rotate_row_right(1))
    assert left.parent is right.parent is a
