"""Rich terminal frontend: draws mazes and solutions.

Each cell is drawn as a 3×3 block: solid corners, a solid edge wherever
the cell's side is closed, and the token in the middle of its cell.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from backend.engine.gamestate import StateNode
from backend.models.grid import Grid, Opening
from backend.models.move import Move, MoveKind

console = Console()

_BLOCK = "██"
_SHADE = "▓▓"
_TOKEN = "¥ "
_GAP = "  "


# -- grid rendering -----------------------------------------------------------


def _highlighted(move: Move | None, grid: Grid, index: int) -> bool:
    """True if the cell at *index* was touched by *move*."""
    if move is None:
        return False
    row, column = grid.position(index)
    if move.kind is MoveKind.WALK:
        return move.argument == index
    if move.kind.is_row:
        return move.argument == row
    return move.argument == column


def render_grid(grid: Grid, location: int, move: Move | None = None) -> Text:
    """Return a Rich Text drawing of *grid* with the token at *location*."""
    text = Text()
    text.append("_" * (6 * grid.columns + 2) + "\n")
    for r in range(grid.rows):
        lines = [Text("│"), Text("│"), Text("│")]
        for c in range(grid.columns):
            index = grid.index(r, c)
            cell = grid.cell(index)
            if _highlighted(move, grid, index):
                wall, style = _SHADE, "magenta"
            else:
                wall, style = _BLOCK, "cyan"

            def side(opening: Opening) -> tuple[str, str]:
                return (_GAP, "") if cell & opening else (wall, style)

            top, mid, bottom = lines
            top.append(wall, style)
            top.append(*side(Opening.NORTH))
            top.append(wall, style)

            mid.append(*side(Opening.WEST))
            if index == location:
                mid.append(_TOKEN, "bold yellow")
            else:
                mid.append(_GAP)
            mid.append(*side(Opening.EAST))

            bottom.append(wall, style)
            bottom.append(*side(Opening.SOUTH))
            bottom.append(wall, style)
        for line in lines:
            line.append("│\n")
            text.append_text(line)
    text.append("¯" * (6 * grid.columns + 2))
    return text


def render_node(node: StateNode) -> Text:
    return render_grid(node.grid, node.location, node.move)


# -- solution output ----------------------------------------------------------


def print_solution(goal: StateNode) -> None:
    """Print every step from the root to *goal*, then the move notation."""
    columns = goal.grid.columns
    console.print()
    console.print("#" * 80, style="yellow")
    console.print()
    for node in goal.lineage():
        if node.move is not None:
            console.print(f">>> {node.move.notation(columns)}")
        console.print(render_node(node))
    console.print(Text("SOLUTION: ").append(goal.notation(), style="green"))


def print_state(node: StateNode, title: str | None = None) -> None:
    console.print(
        Panel(
            render_node(node),
            title=title or f"{node.turns_remaining} turns left",
            border_style="cyan",
            expand=False,
        )
    )


def print_failure(turns: int) -> None:
    console.print(f"[bold red]No solution found within {turns} turns.[/bold red]")
