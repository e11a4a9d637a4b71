#!/usr/bin/env python3
"""Sliding Maze Solver.

Usage::

    python main.py solve 534f08 2x3 2          # pattern, dimensions, turns
    python main.py solve --scenario data/example-scenario.json
    python main.py replay 534f08 2x3 "R0 (1,2)"
    python main.py generate 3 4 3 --seed 7
"""

import random
import sys
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent  # sliding-maze/
DATA_DIR = PROJECT_ROOT / "data"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamegenerator import MazeGenerator  # noqa: E402
from backend.engine.gameplay import GamePlay  # noqa: E402
from backend.engine.gamesolver import SearchConfig, Solver  # noqa: E402
from backend.models.scenario import Scenario  # noqa: E402
from frontend.cli.rich.app import (  # noqa: E402
    console,
    print_failure,
    print_solution,
    print_state,
)


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="{time:HH:mm:ss} | <level>{level: <7}</level> | {message}",
        colorize=True,
    )


def _parse_dimensions(text: str) -> tuple[int, int]:
    """Parse ``<rows>x<columns>``, e.g. ``4x5``."""
    parts = text.lower().split("x", 1)
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise typer.BadParameter("Dimensions must be two numbers, e.g. 4x5")
    return int(parts[0]), int(parts[1])


def _scenario_from_args(
    pattern: Optional[str],
    dimensions: Optional[str],
    turns: Optional[int],
    scenario_file: Optional[Path],
) -> Scenario:
    if scenario_file is not None:
        return Scenario.load(scenario_file)
    if pattern is None or dimensions is None or turns is None:
        raise typer.BadParameter("Give PATTERN DIMENSIONS TURNS or --scenario FILE")
    rows, columns = _parse_dimensions(dimensions)
    return Scenario(
        turns=turns, columns=columns, rows=rows, maze_pattern=pattern.lower()
    )


def _fail(exc: ValueError) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {exc}")
    return typer.Exit(code=2)


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging."),
) -> None:
    """Sliding Maze Solver."""
    _configure_logging(verbose)


@app.command()
def solve(
    pattern: Optional[str] = typer.Argument(None, help="Hex maze pattern, one nibble per cell."),
    dimensions: Optional[str] = typer.Argument(None, help="Maze size as <rows>x<columns>."),
    turns: Optional[int] = typer.Argument(None, min=0, help="Turn budget."),
    scenario_file: Optional[Path] = typer.Option(
        None, "--scenario",
        exists=True, dir_okay=False,
        help="Load the maze from a scenario JSON file instead.",
    ),
    rows: Optional[List[int]] = typer.Option(
        None, "--row", help="Row that may be rotated (repeatable; default all).",
    ),
    columns: Optional[List[int]] = typer.Option(
        None, "--column", help="Column that may be rotated (repeatable; default all).",
    ),
    reverse: bool = typer.Option(
        False, "--reverse", help="Also explore left/up rotations.",
    ),
    pool_size: int = typer.Option(
        8, "--pool-size", min=1, envvar="MAZE_POOL_SIZE",
        help="Number of search workers.",
    ),
    limit: int = typer.Option(
        8, "--limit", min=1, envvar="MAZE_SEARCH_LIMIT",
        help="Stop after this many solutions are found.",
    ),
) -> None:
    """Search for a way from the first cell to the last."""
    try:
        scenario = _scenario_from_args(pattern, dimensions, turns, scenario_file)
        if rows:
            scenario.rotate_rows = list(rows)
        if columns:
            scenario.rotate_columns = list(columns)
        if reverse:
            scenario.reverse_rotations = True
        root = scenario.root()
    except ValueError as exc:
        raise _fail(exc) from exc

    if root.turns_remaining == 0:
        print_solution(root)
        if not root.is_goal():
            print_failure(0)
            raise typer.Exit(code=1)
        return

    best = Solver.best(root, SearchConfig(pool_size=pool_size, search_limit=limit))
    if best is None:
        print_failure(root.turns_remaining)
        raise typer.Exit(code=1)
    print_solution(best)


@app.command()
def replay(
    pattern: str = typer.Argument(..., help="Hex maze pattern, one nibble per cell."),
    dimensions: str = typer.Argument(..., help="Maze size as <rows>x<columns>."),
    moves: List[str] = typer.Argument(..., help="Moves, e.g. R0 D1 (2,3)."),
) -> None:
    """Apply a move sequence and draw every step."""
    rows, columns = _parse_dimensions(dimensions)
    scenario = Scenario(
        turns=len(moves), columns=columns, rows=rows, maze_pattern=pattern.lower()
    )
    try:
        game = GamePlay(scenario)
        print_state(game.state, title="start")
        for token in moves:
            game.play(token)
            print_state(game.state, title=f">>> {token}")
    except ValueError as exc:
        raise _fail(exc) from exc

    if game.is_won:
        console.print("[bold green]Exit reached![/bold green]")
    else:
        console.print("[yellow]Exit not reached.[/yellow]")
        raise typer.Exit(code=1)


@app.command()
def generate(
    rows: int = typer.Argument(..., min=1, max=16),
    columns: int = typer.Argument(..., min=1, max=16),
    scrambles: int = typer.Argument(..., min=0),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed."),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the scenario JSON here.",
    ),
) -> None:
    """Create a random scenario that is solvable within SCRAMBLES + 1 turns."""
    try:
        scenario = MazeGenerator.generate(rows, columns, scrambles, random.Random(seed))
        node = scenario.root()
    except ValueError as exc:
        raise _fail(exc) from exc

    if output is not None:
        scenario.save(output)
        logger.info("Scenario written to {}", output)
    else:
        console.print_json(data=scenario.to_json())
    print_state(node, title=f"{rows}x{columns}, {scenario.turns} turns")


if __name__ == "__main__":
    app()
