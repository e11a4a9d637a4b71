"""Sliding maze solver."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from backend.engine.gamesolver.search import ParallelSearch
from backend.engine.gamestate import StateNode


@dataclass(frozen=True)
class SearchConfig:
    """Engine settings. ``search_depth`` defaults to the root's turn budget."""

    pool_size: int = 8
    search_limit: int = 8
    search_depth: int | None = None


class Solver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def solve(root: StateNode, config: SearchConfig | None = None) -> list[StateNode]:
        """Return goal nodes reachable from *root*, best first, or ``[]``."""
        config = config or SearchConfig()
        depth = root.turns_remaining if config.search_depth is None else config.search_depth
        search = ParallelSearch(config.pool_size, depth, config.search_limit)
        found = search.run(root)
        if not found:
            logger.info("No solution within {} turns", root.turns_remaining)
        return found  # type: ignore[return-value]

    @staticmethod
    def best(root: StateNode, config: SearchConfig | None = None) -> StateNode | None:
        """Return the highest-scoring goal node, or ``None``."""
        found = Solver.solve(root, config)
        return found[0] if found else None
