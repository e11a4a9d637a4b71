from backend.engine.gamesolver.search import ParallelSearch, Searchable, SearchError
from backend.engine.gamesolver.solver import SearchConfig, Solver

__all__ = ["ParallelSearch", "SearchConfig", "SearchError", "Searchable", "Solver"]
