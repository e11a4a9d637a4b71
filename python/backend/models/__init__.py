from backend.models.grid import Grid, Opening
from backend.models.move import Move, MoveKind, parse_moves
from backend.models.scenario import Scenario

__all__ = ["Grid", "Move", "MoveKind", "Opening", "Scenario", "parse_moves"]
