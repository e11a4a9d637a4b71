from backend.engine.gamestate.policy import RotationPolicy
from backend.engine.gamestate.state import StateNode

__all__ = ["RotationPolicy", "StateNode"]
