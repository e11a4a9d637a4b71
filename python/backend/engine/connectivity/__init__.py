from backend.engine.connectivity.resolver import Reachable, reachable_from

__all__ = ["Reachable", "reachable_from"]
