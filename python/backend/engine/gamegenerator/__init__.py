from backend.engine.gamegenerator.generator import MazeGenerator

__all__ = ["MazeGenerator"]
