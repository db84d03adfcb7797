from backend.models.board import Board, Position, Tile

__all__ = ["Board", "Position", "Tile"]
