"""Grid-based chess rules and minimax search."""

from .board import Board
from .move import Move, Position
from .search import SearchEngine

__all__ = ["Board", "Move", "Position", "SearchEngine"]
