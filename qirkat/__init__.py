"""
Qirkat engine package.

This package implements the board model for Qirkat (a 5x5 checkers-like game
with mandatory multi-jump captures) and a minimax search with alpha-beta
pruning that plays it.

Modules:
    constants — Board geometry, precomputed adjacency, search parameters
    color     — PieceColor enumeration
    move      — Move value type and move notation
    board     — Board state, legal move generation, make/undo
    evaluate  — Static position evaluation (material balance)
    search    — Minimax with alpha-beta pruning
"""

from qirkat.board import Board, BoardView, IllegalMoveError
from qirkat.color import PieceColor
from qirkat.move import Move
from qirkat.search import find_move

__all__ = ["Board", "BoardView", "IllegalMoveError", "Move", "PieceColor", "find_move"]
