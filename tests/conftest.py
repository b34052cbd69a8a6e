"""Pytest configuration and shared fixtures."""

import pytest

from qirkat.board import Board
from qirkat.move import Move

INIT_BOARD = "  b b b b b\n  b b b b b\n  b b - w w\n  w w w w w\n  w w w w w"

GAME1 = ["c2-c3", "c4-c2", "c1-c3", "a3-c1", "c3-a3", "c5-c4", "a3-c5-c3"]

GAME1_BOARD = "  b b - b b\n  b - - b b\n  - - w w w\n  w - - w w\n  w w b w w"

GAME2 = ["d3-c3"]

GAME2_BOARD = "  b b b b b\n  b b b b b\n  b b w - w\n  w w w w w\n  w w w w w"


def make_moves(board: Board, moves: list[str]) -> None:
    """Play each move (in notation) on board, checking legality."""
    for text in moves:
        board.make_move(Move.parse(text))


@pytest.fixture
def board() -> Board:
    """A board in the starting position."""
    return Board()
