"""
Static evaluation: material balance from a fixed player's point of view.

The search needs a numeric score for any position so it can compare moves.
Qirkat has a single piece type, so material is the only term: each square
holding one of our pieces counts +1 and every other square counts -1.

Note that empty squares are scored exactly like opponent pieces. Since the
number of squares is fixed, this is an affine function of our piece count
(score = 2 * ours - 25); it ignores how many pieces the opponent has left.
The simplification is intentional and is kept as the engine's heuristic.

Unlike a negamax evaluator, the score is not relative to the side to move:
it is always from the perspective of `my_color`, and the search alternates
between maximizing and minimizing it.
"""

from qirkat.board import BoardView
from qirkat.color import PieceColor
from qirkat.constants import WINNING_VALUE


def static_score(board: BoardView, my_color: PieceColor) -> int:
    """
    Score `board` for the player `my_color`.

    Args:
        board:    The position to score. Not modified.
        my_color: The player whose prospects are being measured.

    Returns:
        +WINNING_VALUE if the game is over and my_color won,
        -WINNING_VALUE if it is over and my_color lost, otherwise the
        material balance in the range [-25, 25].

    Example:
        >>> from qirkat.board import Board
        >>> static_score(Board(), PieceColor.WHITE)  # 12 white, 13 other
        -1
    """
    if board.game_over:
        return WINNING_VALUE if board.winner is my_color else -WINNING_VALUE
    return sum(1 if cell is my_color else -1 for cell in board.cells)
