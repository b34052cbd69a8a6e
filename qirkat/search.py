"""
Search entry point: depth-limited minimax with alpha-beta pruning.

find_move() is the interface the protocol handler depends on. It searches a
private copy of the board to a fixed depth and returns the best move for the
side to move, leaving the caller's board untouched.

Every node clones its parent and plays one move on the clone, so the tree
never shares mutable state and no undo bookkeeping is needed during search.

Scores are always from the perspective of the searching player (my_color),
not the side to move. `sense` selects the orientation of each ply: +1 on
plies where my_color chooses (maximize), -1 on the opponent's plies
(minimize). It flips on every recursive call.

Threading model:
    Synchronous and single-threaded. There is no cancellation point; a caller
    that needs bounded latency chooses the depth accordingly.
"""

import logging
import time
from dataclasses import dataclass

from qirkat.board import BoardView
from qirkat.color import PieceColor
from qirkat.constants import INFINITY, MAX_DEPTH
from qirkat.evaluate import static_score
from qirkat.move import Move

logger = logging.getLogger(__name__)


@dataclass
class SearchState:
    """
    Mutable bookkeeping for one search.

    Attributes:
        node_count: Number of positions visited, terminal and leaf nodes
                    included. Used for nodes-per-second reporting.
        best_move:  Move chosen at the root, or None until the root finishes.
        best_score: Minimax value of best_move from the searcher's
                    perspective.
    """

    node_count: int = 0
    best_move: Move | None = None
    best_score: int = 0


def minimax(
    board: BoardView,
    depth: int,
    save_move: bool,
    sense: int,
    alpha: int,
    beta: int,
    my_color: PieceColor,
    state: SearchState,
) -> int:
    """
    Minimax search with alpha-beta pruning.

    Args:
        board:     Position to search. Never modified; children are copies.
        depth:     Remaining depth in plies. At 0 the static score is returned.
        save_move: True only for the root call. When set, the best move found
                   is stored in state.best_move; nested calls never touch it.
        sense:     +1 to maximize at this ply, -1 to minimize.
        alpha:     Best score the maximizer can already guarantee.
        beta:      Best score the minimizer can already guarantee.
        my_color:  Player the scores are measured for.
        state:     Search bookkeeping (node counter, root result).

    Returns:
        The minimax value of `board` from my_color's perspective.

    The best (value, move) pair at each ply is replaced only when a child is
    strictly better than the current best, so ties keep the first move in
    generation order and the recorded move is always one whose value was
    actually returned. Once alpha >= beta the remaining siblings cannot
    affect the result and are skipped.
    """
    state.node_count += 1

    if depth == 0 or board.game_over:
        return static_score(board, my_color)

    best_score = -INFINITY if sense == 1 else INFINITY
    best_move = None

    for move in board.get_moves():
        child = board.copy()
        child.apply(move)
        score = minimax(child, depth - 1, False, -sense, alpha, beta, my_color, state)

        if sense == 1:
            if best_move is None or score > best_score:
                best_score, best_move = score, move
            alpha = max(alpha, best_score)
        else:
            if best_move is None or score < best_score:
                best_score, best_move = score, move
            beta = min(beta, best_score)

        if alpha >= beta:
            break

    if save_move:
        state.best_move = best_move
        state.best_score = best_score

    return best_score


def find_move(
    board: BoardView,
    my_color: PieceColor | None = None,
    depth: int = MAX_DEPTH,
    state: SearchState | None = None,
) -> Move | None:
    """
    Return the best move for the side to move in `board`.

    Args:
        board:    The current position. Not modified.
        my_color: Player the search optimizes for. Defaults to the side to
                  move; if it differs, the root ply minimizes instead.
        depth:    Search depth in plies (>= 1).
        state:    Optional SearchState to fill in, for callers that want the
                  score and node count as well as the move.

    Returns:
        The chosen move, or None if the game is already over.
    """
    if state is None:
        state = SearchState()
    if board.game_over:
        return None
    if my_color is None:
        my_color = board.whose_move

    sense = 1 if my_color is board.whose_move else -1
    start = time.monotonic()
    minimax(board, depth, True, sense, -INFINITY, INFINITY, my_color, state)
    elapsed_ms = (time.monotonic() - start) * 1000

    logger.debug(
        "search depth=%d move=%s score=%d nodes=%d time=%.1fms",
        depth,
        state.best_move,
        state.best_score,
        state.node_count,
        elapsed_ms,
    )
    return state.best_move
