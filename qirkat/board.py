"""
Qirkat board: piece placement, legal move generation, and move application.

Squares are addressed by their linear index (0-24) in row-major order with
row 0 at the bottom, or by name ('a1'..'e5'). White starts on rows 1-2 and
moves up the board; Black starts on rows 4-5 and moves down.

Rules enforced here:

- Slides go to an adjacent empty point and never backward. Diagonal
  connections exist only from even-index points.
- Captures are mandatory. If any jump exists for the side to move, only
  jumps are legal, and each legal jump is a maximal chain.
- A piece that arrived on its square by a lateral slide may not slide
  straight back the way it came until it has made some other move.
- A piece on its far row (row 5 for White, row 1 for Black) may not slide
  sideways.

The game ends when the side to move has no legal move; the other side wins.
"""

import logging
from enum import IntEnum
from typing import Callable, NamedTuple, Protocol

from qirkat.color import PieceColor
from qirkat.constants import (
    BLACK_SLIDES,
    COLUMN_NAMES,
    INITIAL_LAYOUT,
    JUMP_RAYS,
    NUM_SQUARES,
    ROW_NAMES,
    SIDE,
    WHITE_SLIDES,
    index,
    row,
    valid_square,
)
from qirkat.move import Move

logger = logging.getLogger(__name__)

Listener = Callable[["Board"], None]


class IllegalMoveError(ValueError):
    """Raised by Board.make_move when a move is not legal in the position."""


class Lateral(IntEnum):
    """Direction of the lateral slide that last landed on a square."""

    LEFT = -1
    NONE = 0
    RIGHT = 1


class _HistoryEntry(NamedTuple):
    move: Move
    lateral: tuple[Lateral, ...]
    game_over: bool
    winner: PieceColor | None


class BoardView(Protocol):
    """Query-only interface to a board.

    The search engine is written against this interface: it can inspect a
    position and take private copies, but has no way to mutate the caller's
    board.
    """

    @property
    def whose_move(self) -> PieceColor: ...

    @property
    def game_over(self) -> bool: ...

    @property
    def winner(self) -> PieceColor | None: ...

    @property
    def cells(self) -> tuple[PieceColor, ...]: ...

    def get(self, k: int) -> PieceColor: ...

    def get_moves(self) -> list[Move]: ...

    def legal_move(self, move: Move) -> bool: ...

    def copy(self) -> "Board": ...


class Board:
    """A mutable Qirkat position with move history.

    Attributes:
        listener: Optional callable invoked with the board after every
                  mutation (make_move, apply, undo, set_pieces, clear).
                  Copies never inherit it.
    """

    def __init__(self, listener: Listener | None = None) -> None:
        self.listener = listener
        self.clear()

    # -----------------------------------------------------------------------
    # Setup
    # -----------------------------------------------------------------------

    def clear(self) -> None:
        """Reset to the starting position with White to move."""
        self._load(INITIAL_LAYOUT, PieceColor.WHITE)
        self._notify()

    def set_pieces(self, text: str, next_move: PieceColor | None) -> None:
        """
        Set the position from a layout string.

        Args:
            text:      25 characters from {b, w, -}, any case, optionally
                       interspersed with whitespace, in row-major order from
                       a1. Every square starts with no lateral restriction.
            next_move: Side to move.

        Raises:
            ValueError: If next_move is EMPTY or None, or text does not hold
                        exactly 25 recognized characters. The board is left
                        untouched in that case.
        """
        if next_move is None or next_move is PieceColor.EMPTY:
            raise ValueError("bad player color")
        layout = "".join(text.split())
        if len(layout) != NUM_SQUARES or any(ch not in "bwBW-" for ch in layout):
            raise ValueError("bad board description")
        self._load(layout, next_move)
        self._notify()

    def copy(self) -> "Board":
        """Return an independent copy of this board, history included."""
        other = Board.__new__(Board)
        other.listener = None
        other._cells = list(self._cells)
        other._whose_move = self._whose_move
        other._lateral = list(self._lateral)
        other._history = list(self._history)
        other._game_over = self._game_over
        other._winner = self._winner
        other._moves = self._moves
        return other

    def _load(self, layout: str, next_move: PieceColor) -> None:
        self._cells = [PieceColor.from_char(ch) for ch in layout]
        self._whose_move = next_move
        self._lateral = [Lateral.NONE] * NUM_SQUARES
        self._history: list[_HistoryEntry] = []
        self._update_status()

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    @property
    def whose_move(self) -> PieceColor:
        return self._whose_move

    @property
    def game_over(self) -> bool:
        """True iff the side to move has no legal move."""
        return self._game_over

    @property
    def winner(self) -> PieceColor | None:
        """The side that won, or None while the game is in progress."""
        return self._winner

    @property
    def cells(self) -> tuple[PieceColor, ...]:
        return tuple(self._cells)

    @property
    def history_size(self) -> int:
        return len(self._history)

    def get(self, k: int) -> PieceColor:
        if not valid_square(k):
            raise ValueError(f"bad square index: {k}")
        return self._cells[k]

    def get_square(self, name: str) -> PieceColor:
        """Contents of the square named like 'c3'."""
        name = name.strip().lower()
        if len(name) != 2 or name[0] not in COLUMN_NAMES or name[1] not in ROW_NAMES:
            raise ValueError(f"bad square name: {name!r}")
        return self._cells[index(COLUMN_NAMES.index(name[0]), ROW_NAMES.index(name[1]))]

    def lateral(self, k: int) -> Lateral:
        return self._lateral[k]

    def get_moves(self) -> list[Move]:
        """Return all legal moves for the side to move (empty if game over)."""
        if self._game_over:
            return []
        return list(self._moves)

    def legal_move(self, move: Move) -> bool:
        return move in self._moves and not self._game_over

    def jump_possible(self, k: int | None = None) -> bool:
        """True iff the side to move can jump from square k (anywhere if k is None)."""
        if k is not None and not valid_square(k):
            raise ValueError(f"bad square index: {k}")
        squares = range(NUM_SQUARES) if k is None else (k,)
        me = self._whose_move
        for sq in squares:
            if self._cells[sq] is not me:
                continue
            for jumped, landing in JUMP_RAYS[sq]:
                if self._cells[landing] is PieceColor.EMPTY and self._cells[jumped] is me.opposite():
                    return True
        return False

    def check_jump(self, move: Move) -> bool:
        """True iff every hop of `move` is a capture for the side to move."""
        me = self._whose_move
        cells = list(self._cells)
        for hop in move.hops():
            if (
                not hop.is_jump
                or (hop.jumped_index, hop.to_index) not in JUMP_RAYS[hop.from_index]
                or cells[hop.from_index] is not me
                or cells[hop.to_index] is not PieceColor.EMPTY
                or cells[hop.jumped_index] is not me.opposite()
            ):
                return False
            cells[hop.to_index] = me
            cells[hop.jumped_index] = PieceColor.EMPTY
            cells[hop.from_index] = PieceColor.EMPTY
        return True

    # -----------------------------------------------------------------------
    # Move generation
    # -----------------------------------------------------------------------

    def _generate_moves(self) -> tuple[Move, ...]:
        if self.jump_possible():
            moves = []
            for k in range(NUM_SQUARES):
                if self._cells[k] is self._whose_move:
                    moves.extend(self._jumps_from(self._cells, k))
            return tuple(moves)
        return tuple(
            move for k in range(NUM_SQUARES) if self._cells[k] is self._whose_move
            for move in self._slides_from(k)
        )

    def _jumps_from(self, cells: list[PieceColor], k: int) -> list[Move]:
        """All maximal jump chains for the piece on k, given the contents `cells`."""
        me = cells[k]
        moves = []
        for jumped, landing in JUMP_RAYS[k]:
            if cells[landing] is not PieceColor.EMPTY or cells[jumped] is not me.opposite():
                continue
            after = list(cells)
            after[landing] = me
            after[jumped] = PieceColor.EMPTY
            after[k] = PieceColor.EMPTY
            tails = self._jumps_from(after, landing)
            if tails:
                moves.extend(Move(k, landing, tail) for tail in tails)
            else:
                moves.append(Move(k, landing))
        return moves

    def _slides_from(self, k: int) -> list[Move]:
        me = self._cells[k]
        far_row = SIDE - 1 if me is PieceColor.WHITE else 0
        slides = WHITE_SLIDES if me is PieceColor.WHITE else BLACK_SLIDES
        moves = []
        for (target,) in slides[k]:
            if self._cells[target] is not PieceColor.EMPTY:
                continue
            move = Move(k, target)
            if move.is_left_move or move.is_right_move:
                if row(k) == far_row:
                    continue
                if (self._lateral[k] is Lateral.LEFT and move.is_right_move) or (
                    self._lateral[k] is Lateral.RIGHT and move.is_left_move
                ):
                    continue
            moves.append(move)
        return moves

    def _update_status(self) -> None:
        self._moves = self._generate_moves()
        self._game_over = not self._moves
        self._winner = self._whose_move.opposite() if self._game_over else None

    # -----------------------------------------------------------------------
    # Mutation
    # -----------------------------------------------------------------------

    def make_move(self, move: Move) -> None:
        """
        Play `move` for the side to move.

        Raises:
            IllegalMoveError: If the move is not legal here. The board is
                              not modified.
        """
        if not self.legal_move(move):
            raise IllegalMoveError(f"illegal move: {move}")
        self.apply(move)

    def apply(self, move: Move) -> None:
        """
        Play `move` without checking it against the legal move list.

        Only for moves taken from get_moves() on this exact position; the
        search engine uses it to avoid regenerating the move list.
        """
        me = self._whose_move
        assert self._cells[move.from_index] is me, f"no {me.full_name} piece on {move}"

        self._history.append(
            _HistoryEntry(move, tuple(self._lateral), self._game_over, self._winner)
        )
        for hop in move.hops():
            assert self._cells[hop.to_index] is PieceColor.EMPTY, f"occupied landing in {move}"
            if hop.is_jump:
                self._cells[hop.jumped_index] = PieceColor.EMPTY
                self._lateral[hop.jumped_index] = Lateral.NONE
                self._lateral[hop.to_index] = Lateral.NONE
            elif hop.is_left_move:
                self._lateral[hop.to_index] = Lateral.LEFT
            elif hop.is_right_move:
                self._lateral[hop.to_index] = Lateral.RIGHT
            else:
                self._lateral[hop.to_index] = Lateral.NONE
            self._lateral[hop.from_index] = Lateral.NONE
            self._cells[hop.to_index] = me
            self._cells[hop.from_index] = PieceColor.EMPTY

        self._whose_move = me.opposite()
        self._update_status()
        logger.debug("%s played %s%s", me.full_name, move, " (game over)" if self._game_over else "")
        self._notify()

    def undo(self) -> None:
        """
        Take back the most recent move, restoring captured pieces and lateral state.

        Raises:
            IndexError: If there is no move to undo.
        """
        if not self._history:
            raise IndexError("undo with empty history")
        entry = self._history.pop()
        mover = self._whose_move.opposite()
        move = entry.move

        # Clear the landing square first: a chain may end where it began.
        self._cells[move.end_index] = PieceColor.EMPTY
        self._cells[move.from_index] = mover
        for hop in move.hops():
            if hop.is_jump:
                self._cells[hop.jumped_index] = mover.opposite()

        self._whose_move = mover
        self._lateral = list(entry.lateral)
        self._moves = self._generate_moves()
        self._game_over = entry.game_over
        self._winner = entry.winner
        logger.debug("undid %s", move)
        self._notify()

    def _notify(self) -> None:
        if self.listener is not None:
            self.listener(self)

    # -----------------------------------------------------------------------
    # Rendering and comparison
    # -----------------------------------------------------------------------

    def __str__(self) -> str:
        return self.to_string()

    def to_string(self, legend: bool = False) -> str:
        """
        Render the board top row first, e.g. "  b b b b b" per line.

        If legend is true, each line is prefixed with its row number and a
        final line of column letters is appended.
        """
        lines = []
        for r in range(SIDE - 1, -1, -1):
            squares = " ".join(c.short_name for c in self._cells[r * SIDE:(r + 1) * SIDE])
            lines.append(f"{ROW_NAMES[r] if legend else ' '} {squares}")
        if legend:
            lines.append("  " + " ".join(COLUMN_NAMES))
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._cells == other._cells
            and self._whose_move is other._whose_move
            and self._game_over == other._game_over
        )

    def __repr__(self) -> str:
        layout = "".join(c.short_name for c in self._cells)
        return f"Board({layout!r}, {self._whose_move.full_name} to move)"
