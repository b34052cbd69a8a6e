"""
Move representation and textual notation.

A Move is either a single slide to an adjacent point, a single jump over an
adjacent point, or a chain of jumps linked through `next`. Moves are
immutable values: two moves compare equal iff every hop in their chains
matches, so a double jump a3-c5-c3 is never equal to its first hop a3-c5.

Notation is <col><row>-<col><row>[-<col><row>...], e.g. "c2-c3" or
"a3-c5-c3", with columns a-e and rows 1-5 counted from White's side.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from qirkat.constants import COLUMN_NAMES, ROW_NAMES, col, index, row, square_name, valid_square

_SQUARE = r"[a-e][1-5]"
_MOVE_RE = re.compile(rf"{_SQUARE}(?:-{_SQUARE})+")


class MoveKind(Enum):
    """Classification of a single hop."""

    LEFT = "left"          # slide to column - 1, same row
    RIGHT = "right"        # slide to column + 1, same row
    VERTICAL = "vertical"  # any slide that changes row, diagonals included
    JUMP = "jump"


@dataclass(frozen=True)
class Move:
    """A slide, a jump, or the head of a jump chain.

    Attributes:
        from_index: Linear index of the square the piece leaves.
        to_index:   Linear index of the square this hop lands on.
        next:       Next hop of a multi-jump, or None.
    """

    from_index: int
    to_index: int
    next: "Move | None" = None

    def __post_init__(self) -> None:
        if not (valid_square(self.from_index) and valid_square(self.to_index)):
            raise ValueError(f"square out of range: {self.from_index}-{self.to_index}")
        dc = abs(self.col1 - self.col0)
        dr = abs(self.row1 - self.row0)
        # One or two lattice steps in a straight line.
        if (dc, dr) not in ((1, 0), (0, 1), (1, 1), (2, 0), (0, 2), (2, 2)):
            raise ValueError(
                f"not a single step or jump: {square_name(self.from_index)}-"
                f"{square_name(self.to_index)}"
            )
        if self.next is not None:
            if not self.is_jump or not self.next.is_jump:
                raise ValueError("only jumps can be chained")
            if self.next.from_index != self.to_index:
                raise ValueError("jump chain is not contiguous")

    @property
    def col0(self) -> int:
        return col(self.from_index)

    @property
    def row0(self) -> int:
        return row(self.from_index)

    @property
    def col1(self) -> int:
        return col(self.to_index)

    @property
    def row1(self) -> int:
        return row(self.to_index)

    @property
    def kind(self) -> MoveKind:
        """Classification of this hop (the head of a chain)."""
        if abs(self.col1 - self.col0) == 2 or abs(self.row1 - self.row0) == 2:
            return MoveKind.JUMP
        if self.row0 == self.row1:
            return MoveKind.LEFT if self.col1 < self.col0 else MoveKind.RIGHT
        return MoveKind.VERTICAL

    @property
    def is_jump(self) -> bool:
        return self.kind is MoveKind.JUMP

    @property
    def is_left_move(self) -> bool:
        return self.kind is MoveKind.LEFT

    @property
    def is_right_move(self) -> bool:
        return self.kind is MoveKind.RIGHT

    @property
    def jumped_index(self) -> int | None:
        """Square captured by this hop, or None for a slide."""
        if not self.is_jump:
            return None
        return index((self.col0 + self.col1) // 2, (self.row0 + self.row1) // 2)

    @property
    def end_index(self) -> int:
        """Square the piece finally lands on after the whole chain."""
        mov = self
        while mov.next is not None:
            mov = mov.next
        return mov.to_index

    def hops(self) -> Iterator["Move"]:
        """Iterate over this move and each continuation in order."""
        mov: Move | None = self
        while mov is not None:
            yield mov
            mov = mov.next

    @classmethod
    def chain(cls, *squares: int) -> "Move":
        """Build a move visiting `squares` in order, e.g. chain(10, 22, 12)."""
        if len(squares) < 2:
            raise ValueError("a move needs at least two squares")
        tail = None
        for frm, to in reversed(list(zip(squares, squares[1:]))):
            tail = cls(frm, to, tail)
        return tail

    @classmethod
    def parse(cls, text: str) -> "Move":
        """
        Parse move notation such as "c2-c3" or "a3-c5-c3".

        Args:
            text: Move notation. Case and surrounding whitespace are ignored.

        Returns:
            The corresponding Move (chained for multi-jumps).

        Raises:
            ValueError: If the notation is malformed or describes a step that
                        is neither a slide nor a jump.
        """
        notation = text.strip().lower()
        if not _MOVE_RE.fullmatch(notation):
            raise ValueError(f"bad move notation: {text!r}")
        squares = [
            index(COLUMN_NAMES.index(sq[0]), ROW_NAMES.index(sq[1]))
            for sq in notation.split("-")
        ]
        return cls.chain(*squares)

    def __str__(self) -> str:
        return "-".join([square_name(self.from_index)] + [square_name(m.to_index) for m in self.hops()])
