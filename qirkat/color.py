"""Piece colors for Qirkat squares."""

from enum import Enum


class PieceColor(Enum):
    """Contents of a square: a white piece, a black piece, or nothing."""

    EMPTY = "-"
    WHITE = "w"
    BLACK = "b"

    @property
    def short_name(self) -> str:
        """Single-character name used in board layouts ('w', 'b' or '-')."""
        return self.value

    @property
    def full_name(self) -> str:
        return self.name.lower()

    def opposite(self) -> "PieceColor":
        """Return the other player's color.

        Raises:
            ValueError: if called on EMPTY, which has no opposite.
        """
        if self is PieceColor.WHITE:
            return PieceColor.BLACK
        if self is PieceColor.BLACK:
            return PieceColor.WHITE
        raise ValueError("EMPTY has no opposite color")

    @classmethod
    def from_char(cls, ch: str) -> "PieceColor":
        """Map a layout character ('w', 'b', '-', any case) to a color."""
        try:
            return cls(ch.lower())
        except ValueError:
            raise ValueError(f"bad piece character: {ch!r}") from None

    @classmethod
    def parse(cls, text: str) -> "PieceColor":
        """Parse a player name: 'w', 'white', 'b' or 'black' (any case)."""
        name = text.strip().lower()
        if name in ("w", "white"):
            return cls.WHITE
        if name in ("b", "black"):
            return cls.BLACK
        raise ValueError(f"bad player color: {text!r}")
