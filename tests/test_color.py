"""Tests for PieceColor."""

import pytest

from qirkat.color import PieceColor


class TestPieceColor:
    def test_opposite(self):
        assert PieceColor.WHITE.opposite() is PieceColor.BLACK
        assert PieceColor.BLACK.opposite() is PieceColor.WHITE

    def test_opposite_of_empty_fails(self):
        """EMPTY has no opposite; asking for one is a caller bug."""
        with pytest.raises(ValueError):
            PieceColor.EMPTY.opposite()

    def test_short_names(self):
        assert PieceColor.WHITE.short_name == "w"
        assert PieceColor.BLACK.short_name == "b"
        assert PieceColor.EMPTY.short_name == "-"

    def test_from_char_is_case_insensitive(self):
        assert PieceColor.from_char("W") is PieceColor.WHITE
        assert PieceColor.from_char("b") is PieceColor.BLACK
        assert PieceColor.from_char("-") is PieceColor.EMPTY

    def test_from_char_rejects_unknown(self):
        with pytest.raises(ValueError):
            PieceColor.from_char("x")

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("white", PieceColor.WHITE),
            ("W", PieceColor.WHITE),
            ("Black", PieceColor.BLACK),
            ("b", PieceColor.BLACK),
        ],
    )
    def test_parse_player(self, text, expected):
        assert PieceColor.parse(text) is expected

    @pytest.mark.parametrize("text", ["", "-", "empty", "red"])
    def test_parse_rejects_non_players(self, text):
        with pytest.raises(ValueError):
            PieceColor.parse(text)
