"""Tests for the Move value type and move notation."""

import pytest

from qirkat.move import Move, MoveKind


class TestMoveParse:
    """Tests for parsing and printing move notation."""

    def test_parse_slide(self):
        move = Move.parse("c2-c3")
        assert move == Move(7, 12)
        assert move.next is None
        assert str(move) == "c2-c3"

    def test_parse_double_jump(self):
        """A multi-jump becomes a chain of single jumps."""
        move = Move.parse("a3-c5-c3")
        assert move == Move(10, 22, Move(22, 12))
        assert str(move) == "a3-c5-c3"

    def test_parse_ignores_case_and_whitespace(self):
        assert Move.parse("  B3-D3\n") == Move(11, 13)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "c2c3",
            "c2-",
            "f1-e1",
            "c6-c5",
            "c2-c3 c4",
            "a1-a4",   # three steps
            "a1-b3",   # not a straight line
            "c2-c2",   # no movement
            "c2-c3-c4",  # slides cannot be chained
        ],
    )
    def test_parse_rejects_malformed(self, text):
        with pytest.raises(ValueError):
            Move.parse(text)


class TestMoveProperties:
    """Tests for move classification and derived squares."""

    def test_left_and_right(self):
        assert Move.parse("d3-c3").kind is MoveKind.LEFT
        assert Move.parse("d3-c3").is_left_move
        assert Move.parse("b3-c3").kind is MoveKind.RIGHT
        assert Move.parse("b3-c3").is_right_move

    def test_forward_and_diagonal_slides_are_vertical(self):
        assert Move.parse("c2-c3").kind is MoveKind.VERTICAL
        assert Move.parse("b2-c3").kind is MoveKind.VERTICAL
        assert not Move.parse("b2-c3").is_jump

    def test_jump(self):
        move = Move.parse("b3-d3")
        assert move.kind is MoveKind.JUMP
        assert move.is_jump
        assert move.jumped_index == 12

    def test_diagonal_jump_midpoint(self):
        assert Move.parse("a3-c5").jumped_index == 16

    def test_slide_has_no_jumped_square(self):
        assert Move.parse("c2-c3").jumped_index is None

    def test_chain_endpoints(self):
        move = Move.parse("a3-c5-c3")
        assert move.from_index == 10
        assert move.to_index == 22
        assert move.end_index == 12
        assert [hop.jumped_index for hop in move.hops()] == [16, 17]

    def test_chain_identity_includes_every_hop(self):
        """A chain is not equal to its first hop, even with the same start."""
        assert Move.parse("a3-c5-c3") != Move.parse("a3-c5")
        assert len({Move.parse("a3-c5-c3"), Move.chain(10, 22, 12), Move.parse("a3-c5")}) == 2

    def test_chain_builder(self):
        assert Move.chain(7, 12) == Move(7, 12)
        with pytest.raises(ValueError):
            Move.chain(7)

    def test_non_contiguous_chain_rejected(self):
        with pytest.raises(ValueError):
            Move(10, 22, Move(12, 2))

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            Move(24, 25)

    def test_moves_are_immutable(self):
        move = Move(7, 12)
        with pytest.raises(AttributeError):
            move.to_index = 13
