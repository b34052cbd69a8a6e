"""Tests for the QTP protocol handler."""

import io

import pytest
from pydantic import ValidationError

from interface import qtp
from interface.qtp import GoParams, QtpHandler
from qirkat.color import PieceColor
from qirkat.constants import MAX_DEPTH

from tests.conftest import GAME1, GAME1_BOARD, GAME2_BOARD


def _lines(capsys) -> list[str]:
    return capsys.readouterr().out.splitlines()


@pytest.fixture
def handler() -> QtpHandler:
    return QtpHandler()


class TestGoParams:
    def test_default_depth(self):
        assert GoParams().depth == MAX_DEPTH

    def test_depth_is_clamped(self):
        assert GoParams(depth=100).depth == MAX_DEPTH
        assert GoParams(depth=0).depth == 1
        assert GoParams(depth="3").depth == 3

    def test_non_numeric_depth_rejected(self):
        with pytest.raises(ValidationError):
            GoParams(depth="deep")


class TestQtpHandler:
    def test_identify(self, handler, capsys):
        handler.handle_qtp()
        handler.handle_isready()
        assert _lines(capsys) == ["id name Qirkat-AI", "id author Qirkat Project", "qtpok", "readyok"]

    def test_position_startpos_with_moves(self, handler, capsys):
        handler.handle_position(["startpos", "moves"] + GAME1)
        assert str(handler.board) == GAME1_BOARD
        assert _lines(capsys) == []

    def test_position_layout(self, handler):
        handler.handle_position(
            ["layout", "wwwww", "wwwww", "bbw-w", "bbbbb", "bbbbb", "side", "black"]
        )
        assert str(handler.board) == GAME2_BOARD
        assert handler.board.whose_move is PieceColor.BLACK

    def test_position_bad_layout_keeps_board(self, handler, capsys):
        handler.handle_position(["startpos", "moves", "d3-c3"])
        handler.handle_position(["layout", "wwwww", "side", "white"])
        assert _lines(capsys) == ["error bad board description"]
        assert str(handler.board) == GAME2_BOARD

    def test_position_missing_side(self, handler, capsys):
        handler.handle_position(["layout"] + ["-----"] * 5)
        assert _lines(capsys) == ["error layout needs side <white|black>"]

    def test_position_without_setup_keeps_board(self, handler, capsys):
        handler.handle_move(["d3-c3"])
        capsys.readouterr()
        handler.handle_position(["moves", "c2-c3"])
        handler.handle_position([])
        assert _lines(capsys) == ["error position needs startpos or layout"] * 2
        assert str(handler.board) == GAME2_BOARD

    def test_position_stops_at_illegal_move(self, handler, capsys):
        handler.handle_position(["startpos", "moves", "d3-c3", "c4-c3", "b3-d3"])
        assert _lines(capsys) == ["error illegal move: c4-c3"]
        assert str(handler.board) == GAME2_BOARD

    def test_move_and_undo(self, handler, capsys):
        handler.handle_move(["d3-c3"])
        assert str(handler.board) == GAME2_BOARD
        handler.handle_undo()
        assert handler.board.history_size == 0
        assert _lines(capsys) == ["ok d3-c3", "ok undo"]

    def test_bad_moves_are_reported(self, handler, capsys):
        handler.handle_move(["c2-c4"])
        handler.handle_move(["z9-a1"])
        handler.handle_move([])
        lines = _lines(capsys)
        assert lines[0] == "error illegal move: c2-c4"
        assert lines[1].startswith("error bad move notation")
        assert lines[2] == "error move needs exactly one argument"
        assert handler.board.history_size == 0

    def test_undo_without_history(self, handler, capsys):
        handler.handle_undo()
        assert _lines(capsys) == ["error nothing to undo"]

    def test_moves(self, handler, capsys):
        handler.handle_move(["d3-c3"])
        capsys.readouterr()
        handler.handle_moves()
        assert _lines(capsys) == ["moves b3-d3"]

    def test_board_and_status(self, handler, capsys):
        handler.handle_board()
        handler.handle_status()
        lines = _lines(capsys)
        assert lines[0] == "5 b b b b b"
        assert lines[5] == "  a b c d e"
        assert lines[6] == "status white to move"

    def test_go(self, handler, capsys):
        handler.handle_position(["layout", "wb---", "-----", "-----", "-----", "-----", "side", "white"])
        handler.handle_go(["depth", "2"])
        lines = _lines(capsys)
        assert lines[0].startswith("info depth 2 score 99999 nodes ")
        assert lines[1] == "bestmove a1-c1"
        # The search never touches the handler's board.
        assert handler.board.history_size == 0

    def test_go_when_game_over(self, handler, capsys):
        handler.handle_position(["layout", "b----", "-----", "-----", "-----", "--w--", "side", "white"])
        handler.handle_status()
        handler.handle_go([])
        assert _lines(capsys) == ["status game over winner black", "bestmove (none)"]

    def test_go_bad_depth(self, handler, capsys):
        handler.handle_go(["depth", "deep"])
        assert _lines(capsys) == ["error bad go parameters"]


class TestQtpLoop:
    def test_session(self, monkeypatch, capsys):
        script = "qtp\nposition startpos moves d3-c3\nbogus\n\ngo depth 1\nquit\n"
        monkeypatch.setattr("sys.stdin", io.StringIO(script))
        with pytest.raises(SystemExit):
            qtp.run_qtp_loop()
        lines = _lines(capsys)
        assert lines[:3] == ["id name Qirkat-AI", "id author Qirkat Project", "qtpok"]
        assert lines[3].startswith("info depth 1 ")
        assert lines[4] == "bestmove b3-d3"

    def test_session_survives_bad_position(self, monkeypatch, capsys):
        script = "position moves c2-c3\nisready\nquit\n"
        monkeypatch.setattr("sys.stdin", io.StringIO(script))
        with pytest.raises(SystemExit):
            qtp.run_qtp_loop()
        assert _lines(capsys) == ["error position needs startpos or layout", "readyok"]
