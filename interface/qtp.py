"""
QTP (Qirkat Text Protocol) handler.

QTP is a small line-oriented protocol modelled on UCI: a controller (a game
runner, a test script, tools/bench.py) writes commands to the engine's
stdin and reads replies from its stdout. Every reply line is flushed
immediately so a controller reading line by line never stalls.

Protocol overview:
    Controller → Engine: qtp, isready, newgame, position, move, undo, moves,
                         board, status, go, quit
    Engine → Controller: id name, id author, qtpok, readyok, ok, error,
                         moves, status, info, bestmove

Position setup:
    position startpos [moves c2-c3 c4-c2 ...]
    position layout <25 chars of b/w/-, spaces allowed> side <white|black>
             [moves ...]

Threading model:
    The search is synchronous: "go" blocks until the move is found. The
    engine has no cancellation point, so a controller bounds latency with
    "go depth N".

Critical rule: NEVER print to stdout except for valid QTP responses.
Diagnostics are logged to stderr.
"""

import logging
import sys
import time

from pydantic import BaseModel, ValidationError, field_validator

from qirkat.board import Board
from qirkat.color import PieceColor
from qirkat.constants import MAX_DEPTH
from qirkat.move import Move
from qirkat.search import SearchState, find_move

logger = logging.getLogger(__name__)


def _send(line: str) -> None:
    """
    Write a line to stdout and flush immediately.

    Args:
        line: The QTP response line to send (without trailing newline).
    """
    print(line, flush=True)


class GoParams(BaseModel):
    """
    Parameters of a "go" command.

    Fields:
        depth: Search depth in plies, clamped to [1, MAX_DEPTH]. Deeper
               searches grow exponentially, so the engine refuses to exceed
               its configured maximum.
    """

    depth: int = MAX_DEPTH

    @field_validator("depth")
    @classmethod
    def clamp_depth(cls, v: int) -> int:
        """Clamp depth to a safe operating range."""
        return max(1, min(v, MAX_DEPTH))


class QtpHandler:
    """
    Stateful handler for the QTP protocol.

    Holds the current game position. The main loop creates one instance and
    dispatches commands to it.

    Attributes:
        board: The current position, updated by "position", "move" and
               "undo" commands.
    """

    def __init__(self) -> None:
        self.board: Board = Board()

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_qtp(self) -> None:
        """Identify the engine and acknowledge protocol mode."""
        _send("id name Qirkat-AI")
        _send("id author Qirkat Project")
        _send("qtpok")

    def handle_isready(self) -> None:
        _send("readyok")

    def handle_newgame(self) -> None:
        """Reset the board to the starting position."""
        self.board = Board()

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Malformed layouts are reported with an "error" reply and leave the
        current position unchanged. An illegal move in the replay list stops
        the replay at that move; the moves before it stay applied.

        Args:
            tokens: The command tokens with "position" already stripped.
        """
        if "moves" in tokens:
            moves_idx = tokens.index("moves")
            setup, move_tokens = tokens[:moves_idx], tokens[moves_idx + 1:]
        else:
            setup, move_tokens = tokens, []

        if not setup:
            _send("error position needs startpos or layout")
            return

        board = Board()
        if setup[0] == "layout":
            if "side" not in setup or setup.index("side") + 1 >= len(setup):
                _send("error layout needs side <white|black>")
                return
            side_idx = setup.index("side")
            try:
                board.set_pieces(" ".join(setup[1:side_idx]), PieceColor.parse(setup[side_idx + 1]))
            except ValueError as e:
                logger.warning("qtp: rejected layout: %s", e)
                _send(f"error {e}")
                return
        elif setup[0] != "startpos":
            logger.warning("qtp: unknown position type: %s", setup[0])
            _send(f"error unknown position type: {setup[0]}")
            return

        self.board = board
        for text in move_tokens:
            try:
                self.board.make_move(Move.parse(text))
            except ValueError as e:
                logger.warning("qtp: stopping replay at %s: %s", text, e)
                _send(f"error {e}")
                break

    def handle_move(self, tokens: list[str]) -> None:
        """Apply a single move given in notation, e.g. "move a3-c5-c3"."""
        if len(tokens) != 1:
            _send("error move needs exactly one argument")
            return
        try:
            move = Move.parse(tokens[0])
            self.board.make_move(move)
        except ValueError as e:
            logger.warning("qtp: rejected move %s: %s", tokens[0], e)
            _send(f"error {e}")
            return
        _send(f"ok {move}")

    def handle_undo(self) -> None:
        if self.board.history_size == 0:
            _send("error nothing to undo")
            return
        self.board.undo()
        _send("ok undo")

    def handle_moves(self) -> None:
        """List the legal moves for the side to move on one line."""
        _send(" ".join(["moves"] + [str(m) for m in self.board.get_moves()]))

    def handle_board(self) -> None:
        for line in self.board.to_string(legend=True).split("\n"):
            _send(line)

    def handle_status(self) -> None:
        if self.board.game_over:
            _send(f"status game over winner {self.board.winner.full_name}")
        else:
            _send(f"status {self.board.whose_move.full_name} to move")

    def handle_go(self, tokens: list[str]) -> None:
        """
        Search the current position and reply with the best move.

        Emits one "info" line (depth, score, nodes, nps, time) followed by
        "bestmove <move>", or just "bestmove (none)" if the game is over.

        Args:
            tokens: The command tokens with "go" already stripped.
        """
        try:
            params = GoParams(**self._parse_go_params(tokens))
        except ValidationError as e:
            logger.warning("qtp: bad go parameters: %s", e)
            _send("error bad go parameters")
            return

        if self.board.game_over:
            _send("bestmove (none)")
            return

        state = SearchState()
        start = time.monotonic()
        move = find_move(self.board, depth=params.depth, state=state)
        elapsed_ms = max(1, int((time.monotonic() - start) * 1000))
        nps = max(1, state.node_count * 1000 // elapsed_ms)

        _send(
            f"info depth {params.depth} score {state.best_score} "
            f"nodes {state.node_count} nps {nps} time {elapsed_ms}"
        )
        _send(f"bestmove {move}")

    def handle_quit(self) -> None:
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    @staticmethod
    def _parse_go_params(tokens: list[str]) -> dict[str, str]:
        """
        Collect "key value" pairs from "go" tokens.

        Values are left as strings; GoParams validates and converts them.
        Unrecognised keys are ignored, as are dangling keys without a value.
        """
        params: dict[str, str] = {}
        for key, value in zip(tokens[::2], tokens[1::2]):
            if key in GoParams.model_fields:
                params[key] = value
        return params


def run_qtp_loop() -> None:
    """
    Main QTP protocol loop.

    Reads lines from stdin and dispatches each command to the QtpHandler.
    Runs until the "quit" command is received or stdin is closed.

    Error handling:
        Expected input errors are answered with "error" replies by the
        handlers themselves. Anything else propagates: it means the engine
        state is no longer trustworthy.
    """
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    handler = QtpHandler()

    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0]
        args = tokens[1:]

        if command == "qtp":
            handler.handle_qtp()
        elif command == "isready":
            handler.handle_isready()
        elif command == "newgame":
            handler.handle_newgame()
        elif command == "position":
            handler.handle_position(args)
        elif command == "move":
            handler.handle_move(args)
        elif command == "undo":
            handler.handle_undo()
        elif command == "moves":
            handler.handle_moves()
        elif command == "board":
            handler.handle_board()
        elif command == "status":
            handler.handle_status()
        elif command == "go":
            handler.handle_go(args)
        elif command == "quit":
            handler.handle_quit()
        else:
            logger.info("qtp: ignoring unknown command: %r", command)


if __name__ == "__main__":
    run_qtp_loop()
