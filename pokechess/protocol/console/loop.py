from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Set

from ...engine.board import Kind, Piece
from ...engine.game import Game, MoveRecord
from ...engine.move import InvalidNotation, Square, parse_uci, square_to_str, str_to_square
from ...engine.movegen import promotion_row


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]
Clock = Callable[[], float]

# Input pause after each move, long enough for a board animation to finish
DEFAULT_COOLDOWN_MS = 420

NAMES = {
    Kind.PAWN: "Pikachu",
    Kind.ROOK: "Snorlax",
    Kind.KNIGHT: "Eevee",
    Kind.BISHOP: "Alakazam",
    Kind.QUEEN: "Mewtwo",
    Kind.KING: "Charizard",
}

HELP_LINES = [
    "board                show the board",
    "turn                 show the side to move",
    "select <sq>          pick a piece, then pick one of its destinations",
    "moves <sq>           list destinations of the piece on <sq>",
    "move <from><to>      play a move, e.g. move e2e4",
    "undo                 take back the last move",
    "reset                start a new game",
    "history              list played moves",
    "captured             list captured pieces",
    "fen                  print the position",
    "quit                 leave",
]


@dataclass
class Selection:
    """Front-end selection state: the picked square, its destinations, and
    the input cooldown that follows each move."""

    cooldown_ms: int = DEFAULT_COOLDOWN_MS
    clock: Clock = time.monotonic
    square: Optional[Square] = None
    candidates: Set[Square] = field(default_factory=set)
    busy_until: float = 0.0

    def busy(self) -> bool:
        return self.clock() < self.busy_until

    def start_cooldown(self) -> None:
        self.busy_until = self.clock() + self.cooldown_ms / 1000.0

    def pick(self, square: Square, candidates: Set[Square]) -> None:
        self.square = square
        self.candidates = set(candidates)

    def clear(self) -> None:
        self.square = None
        self.candidates = set()


class ConsoleSession:
    """Text front end around one game.

    Notes:
    - The core stays pure; all I/O goes through the ``write`` callable.
    - Only generated destinations of the side to move are passed to
      ``Game.apply_move``.
    """

    def __init__(self, cooldown_ms: int = DEFAULT_COOLDOWN_MS, clock: Clock = time.monotonic) -> None:
        self.game: Game = Game.new()
        self.selection = Selection(cooldown_ms=cooldown_ms, clock=clock)

    # ---- Command handlers ----
    def cmd_board(self, write: Writer) -> None:
        for line in str(self.game.board).splitlines():
            write(line)

    def cmd_turn(self, write: Writer) -> None:
        write(f"turn {self.game.turn.value}")

    def cmd_fen(self, write: Writer) -> None:
        write(self.game.to_fen())

    def cmd_moves(self, args: List[str], write: Writer) -> None:
        if not args:
            write("error: usage: moves <square>")
            return
        origin = str_to_square(args[0])
        write(f"{args[0]}: {_squares(self.game.moves_from(origin))}")

    def cmd_select(self, args: List[str], write: Writer) -> None:
        if not args:
            write("error: usage: select <square>")
            return
        square = str_to_square(args[0])
        if self.selection.busy():
            write("busy")
            return
        sel = self.selection
        if sel.square is not None:
            if square == sel.square:
                sel.clear()
                write("deselected")
                return
            if square in sel.candidates:
                origin = sel.square
                sel.clear()
                self._play(origin, square, write)
                return
        piece = self.game.board.piece_at(square)
        if piece is not None and piece.color is self.game.turn:
            sel.pick(square, self.game.moves_from(square))
            write(f"selected {args[0]}: {_squares(sel.candidates)}")
        elif sel.square is not None:
            sel.clear()
            write("deselected")
        else:
            write(f"error: no {self.game.turn.value} piece on {args[0]}")

    def cmd_move(self, args: List[str], write: Writer) -> None:
        if not args:
            write("error: usage: move <from><to>")
            return
        move = parse_uci(args[0])
        if self.selection.busy():
            write("busy")
            return
        piece = self.game.board.piece_at(move.from_sq)
        if piece is None or piece.color is not self.game.turn:
            write(f"error: no {self.game.turn.value} piece on {square_to_str(move.from_sq)}")
            return
        if move.to_sq not in self.game.moves_from(move.from_sq):
            write(f"error: illegal move {move.to_uci()}")
            return
        self.selection.clear()
        self._play(move.from_sq, move.to_sq, write)

    def cmd_undo(self, write: Writer) -> None:
        if self.selection.busy():
            write("busy")
            return
        last = self.game.last_move()
        if last is None:
            write("nothing to undo")
            return
        self.game.undo()
        self.selection.clear()
        write(f"undone {last.to_uci()}")
        self.cmd_turn(write)

    def cmd_reset(self, write: Writer) -> None:
        self.game.reset()
        self.selection.clear()
        write("new game")
        self.cmd_turn(write)

    def cmd_history(self, write: Writer) -> None:
        history = self.game.history
        if not history:
            write("(no moves)")
            return
        for i, rec in enumerate(history, start=1):
            write(f"{i}. {_describe(rec)}")

    def cmd_captured(self, write: Writer) -> None:
        captured = self.game.captured_pieces()
        if not captured:
            write("(none)")
            return
        for piece, by in captured:
            write(f"{_name(piece)} by {_name(by)}")

    def cmd_help(self, write: Writer) -> None:
        for line in HELP_LINES:
            write(line)

    def dispatch(self, line: str, write: Writer) -> bool:
        """Run one command line; returns False once the session should end."""
        parts = line.split()
        if not parts:
            return True
        cmd, args = parts[0].lower(), parts[1:]
        if cmd in ("quit", "exit"):
            return False
        handlers = {
            "board": lambda: self.cmd_board(write),
            "turn": lambda: self.cmd_turn(write),
            "fen": lambda: self.cmd_fen(write),
            "moves": lambda: self.cmd_moves(args, write),
            "select": lambda: self.cmd_select(args, write),
            "move": lambda: self.cmd_move(args, write),
            "undo": lambda: self.cmd_undo(write),
            "reset": lambda: self.cmd_reset(write),
            "history": lambda: self.cmd_history(write),
            "captured": lambda: self.cmd_captured(write),
            "help": lambda: self.cmd_help(write),
        }
        handler = handlers.get(cmd)
        if handler is None:
            write(f"error: unknown command {cmd!r} (try 'help')")
            return True
        try:
            handler()
        except InvalidNotation as e:
            write(f"error: {e}")
        return True

    # ---- Utilities ----
    def _play(self, from_sq: Square, to_sq: Square, write: Writer) -> None:
        self.game.apply_move(from_sq, to_sq)
        self.selection.start_cooldown()
        rec = self.game.history[-1]
        logger.debug("move applied", extra={"move": rec.to_uci()})
        write(f"moved {_describe(rec)}")
        self.cmd_turn(write)


def _squares(squares: Iterable[Square]) -> str:
    names = sorted(square_to_str(sq) for sq in squares)
    return " ".join(names) if names else "(none)"


def _name(piece: Piece) -> str:
    """Display name, e.g. ``white Pikachu (pawn)``."""
    return f"{piece.color.value} {NAMES[piece.kind]} ({piece.kind.value})"


def _describe(rec: MoveRecord) -> str:
    text = f"{NAMES[rec.moved.kind]} {rec.to_uci()}"
    if rec.moved.kind is Kind.PAWN and rec.to_sq[0] == promotion_row(rec.moved.color):
        text += f"=Q ({NAMES[Kind.QUEEN]})"
    if rec.captured is not None:
        text += f" x{NAMES[rec.captured.kind]}"
    return text


def _default_writer(line: str) -> None:
    # Ensure newline termination and immediate flush
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run_console(
    session: Optional[ConsoleSession] = None,
    lines: Optional[Iterable[str]] = None,
    write: Writer = _default_writer,
) -> None:
    sess = session or ConsoleSession()
    sess.cmd_board(write)
    sess.cmd_turn(write)
    for raw in lines if lines is not None else sys.stdin:
        if not sess.dispatch(raw.strip(), write):
            break
