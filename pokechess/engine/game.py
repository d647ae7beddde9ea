from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional, Set, Tuple

from .board import Board, Color, Kind, Piece
from .move import Move, Square, square_to_str
from .movegen import generate_moves, promotion_row


@dataclass(frozen=True)
class MoveRecord:
    """Snapshot needed to reverse one applied move.

    ``moved`` is the piece as it stood on ``from_sq`` before the move (so
    before any promotion); ``captured`` is whatever occupied ``to_sq``.
    """

    from_sq: Square
    to_sq: Square
    moved: Piece
    captured: Optional[Piece] = None

    @property
    def move(self) -> Move:
        return Move(self.from_sq, self.to_sq)

    def to_uci(self) -> str:
        return self.move.to_uci()


@dataclass
class Game:
    """Game state manager: owns the board, the side to move and the history.

    Responsibility: apply and undo moves with strict turn alternation. Move
    legality is the caller's concern; ``apply_move`` performs any pair it is
    given.
    """

    board: Board
    turn: Color = Color.WHITE
    _history: List[MoveRecord] = field(default_factory=list, repr=False)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.startpos())

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        """Create a game from ``"<placement> [w|b]"``.

        Raises:
            ValueError: If the placement is malformed or the side to move is
                not ``w``/``b``.
        """
        if not fen or not isinstance(fen, str):
            raise ValueError("FEN must be a non-empty string")
        parts = fen.strip().split()
        if not parts:
            raise ValueError("FEN must be a non-empty string")
        if len(parts) > 2:
            # Full FEN records carry fields this game does not track
            parts = parts[:2]
        stm = parts[1] if len(parts) == 2 else "w"
        if stm not in ("w", "b"):
            raise ValueError("side to move must be 'w' or 'b'")
        return cls(board=Board.from_fen(parts[0]), turn=Color.WHITE if stm == "w" else Color.BLACK)

    def to_fen(self) -> str:
        return f"{self.board.to_fen()} {'w' if self.turn is Color.WHITE else 'b'}"

    @property
    def history(self) -> Tuple[MoveRecord, ...]:
        return tuple(self._history)

    def moves_from(self, square: Square) -> Set[Square]:
        return generate_moves(self.board, square)

    def apply_move(self, from_sq: Square, to_sq: Square) -> None:
        """Move the piece on ``from_sq`` to ``to_sq`` and pass the turn.

        The current board is cloned, so a board obtained from ``self.board``
        before the call is left untouched. A pawn reaching the opponent's back
        rank becomes a queen.

        Raises:
            ValueError: If ``from_sq`` is empty.
        """
        mover = self.board.piece_at(from_sq)
        if mover is None:
            raise ValueError(f"no piece on {square_to_str(from_sq)}")
        board = self.board.clone()
        captured = board.piece_at(to_sq)
        placed = mover
        if mover.kind is Kind.PAWN and to_sq[0] == promotion_row(mover.color):
            placed = replace(mover, kind=Kind.QUEEN)
        board.set_piece(from_sq, None)
        board.set_piece(to_sq, placed)
        self._history.append(MoveRecord(from_sq, to_sq, mover, captured))
        self.board = board
        self.turn = self.turn.opponent()

    def undo(self) -> None:
        """Reverse the last applied move; does nothing when history is empty."""
        if not self._history:
            return
        last = self._history.pop()
        board = self.board.clone()
        board.set_piece(last.from_sq, last.moved)
        board.set_piece(last.to_sq, last.captured)
        self.board = board
        self.turn = self.turn.opponent()

    def reset(self) -> None:
        self.board = Board.startpos()
        self.turn = Color.WHITE
        self._history.clear()

    # --- Views for front ends ---
    def last_move(self) -> Optional[MoveRecord]:
        return self._history[-1] if self._history else None

    def move_history_uci(self) -> List[str]:
        return [rec.to_uci() for rec in self._history]

    def captured_pieces(self) -> List[Tuple[Piece, Piece]]:
        """``(captured, captured_by)`` pairs in the order the captures happened."""
        return [(rec.captured, rec.moved) for rec in self._history if rec.captured is not None]
