from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .move import Square, on_board


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


class Color(str, Enum):
    WHITE = "white"
    BLACK = "black"

    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class Kind(str, Enum):
    PAWN = "pawn"
    ROOK = "rook"
    KNIGHT = "knight"
    BISHOP = "bishop"
    QUEEN = "queen"
    KING = "king"


KIND_TO_CHAR = {
    Kind.PAWN: "p",
    Kind.ROOK: "r",
    Kind.KNIGHT: "n",
    Kind.BISHOP: "b",
    Kind.QUEEN: "q",
    Kind.KING: "k",
}
CHAR_TO_KIND = {v: k for k, v in KIND_TO_CHAR.items()}

BACK_RANK = [
    Kind.ROOK,
    Kind.KNIGHT,
    Kind.BISHOP,
    Kind.QUEEN,
    Kind.KING,
    Kind.BISHOP,
    Kind.KNIGHT,
    Kind.ROOK,
]

# Home rows per side: (back rank, pawn row)
HOME_ROWS = {
    Color.WHITE: (7, 6),
    Color.BLACK: (0, 1),
}


@dataclass(frozen=True)
class Piece:
    """Immutable piece value; a move places a new value rather than mutating."""

    color: Color
    kind: Kind

    def to_char(self) -> str:
        """FEN letter, uppercase for white."""
        ch = KIND_TO_CHAR[self.kind]
        return ch.upper() if self.color is Color.WHITE else ch

    @classmethod
    def from_char(cls, ch: str) -> "Piece":
        kind = CHAR_TO_KIND.get(ch.lower())
        if kind is None:
            raise ValueError(f"invalid piece letter: {ch!r}")
        return cls(Color.WHITE if ch.isupper() else Color.BLACK, kind)


Grid = List[List[Optional[Piece]]]


def _empty_grid() -> Grid:
    return [[None] * 8 for _ in range(8)]


@dataclass
class Board:
    """8x8 grid of optional pieces.

    Notes:
    - Squares are ``(row, file)``; row 0 is Black's back rank (a8..h8).
    - The grid is always 8x8 and holds at most one piece per square.
    """

    grid: Grid = field(default_factory=_empty_grid)

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board with both armies on their home rows.

        Returns:
            Board: White on rows 6-7, Black on rows 0-1.
        """
        board = cls()
        for color, (back_row, pawn_row) in HOME_ROWS.items():
            for file, kind in enumerate(BACK_RANK):
                board.grid[back_row][file] = Piece(color, kind)
                board.grid[pawn_row][file] = Piece(color, Kind.PAWN)
        return board

    @classmethod
    def from_fen(cls, placement: str) -> "Board":
        """Create a board from the piece-placement field of a FEN string.

        Args:
            placement (str): Ranks 8..1 separated by ``/``, e.g. the first
                field of a FEN record.

        Returns:
            Board: Board holding the described pieces.

        Raises:
            ValueError: If the placement has the wrong number of ranks, a rank
                does not cover exactly 8 files, or an unknown piece letter.
        """
        if not placement or not isinstance(placement, str):
            raise ValueError("FEN placement must be a non-empty string")
        ranks = placement.strip().split("/")
        if len(ranks) != 8:
            raise ValueError("FEN board must have 8 ranks")
        board = cls()
        for row, rank in enumerate(ranks):
            file = 0
            for ch in rank:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise ValueError("invalid empty count in FEN rank")
                    file += n
                else:
                    if file >= 8:
                        raise ValueError("too many squares in FEN rank")
                    board.grid[row][file] = Piece.from_char(ch)
                    file += 1
            if file != 8:
                raise ValueError("rank does not sum to 8 squares in FEN")
        return board

    def to_fen(self) -> str:
        """Serialize the grid as a FEN piece-placement field."""
        ranks: List[str] = []
        for row in self.grid:
            run = 0
            out = []
            for piece in row:
                if piece is None:
                    run += 1
                    continue
                if run > 0:
                    out.append(str(run))
                    run = 0
                out.append(piece.to_char())
            if run > 0:
                out.append(str(run))
            ranks.append("".join(out))
        return "/".join(ranks)

    def clone(self) -> "Board":
        # Pieces are frozen, so copying the rows is a full value copy.
        return Board(grid=[list(row) for row in self.grid])

    def piece_at(self, square: Square) -> Optional[Piece]:
        row, file = square
        if not on_board(row, file):
            raise ValueError(f"square off board: {square!r}")
        return self.grid[row][file]

    def set_piece(self, square: Square, piece: Optional[Piece]) -> None:
        row, file = square
        if not on_board(row, file):
            raise ValueError(f"square off board: {square!r}")
        self.grid[row][file] = piece

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for occupied squares in row-major order."""
        for row in range(8):
            for file in range(8):
                piece = self.grid[row][file]
                if piece is not None and (color is None or piece.color is color):
                    yield (row, file), piece

    def rows(self) -> List[str]:
        """One string per row, piece letters with ``.`` for empty squares."""
        return ["".join(p.to_char() if p else "." for p in row) for row in self.grid]

    def __str__(self) -> str:
        lines = [f"{8 - i} {' '.join(r)}" for i, r in enumerate(self.rows())]
        lines.append("  a b c d e f g h")
        return "\n".join(lines)

