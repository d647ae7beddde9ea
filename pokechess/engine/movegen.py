"""Pseudo-legal move generation.

Moves respect piece geometry, blocking and capture rules only; whether the
mover's own king is left attacked is never checked.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Set, Tuple

from .board import HOME_ROWS, Board, Color, Kind, Piece
from .move import Move, Square, on_board


KNIGHT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
)
KING_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)
ROOK_DIRS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
BISHOP_DIRS: Tuple[Tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
QUEEN_DIRS = ROOK_DIRS + BISHOP_DIRS


def pawn_direction(color: Color) -> int:
    """Row delta of a forward pawn step (White moves toward row 0)."""
    return -1 if color is Color.WHITE else 1


def promotion_row(color: Color) -> int:
    """The opponent's back rank, where a pawn of ``color`` promotes."""
    return HOME_ROWS[color.opponent()][0]


def _pawn(board: Board, origin: Square, piece: Piece) -> Set[Square]:
    r, f = origin
    step = pawn_direction(piece.color)
    out: Set[Square] = set()
    one = r + step
    if on_board(one, f) and board.grid[one][f] is None:
        out.add((one, f))
        two = r + 2 * step
        if r == HOME_ROWS[piece.color][1] and on_board(two, f) and board.grid[two][f] is None:
            out.add((two, f))
    for df in (-1, 1):
        cf = f + df
        if not on_board(one, cf):
            continue
        target = board.grid[one][cf]
        if target is not None and target.color is not piece.color:
            out.add((one, cf))
    return out


def _slide(board: Board, origin: Square, color: Color, dirs: Tuple[Tuple[int, int], ...]) -> Set[Square]:
    r, f = origin
    out: Set[Square] = set()
    for dr, df in dirs:
        rr, ff = r + dr, f + df
        while on_board(rr, ff):
            target = board.grid[rr][ff]
            if target is None:
                out.add((rr, ff))
            else:
                if target.color is not color:
                    out.add((rr, ff))
                break
            rr += dr
            ff += df
    return out


def _step(board: Board, origin: Square, color: Color, offsets: Tuple[Tuple[int, int], ...]) -> Set[Square]:
    r, f = origin
    out: Set[Square] = set()
    for dr, df in offsets:
        rr, ff = r + dr, f + df
        if not on_board(rr, ff):
            continue
        target = board.grid[rr][ff]
        if target is None or target.color is not color:
            out.add((rr, ff))
    return out


_GENERATORS: Dict[Kind, Callable[[Board, Square, Piece], Set[Square]]] = {
    Kind.PAWN: _pawn,
    Kind.ROOK: lambda b, sq, p: _slide(b, sq, p.color, ROOK_DIRS),
    Kind.BISHOP: lambda b, sq, p: _slide(b, sq, p.color, BISHOP_DIRS),
    Kind.QUEEN: lambda b, sq, p: _slide(b, sq, p.color, QUEEN_DIRS),
    Kind.KNIGHT: lambda b, sq, p: _step(b, sq, p.color, KNIGHT_OFFSETS),
    Kind.KING: lambda b, sq, p: _step(b, sq, p.color, KING_OFFSETS),
}


def generate_moves(board: Board, origin: Square) -> Set[Square]:
    """Return the pseudo-legal destinations of the piece on ``origin``.

    Args:
        board (Board): Position to read; never modified.
        origin (Square): Square of the piece to move.

    Returns:
        Set[Square]: Destination squares. Empty if ``origin`` is empty.
    """
    piece = board.piece_at(origin)
    if piece is None:
        return set()
    return _GENERATORS[piece.kind](board, origin, piece)


def generate_all(board: Board, color: Color) -> List[Move]:
    """Every pseudo-legal move of ``color``, sorted by origin then destination."""
    moves: List[Move] = []
    for origin, _piece in board.pieces(color):
        for dest in sorted(generate_moves(board, origin)):
            moves.append(Move(origin, dest))
    return moves
