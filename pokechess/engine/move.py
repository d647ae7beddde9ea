from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


# (row, file); row 0 is rank 8, file 0 is the a-file.
Square = Tuple[int, int]

FILES = "abcdefgh"


class InvalidNotation(ValueError):
    """Raised for malformed algebraic square or move strings."""


def on_board(row: int, file: int) -> bool:
    return 0 <= row < 8 and 0 <= file < 8


@dataclass(frozen=True)
class Move:
    """Origin/destination pair as handed to the game state manager.

    Attributes:
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.
    """

    from_sq: Square
    to_sq: Square

    def to_uci(self) -> str:
        """Serialize the move into long algebraic form.

        Returns:
            str: Move encoded like ``"e2e4"``.
        """
        return square_to_str(self.from_sq) + square_to_str(self.to_sq)


def parse_uci(uci: str) -> Move:
    """Parse a long algebraic move string.

    Args:
        uci (str): Move such as ``"e2e4"``. A trailing ``q`` is tolerated
            since pawns always promote to a queen.

    Returns:
        Move: Parsed move.

    Raises:
        InvalidNotation: If the string has an invalid length, squares, or
            promotion piece.
    """
    if len(uci) not in (4, 5):
        raise InvalidNotation(f"invalid move length: {uci!r}")
    if len(uci) == 5 and uci[4].lower() != "q":
        raise InvalidNotation(f"invalid promotion piece: {uci[4]!r}")
    return Move(str_to_square(uci[0:2]), str_to_square(uci[2:4]))


def str_to_square(s: str) -> Square:
    """Convert algebraic notation into a ``(row, file)`` square.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        Square: ``(row, file)`` with row 0 being rank 8.

    Raises:
        InvalidNotation: If ``s`` is not a valid square.
    """
    if not isinstance(s, str) or len(s) != 2 or s[0] not in FILES or s[1] not in "12345678":
        raise InvalidNotation(f"invalid square: {s!r}")
    return 8 - int(s[1]), FILES.index(s[0])


def square_to_str(square: Square) -> str:
    """Convert a ``(row, file)`` square into algebraic notation.

    Args:
        square (Square): Square with both coordinates in 0..7.

    Returns:
        str: Algebraic notation for ``square``.

    Raises:
        InvalidNotation: If ``square`` is off the board.
    """
    row, file = square
    if not on_board(row, file):
        raise InvalidNotation(f"invalid square: {square!r}")
    return FILES[file] + str(8 - row)
