from __future__ import annotations

import pytest

from pokechess.engine.board import STARTPOS_FEN, Board, Color, Kind, Piece


def test_empty_board_is_8x8_and_empty() -> None:
    b = Board.empty()
    assert len(b.grid) == 8
    assert all(len(row) == 8 for row in b.grid)
    assert list(b.pieces()) == []


def test_startpos_layout() -> None:
    b = Board.startpos()
    assert b.piece_at((7, 4)) == Piece(Color.WHITE, Kind.KING)
    assert b.piece_at((7, 3)) == Piece(Color.WHITE, Kind.QUEEN)
    assert b.piece_at((0, 4)) == Piece(Color.BLACK, Kind.KING)
    assert b.piece_at((0, 0)) == Piece(Color.BLACK, Kind.ROOK)
    assert b.piece_at((0, 6)) == Piece(Color.BLACK, Kind.KNIGHT)
    for f in range(8):
        assert b.piece_at((6, f)) == Piece(Color.WHITE, Kind.PAWN)
        assert b.piece_at((1, f)) == Piece(Color.BLACK, Kind.PAWN)
        for r in range(2, 6):
            assert b.piece_at((r, f)) is None
    assert len(list(b.pieces(Color.WHITE))) == 16
    assert len(list(b.pieces(Color.BLACK))) == 16


def test_startpos_fen_round_trip() -> None:
    assert Board.startpos().to_fen() == STARTPOS_FEN
    assert Board.from_fen(STARTPOS_FEN) == Board.startpos()


@pytest.mark.parametrize(
    "placement",
    [
        "r1bqkbnr/pppp1ppp/2n5/4p3/3P4/5N2/PPP1PPPP/RNBQKB1R",
        "4k3/8/8/8/8/8/8/R3K2R",
        "8/8/8/8/8/8/8/8",
    ],
)
def test_fen_round_trip_various(placement: str) -> None:
    assert Board.from_fen(placement).to_fen() == placement


@pytest.mark.parametrize(
    "placement",
    [
        "",
        "8/8/8/8/8/8/8",  # not enough ranks
        "9/8/8/8/8/8/8/8",  # too many squares
        "7/8/8/8/8/8/8/8",  # too few squares
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX",  # bad piece
    ],
)
def test_invalid_fen_raises(placement: str) -> None:
    with pytest.raises(ValueError):
        Board.from_fen(placement)


def test_clone_is_independent() -> None:
    b = Board.startpos()
    c = b.clone()
    assert c == b
    c.set_piece((6, 4), None)
    assert b.piece_at((6, 4)) == Piece(Color.WHITE, Kind.PAWN)
    assert c.piece_at((6, 4)) is None


def test_piece_at_off_board_raises() -> None:
    with pytest.raises(ValueError):
        Board.empty().piece_at((8, 0))


def test_piece_chars() -> None:
    assert Piece(Color.WHITE, Kind.KNIGHT).to_char() == "N"
    assert Piece(Color.BLACK, Kind.KNIGHT).to_char() == "n"
    assert Piece.from_char("q") == Piece(Color.BLACK, Kind.QUEEN)
    with pytest.raises(ValueError):
        Piece.from_char("x")


def test_str_diagram() -> None:
    lines = str(Board.startpos()).splitlines()
    assert lines[0] == "8 r n b q k b n r"
    assert lines[7] == "1 R N B Q K B N R"
    assert lines[8] == "  a b c d e f g h"
