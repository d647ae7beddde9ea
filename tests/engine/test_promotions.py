from __future__ import annotations

from pokechess.engine.board import Color, Kind, Piece
from pokechess.engine.game import Game
from pokechess.engine.move import str_to_square


def test_white_pawn_promotes_to_queen_on_row_0() -> None:
    g = Game.from_fen("k7/4P3/8/8/8/8/8/4K3 w")
    g.apply_move(str_to_square("e7"), str_to_square("e8"))
    assert g.board.piece_at((0, 4)) == Piece(Color.WHITE, Kind.QUEEN)
    assert g.board.piece_at(str_to_square("e7")) is None
    # History keeps the pre-promotion pawn
    assert g.history[-1].moved == Piece(Color.WHITE, Kind.PAWN)


def test_undo_reverts_promotion() -> None:
    g = Game.from_fen("k7/4P3/8/8/8/8/8/4K3 w")
    g.apply_move(str_to_square("e7"), str_to_square("e8"))
    g.undo()
    assert g.board.piece_at(str_to_square("e7")) == Piece(Color.WHITE, Kind.PAWN)
    assert g.board.piece_at(str_to_square("e8")) is None
    assert g.turn is Color.WHITE


def test_white_capture_promotion_and_undo_restores_victim() -> None:
    g = Game.from_fen("3rk3/4P3/8/8/8/8/8/4K3 w")
    g.apply_move(str_to_square("e7"), str_to_square("d8"))
    assert g.board.piece_at(str_to_square("d8")) == Piece(Color.WHITE, Kind.QUEEN)
    assert g.history[-1].captured == Piece(Color.BLACK, Kind.ROOK)
    g.undo()
    assert g.board.piece_at(str_to_square("d8")) == Piece(Color.BLACK, Kind.ROOK)
    assert g.board.piece_at(str_to_square("e7")) == Piece(Color.WHITE, Kind.PAWN)


def test_black_pawn_promotes_on_row_7() -> None:
    g = Game.from_fen("4k3/8/8/8/8/8/3p4/K7 b")
    g.apply_move(str_to_square("d2"), str_to_square("d1"))
    assert g.board.piece_at((7, 3)) == Piece(Color.BLACK, Kind.QUEEN)


def test_pawn_on_own_back_rank_is_not_promoted() -> None:
    # apply_move is mechanical; a white pawn moved onto row 7 stays a pawn
    g = Game.from_fen("4k3/8/8/8/8/8/4P3/K7 w")
    g.apply_move(str_to_square("e2"), str_to_square("e1"))
    assert g.board.piece_at(str_to_square("e1")) == Piece(Color.WHITE, Kind.PAWN)


def test_non_pawns_never_change_kind() -> None:
    g = Game.from_fen("4k3/R7/8/8/8/8/8/4K3 w")
    g.apply_move(str_to_square("a7"), str_to_square("a8"))
    assert g.board.piece_at(str_to_square("a8")) == Piece(Color.WHITE, Kind.ROOK)
