from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .error import (
    exception_handler,
    http_exception_handler,
    invalid_notation_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ...engine.game import Game
from ...engine.move import InvalidNotation, parse_uci, square_to_str, str_to_square
from ...engine.movegen import generate_all, generate_moves


logger = logging.getLogger(__name__)


class CreateGameResponse(BaseModel):
    game_id: str
    fen: str


class SetPositionRequest(BaseModel):
    fen: str = Field(..., description="Piece placement plus optional side to move, e.g. '8/8/8/8/8/8/8/4K3 w'")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Long algebraic move string, e.g. e2e4")


class CapturedPiece(BaseModel):
    piece: str = Field(..., description="FEN letter of the captured piece")
    by: str = Field(..., description="FEN letter of the capturing piece")


class MovesResponse(BaseModel):
    square: str
    destinations: list[str]


class GameState(BaseModel):
    game_id: str
    fen: str
    turn: str
    board: list[str]
    moves: list[str]
    last_move: Optional[str]
    move_history: list[str]
    captured: list[CapturedPiece]


def create_app(store: Optional[InMemorySessionStore] = None) -> FastAPI:
    app = FastAPI(title="Pokechess API", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=logging.INFO)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(InvalidNotation, invalid_notation_handler)
    app.add_exception_handler(Exception, exception_handler)

    # In-memory session store for games
    sessions = store if store is not None else InMemorySessionStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game() -> CreateGameResponse:
        game_id = sessions.create(Game.new())
        with sessions.locked(game_id) as game:
            return CreateGameResponse(game_id=game_id, fen=_require(game).to_fen())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        with sessions.locked(game_id) as game:
            return _state(game_id, _require(game))

    @app.get("/api/games/{game_id}/moves/{square}", response_model=MovesResponse)
    async def get_moves(game_id: str, square: str) -> MovesResponse:
        with sessions.locked(game_id) as game:
            board = _require(game).board
            dests = generate_moves(board, str_to_square(square))
        return MovesResponse(square=square, destinations=sorted(square_to_str(sq) for sq in dests))

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        move = parse_uci(req.move)
        with sessions.locked(game_id) as game:
            game = _require(game)
            # The manager applies any pair; only generated moves get through here
            piece = game.board.piece_at(move.from_sq)
            if piece is None:
                raise HTTPException(status_code=400, detail=f"no piece on {square_to_str(move.from_sq)}")
            if piece.color is not game.turn:
                raise HTTPException(status_code=400, detail="not your turn")
            if move.to_sq not in generate_moves(game.board, move.from_sq):
                raise HTTPException(status_code=400, detail="illegal move")
            game.apply_move(move.from_sq, move.to_sq)
            logger.info("move applied", extra={"game_id": game_id, "move": move.to_uci()})
            return _state(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        with sessions.locked(game_id) as game:
            game = _require(game)
            # Undo on an empty history is a no-op, same as the engine
            game.undo()
            return _state(game_id, game)

    @app.post("/api/games/{game_id}/reset", response_model=GameState)
    async def reset(game_id: str) -> GameState:
        with sessions.locked(game_id) as game:
            game = _require(game)
            game.reset()
            return _state(game_id, game)

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        with sessions.locked(game_id) as game:
            _require(game)
            try:
                game = Game.from_fen(req.fen)
            except ValueError:
                raise HTTPException(status_code=400, detail="invalid FEN")
            sessions.set(game_id, game)
            return _state(game_id, game)

    @app.delete("/api/games/{game_id}", status_code=204, response_class=Response)
    async def delete_game(game_id: str) -> Response:
        if not sessions.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return Response(status_code=204)

    return app


def _require(game: Optional[Game]) -> Game:
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _state(game_id: str, game: Game) -> GameState:
    last = game.last_move()
    return GameState(
        game_id=game_id,
        fen=game.to_fen(),
        turn=game.turn.value,
        board=game.board.rows(),
        moves=[m.to_uci() for m in generate_all(game.board, game.turn)],
        last_move=last.to_uci() if last else None,
        move_history=game.move_history_uci(),
        captured=[CapturedPiece(piece=p.to_char(), by=by.to_char()) for p, by in game.captured_pieces()],
    )


# Default app for non-factory servers
app = create_app()
