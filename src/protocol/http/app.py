from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    malformed_input_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from ...rules.errors import MalformedInput
from ...rules.game import Game
from ...rules.perft import perft as perft_nodes
from .session import InMemorySessionStore


logger = logging.getLogger(__name__)

MAX_PERFT_DEPTH = 5


class CreateGameRequest(BaseModel):
    fen: Optional[str] = Field(default=None, description="FEN string; start position if omitted")


class CreateGameResponse(BaseModel):
    game_id: str
    fen: str


class SetPositionRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class MoveRequest(BaseModel):
    move: str = Field(..., description="UCI move string, e.g., e2e4 or e7e8q")


class PerftRequest(BaseModel):
    fen: str = Field(..., description="FEN string")
    depth: int = Field(default=1, ge=0, le=MAX_PERFT_DEPTH)


class PerftResponse(BaseModel):
    nodes: int
    depth: int


class GameState(BaseModel):
    game_id: str
    fen: str
    legal_moves: list[str]
    color_to_move: int
    in_check: bool
    checkmate: bool
    stalemate: bool
    draw: bool
    game_over: Optional[int]
    last_move: Optional[str]
    move_history: list[str]


def create_app(log_level: int = logging.INFO) -> FastAPI:
    app = FastAPI(title="Chess Rules API", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=log_level)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(MalformedInput, malformed_input_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    # In-memory session store for games
    store = InMemorySessionStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game(req: Optional[CreateGameRequest] = None) -> CreateGameResponse:
        fen = req.fen if req is not None else None
        game = Game.from_fen(fen) if fen else Game.new()
        game_id = store.create(game)
        logger.info("game created", extra={"game_id": game_id})
        return CreateGameResponse(game_id=game_id, fen=game.to_fen())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _state(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        _require_game(store, game_id)
        store.set(game_id, Game.from_fen(req.fen))
        return _state(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.apply_move(req.move)
        except ValueError as e:
            # IllegalMove, bad square or unparseable UCI text
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, game)

    @app.delete("/api/games/{game_id}", status_code=204)
    async def delete_game(game_id: str) -> Response:
        _require_game(store, game_id)
        store.delete(game_id)
        return Response(status_code=204)

    # Sync handler: runs in the threadpool
    @app.post("/api/perft", response_model=PerftResponse)
    def perft(req: PerftRequest) -> PerftResponse:
        game = Game.from_fen(req.fen)
        nodes = perft_nodes(game.board, req.depth)
        return PerftResponse(nodes=nodes, depth=req.depth)

    return app


def _state(game_id: str, game: Game) -> GameState:
    history = game.move_history_uci()
    return GameState(
        game_id=game_id,
        fen=game.to_fen(),
        legal_moves=[m.to_uci() for m in game.legal_moves()],
        color_to_move=game.color_to_move(),
        in_check=game.in_check(),
        checkmate=game.checkmate(),
        stalemate=game.stalemate(),
        draw=game.is_draw(),
        game_over=game.game_over(),
        last_move=history[-1] if history else None,
        move_history=history,
    )


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


# Default app for non-factory servers
app = create_app()
