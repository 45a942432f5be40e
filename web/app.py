"""
FastAPI web application for Park Chess.

Exposes the game session as a small JSON API so a browser board can play
against the engine:

    GET  /api/state        board, side to move, selection, history, status
    POST /api/select       forward a click on (row, col)
    POST /api/engine-move  let the engine play when it is its turn
    POST /api/new-game     start over, optionally at another search depth

Architecture notes:
- The session is injected, never global: create_app() builds the app around
  a session factory and stores the live session on app.state. Routes read it
  from the request under the lock, so tests can hand in their own session.
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound blocking calls like the engine
  search. A lock serializes access because the position has a single writer.
- Out-of-range select coordinates are accepted and ignored, matching the
  engine's no-op semantics for irrelevant clicks.
"""

import logging
import threading
from typing import Callable

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, field_validator

from parkchess.constants import MAX_SEARCH_DEPTH, MIN_SEARCH_DEPTH, SEARCH_DEPTH
from parkchess.pieces import Color, Move, Piece, Square
from parkchess.search import Search
from parkchess.session import GameSession

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

SessionFactory = Callable[[int], GameSession]


def default_session(depth: int = SEARCH_DEPTH) -> GameSession:
    """Human plays White, the engine plays Black."""
    return GameSession(search=Search(depth=depth, engine_color=Color.BLACK))


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class SelectRequest(BaseModel):
    row: int
    col: int


class NewGameRequest(BaseModel):
    """
    Fields:
        depth: Engine search depth in plies, clamped to
               [MIN_SEARCH_DEPTH, MAX_SEARCH_DEPTH] so a request cannot start
               a search that runs for minutes.
    """

    depth: int = SEARCH_DEPTH

    @field_validator("depth")
    @classmethod
    def clamp_depth(cls, v: int) -> int:
        """Clamp depth to a safe operating range."""
        return max(MIN_SEARCH_DEPTH, min(v, MAX_SEARCH_DEPTH))


class MoveModel(BaseModel):
    from_square: tuple[int, int]
    to_square: tuple[int, int]
    captured: str | None
    notation: str


class GameStateResponse(BaseModel):
    """
    Fields:
        board:             8x8 FEN letters, row 0 = rank 8, None when empty.
        current_player:    "white" or "black".
        selected_square:   [row, col] of the selection, if any.
        valid_moves:       Legal destinations of the selection.
        move_history:      Executed moves, oldest first.
        captured_by_white: FEN letters of pieces White has taken.
        captured_by_black: FEN letters of pieces Black has taken.
        status:            GameStatus value.
        engine_to_move:    True when the client should request an engine move.
        winner:            Winning color after checkmate.
    """

    board: list[list[str | None]]
    current_player: str
    selected_square: tuple[int, int] | None
    valid_moves: list[tuple[int, int]]
    move_history: list[MoveModel]
    captured_by_white: list[str]
    captured_by_black: list[str]
    status: str
    engine_to_move: bool
    winner: str | None


def _symbol(piece: Piece | None) -> str | None:
    return piece.symbol() if piece is not None else None


def _coords(square: Square) -> tuple[int, int]:
    return (square.row, square.col)


def _move_model(move: Move) -> MoveModel:
    return MoveModel(
        from_square=_coords(move.from_square),
        to_square=_coords(move.to_square),
        captured=_symbol(move.captured),
        notation=move.uci(),
    )


def _state_response(session: GameSession) -> GameStateResponse:
    position = session.position
    selected = position.selected_square
    winner = session.winner
    return GameStateResponse(
        board=[[_symbol(p) for p in row] for row in position.get_board()],
        current_player=position.to_move.value,
        selected_square=_coords(selected) if selected is not None else None,
        valid_moves=[_coords(sq) for sq in position.valid_moves],
        move_history=[_move_model(m) for m in position.history],
        captured_by_white=[p.symbol() for p in position.captured_by_white],
        captured_by_black=[p.symbol() for p in position.captured_by_black],
        status=session.status.value,
        engine_to_move=session.engine_to_move,
        winner=winner.value if winner is not None else None,
    )


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(session_factory: SessionFactory = default_session) -> FastAPI:
    """
    Build the API around a fresh session from `session_factory`.

    Args:
        session_factory: Called with a search depth; returns a new
                         GameSession. Used at startup and on /api/new-game.

    Returns:
        A FastAPI app whose routes all operate on that one session.
    """
    app = FastAPI(title="Park Chess", version="1.0.0")
    app.state.session = session_factory(SEARCH_DEPTH)
    app.state.lock = threading.Lock()

    # Read the session only while holding the lock: /api/new-game swaps it.
    def current_session(request: Request) -> GameSession:
        return request.app.state.session

    @app.get("/api/state", response_model=GameStateResponse)
    def api_state(request: Request) -> GameStateResponse:
        with app.state.lock:
            return _state_response(current_session(request))

    @app.post("/api/select", response_model=GameStateResponse)
    def api_select(body: SelectRequest, request: Request) -> GameStateResponse:
        with app.state.lock:
            session = current_session(request)
            session.select(body.row, body.col)
            return _state_response(session)

    @app.post("/api/engine-move", response_model=GameStateResponse)
    def api_engine_move(request: Request) -> GameStateResponse:
        """
        Raises:
            HTTPException 409: Not the engine's turn, or the game is over.
            HTTPException 500: The search failed unexpectedly.
        """
        with app.state.lock:
            session = current_session(request)
            if not session.engine_to_move:
                raise HTTPException(
                    status_code=409,
                    detail=f"Engine cannot move now: status={session.status.value}, "
                    f"to_move={session.position.to_move.value}",
                )
            try:
                session.play_engine_move()
            except Exception as exc:
                _log.exception("Engine search failed at ply %d", len(session.position.history))
                raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc
            return _state_response(session)

    @app.post("/api/new-game", response_model=GameStateResponse)
    def api_new_game(body: NewGameRequest) -> GameStateResponse:
        with app.state.lock:
            app.state.session = session_factory(body.depth)
            _log.info("New game, engine depth=%d", body.depth)
            return _state_response(app.state.session)

    return app


app = create_app()
