"""
FastAPI Application - REST API for Quarto games.

Endpoints:
    GET    /health                         Health check
    POST   /api/v1/games                   Create a game
    GET    /api/v1/games                   List games
    GET    /api/v1/games/{id}              Get game state
    DELETE /api/v1/games/{id}              Delete a game
    POST   /api/v1/games/{id}/join         Bind a player seat
    POST   /api/v1/games/{id}/pick         Pick a piece for the opponent
    POST   /api/v1/games/{id}/place        Place the pending piece

Turn protocol:
    1. The player who just placed picks a piece (POST /pick)
    2. The opponent places it (POST /place)
    3. The response says whether the placement made a quarto or a draw

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings, get_settings
from ..engine_core.errors import ErrorCode
from ..logging_config import configure_logging
from ..session import SessionManager
from ..storage import GameStore
from .schemas import (
    DeleteGameResponse,
    ErrorResponse,
    GameListResponse,
    GameResponse,
    HealthResponse,
    JoinRequest,
    MoveResponse,
    PickRequest,
    PlaceRequest,
)
from .service import APIService

logger = logging.getLogger(__name__)

# Codes that mean "valid input, wrong moment"
CONFLICT_CODES = {
    ErrorCode.CELL_OCCUPIED,
    ErrorCode.NO_PENDING_PIECE,
    ErrorCode.PENDING_PIECE_EXISTS,
    ErrorCode.PIECE_ALREADY_USED,
    ErrorCode.ROLE_ALREADY_ASSIGNED,
}


def status_for(error_code: ErrorCode) -> int:
    """HTTP status for an engine error code."""
    if error_code == ErrorCode.GAME_NOT_FOUND:
        return 404
    if error_code in CONFLICT_CODES:
        return 409
    if error_code == ErrorCode.INTERNAL_ERROR:
        return 500
    return 422


def create_app(service: Optional[APIService] = None, settings: Optional[Settings] = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (built from settings if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if service is None:
        store = GameStore(settings.database_path)
        store.initialize()
        service = APIService(session_manager=SessionManager(store))
    api_service = service

    app = FastAPI(
        title="Quarto Engine API",
        description="""
Rules engine for the two-player board game Quarto.

## Turn protocol

1. `POST /pick` selects a free piece for the opponent
2. `POST /place` puts the pending piece on an empty cell
3. The placement response reports `quarto` and `draw`

## Error Codes

| Code | Status | Description |
|------|--------|-------------|
| `GAME_NOT_FOUND` | 404 | Game does not exist |
| `PENDING_PIECE_EXISTS` | 409 | A piece is already waiting to be placed |
| `PIECE_ALREADY_USED` | 409 | Piece is on the board or pending |
| `NO_PENDING_PIECE` | 409 | Nothing to place |
| `CELL_OCCUPIED` | 409 | Target cell is taken |
| `ROLE_ALREADY_ASSIGNED` | 409 | Seat already bound |
| `INVALID_PIECE_CODE` | 422 | Malformed piece code |
| `OUT_OF_RANGE` | 422 | Coordinates outside the board |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_for(error.error_code),
            content=error.model_dump(mode="json"),
        )

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="quarto", version=__version__)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameResponse,
        status_code=201,
        tags=["Games"],
        summary="Create a new game",
    )
    async def create_game() -> GameResponse:
        """Create a game with an empty board and all 16 pieces free."""
        return api_service.create_game()

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List games",
    )
    async def list_games() -> GameListResponse:
        games = api_service.list_games()
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(game_id: str) -> Union[GameResponse, JSONResponse]:
        response = api_service.get_game(game_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=DeleteGameResponse,
        tags=["Games"],
        summary="Delete a game",
    )
    async def delete_game(game_id: str) -> DeleteGameResponse:
        success = api_service.delete_game(game_id)
        return DeleteGameResponse(success=success, game_id=game_id)

    @app.post(
        "/api/v1/games/{game_id}/join",
        response_model=GameResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Bind a player seat",
    )
    async def join_game(game_id: str, request: JoinRequest) -> Union[GameResponse, JSONResponse]:
        response = api_service.join(game_id, request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Move Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games/{game_id}/pick",
        response_model=MoveResponse,
        responses={
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
            422: {"model": ErrorResponse},
        },
        tags=["Moves"],
        summary="Pick a piece for the opponent",
    )
    async def pick(game_id: str, request: PickRequest) -> Union[MoveResponse, JSONResponse]:
        response = api_service.pick(game_id, request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/games/{game_id}/place",
        response_model=MoveResponse,
        responses={
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
            422: {"model": ErrorResponse},
        },
        tags=["Moves"],
        summary="Place the pending piece",
    )
    async def place(game_id: str, request: PlaceRequest) -> Union[MoveResponse, JSONResponse]:
        """
        Place the pending piece at (x, y).

        Check `quarto` and `draw` in the response to see whether the game ended.
        """
        response = api_service.place(game_id, request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    logger.info(f"Quarto API ready ({settings.env})")
    return app
