"""
API Module - HTTP interface to stored games.

Clients:
1. Create a game
2. Bind the first and second player seats
3. Alternate pick and place
4. Read the board, the pending piece and the quarto status
"""

from .schemas import (
    # Requests
    JoinRequest,
    PickRequest,
    PlaceRequest,
    # Responses
    GameResponse,
    MoveResponse,
    GameListResponse,
    DeleteGameResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    GameStatus,
    Role,
    PieceInfo,
    CellInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "JoinRequest",
    "PickRequest",
    "PlaceRequest",
    # Responses
    "GameResponse",
    "MoveResponse",
    "GameListResponse",
    "DeleteGameResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "GameStatus",
    "Role",
    "PieceInfo",
    "CellInfo",
    # Service
    "APIService",
    "create_app",
]
