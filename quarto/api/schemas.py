"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between clients and the engine.

Error Codes:
- GAME_NOT_FOUND: Game does not exist
- INVALID_PIECE_CODE: Piece code is malformed
- OUT_OF_RANGE: Coordinates outside the 4x4 board
- CELL_OCCUPIED / NO_PENDING_PIECE / PENDING_PIECE_EXISTS / PIECE_ALREADY_USED:
  move made out of turn order
- ROLE_ALREADY_ASSIGNED: Player seat already taken
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.errors import ErrorCode


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Game status values."""
    AWAITING_SELECTION = "awaiting_selection"
    AWAITING_PLACEMENT = "awaiting_placement"
    QUARTO = "quarto"
    DRAW = "draw"


class Role(str, Enum):
    """Player seats."""
    FIRST = "first"
    SECOND = "second"


# =============================================================================
# Shared Models
# =============================================================================

class PieceInfo(BaseModel):
    """Piece information for display."""
    code: str = Field(description="4-character code, Color-Height-Shape-Top")
    color: str
    height: str
    shape: str
    top: str


class CellInfo(BaseModel):
    """An occupied board cell."""
    x: int = Field(ge=0, le=3)
    y: int = Field(ge=0, le=3)
    piece: PieceInfo


# =============================================================================
# Request Models
# =============================================================================

class JoinRequest(BaseModel):
    """Request to bind a player seat."""
    role: Role = Field(..., description="first or second")


class PickRequest(BaseModel):
    """Request to pick a piece for the opponent."""
    piece: str = Field(..., description="Uppercase piece code, e.g. BSCF")
    player_id: Optional[str] = Field(None, description="Informational player id")


class PlaceRequest(BaseModel):
    """Request to place the pending piece."""
    x: int = Field(..., description="Row index, 0-3")
    y: int = Field(..., description="Column index, 0-3")
    player_id: Optional[str] = Field(None, description="Informational player id")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameResponse(BaseModel):
    """Complete game state for display."""
    game_id: str
    status: GameStatus
    board_text: str = Field(description="Canonical 4-line board text")
    cells: list[CellInfo] = Field(default_factory=list)
    next_piece: Optional[PieceInfo] = None
    free_pieces: list[str] = Field(default_factory=list)
    assigned_first: bool = False
    assigned_second: bool = False
    winning_lines: list[list[tuple[int, int]]] = Field(default_factory=list)
    created_at: float = 0.0
    updated_at: float = 0.0
    api_version: str = "v1"


class MoveResponse(BaseModel):
    """Response after a successful pick or place."""
    game_id: str
    action: str = Field(description="pick or place")
    changes: list[str] = Field(default_factory=list)
    quarto: bool = False
    draw: bool = False
    game: GameResponse
    api_version: str = "v1"


class GameListResponse(BaseModel):
    """Response listing stored games."""
    games: list[str]
    count: int


class DeleteGameResponse(BaseModel):
    """Response after deleting a game."""
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
