"""
Errors - Structured error codes and exceptions for the engine.

Every error is a caller-correctable input problem:
- Codec errors (bad piece code, bad board text, duplicates)
- Protocol errors (pick/place out of order)
- Collaborator errors (unknown game, role already bound)

Codec functions raise these exceptions. The reducer catches them and
returns an ActionResult carrying the error code instead.
"""

from __future__ import annotations
from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable error codes."""
    # Attribute / piece / board codec
    INVALID_ATTRIBUTE_CODE = "INVALID_ATTRIBUTE_CODE"
    INVALID_PIECE_CODE = "INVALID_PIECE_CODE"
    INVALID_BOARD_TEXT = "INVALID_BOARD_TEXT"
    DUPLICATE_PIECE = "DUPLICATE_PIECE"

    # Turn protocol
    OUT_OF_RANGE = "OUT_OF_RANGE"
    CELL_OCCUPIED = "CELL_OCCUPIED"
    NO_PENDING_PIECE = "NO_PENDING_PIECE"
    PENDING_PIECE_EXISTS = "PENDING_PIECE_EXISTS"
    PIECE_ALREADY_USED = "PIECE_ALREADY_USED"

    # Internal consistency
    INVARIANT_VIOLATION = "INVARIANT_VIOLATION"

    # Collaborators
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    ROLE_ALREADY_ASSIGNED = "ROLE_ALREADY_ASSIGNED"
    DATABASE_EXISTS = "DATABASE_EXISTS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class QuartoError(Exception):
    """Base class for all engine errors."""
    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAttributeCode(QuartoError):
    code = ErrorCode.INVALID_ATTRIBUTE_CODE


class InvalidPieceCode(QuartoError):
    code = ErrorCode.INVALID_PIECE_CODE


class InvalidBoardText(QuartoError):
    code = ErrorCode.INVALID_BOARD_TEXT


class DuplicatePiece(QuartoError):
    code = ErrorCode.DUPLICATE_PIECE


class OutOfRange(QuartoError):
    code = ErrorCode.OUT_OF_RANGE


class CellOccupied(QuartoError):
    code = ErrorCode.CELL_OCCUPIED


class NoPendingPiece(QuartoError):
    code = ErrorCode.NO_PENDING_PIECE


class PendingPieceExists(QuartoError):
    code = ErrorCode.PENDING_PIECE_EXISTS


class PieceAlreadyUsed(QuartoError):
    code = ErrorCode.PIECE_ALREADY_USED


class InvariantViolation(QuartoError):
    """The board / pool / pending partition does not cover the 16 pieces."""
    code = ErrorCode.INVARIANT_VIOLATION


class GameNotFound(QuartoError):
    code = ErrorCode.GAME_NOT_FOUND


class RoleAlreadyAssigned(QuartoError):
    code = ErrorCode.ROLE_ALREADY_ASSIGNED


class DatabaseExists(QuartoError):
    code = ErrorCode.DATABASE_EXISTS
