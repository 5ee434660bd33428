"""
Engine Core - Deterministic Quarto rules.

The engine:
1. Models the 16 pieces and their four attributes
2. Encodes/decodes the board as canonical text
3. Applies pick/place actions via the reducer
4. Detects a completed line (quarto)
"""

from .pieces import Attribute, Color, Height, Shape, Top, Piece, all_pieces
from .board import BoardState, BOARD_SIZE
from .state import GameState, TurnPhase
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action
from .win_checker import WIN_LINES, is_draw, is_quarto, line_matches, winning_lines
from .errors import (
    ErrorCode,
    QuartoError,
    InvalidAttributeCode,
    InvalidPieceCode,
    InvalidBoardText,
    DuplicatePiece,
    OutOfRange,
    CellOccupied,
    NoPendingPiece,
    PendingPieceExists,
    PieceAlreadyUsed,
    InvariantViolation,
)

__all__ = [
    "Attribute",
    "Color",
    "Height",
    "Shape",
    "Top",
    "Piece",
    "all_pieces",
    "BoardState",
    "BOARD_SIZE",
    "GameState",
    "TurnPhase",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
    "WIN_LINES",
    "is_draw",
    "is_quarto",
    "line_matches",
    "winning_lines",
    "ErrorCode",
    "QuartoError",
    "InvalidAttributeCode",
    "InvalidPieceCode",
    "InvalidBoardText",
    "DuplicatePiece",
    "OutOfRange",
    "CellOccupied",
    "NoPendingPiece",
    "PendingPieceExists",
    "PieceAlreadyUsed",
    "InvariantViolation",
]
