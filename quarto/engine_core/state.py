"""
Game State - Board, free pool and pending piece for one game.

Design principles:
- Immutable-friendly: pick() and place() return a new state
- Serializable: round-trips through (board text, pending code)
- The 16 pieces always partition into board / free pool / pending

The turn phase is derived from the pending piece:
    AWAITING_SELECTION --pick--> AWAITING_PLACEMENT --place--> AWAITING_SELECTION
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from .board import BoardState, in_range
from .errors import (
    CellOccupied,
    InvariantViolation,
    NoPendingPiece,
    OutOfRange,
    PendingPieceExists,
    PieceAlreadyUsed,
)
from .pieces import Piece, all_pieces


NO_PIECE = "none"


class TurnPhase(Enum):
    """Where the game is in the pick-then-place protocol."""
    AWAITING_SELECTION = "awaiting_selection"
    AWAITING_PLACEMENT = "awaiting_placement"


def _full_pool() -> tuple[Piece, ...]:
    return tuple(all_pieces())


@dataclass(frozen=True)
class GameState:
    """
    Complete state of a Quarto game at a point in time.

    A brand-new game is AWAITING_SELECTION; the very first pick is made
    out-of-band by whoever starts the game.
    """
    board: BoardState = field(default_factory=BoardState.empty)
    free_pieces: tuple[Piece, ...] = field(default_factory=_full_pool)
    pending_piece: Optional[Piece] = None

    @classmethod
    def new(cls) -> GameState:
        return cls()

    @classmethod
    def from_board(
        cls,
        board: BoardState,
        pending_piece: Optional[Piece] = None,
    ) -> GameState:
        """
        Rebuild a game from a board and an optional pending piece.

        The free pool is the complement of the board's pieces, minus the
        pending piece. Raises PieceAlreadyUsed if the pending piece is on
        the board.
        """
        on_board = board.pieces()
        free = tuple(p for p in all_pieces() if p not in on_board)
        if pending_piece is not None:
            if pending_piece not in free:
                raise PieceAlreadyUsed(
                    f"Pending piece {pending_piece} is already on the board"
                )
            free = tuple(p for p in free if p != pending_piece)
        return cls(board=board, free_pieces=free, pending_piece=pending_piece)

    @classmethod
    def from_record(cls, board_text: str, next_piece: Optional[str] = None) -> GameState:
        """
        Rebuild a game from persisted board text and pending piece code.

        A missing pending piece may be given as None, "" or "none".
        """
        board = BoardState.decode(board_text)
        pending = None
        if next_piece and next_piece.lower() != NO_PIECE:
            pending = Piece.from_code(next_piece)
        return cls.from_board(board, pending)

    def to_record(self) -> tuple[str, Optional[str]]:
        """(board text, pending piece code or None) for persistence."""
        pending = self.pending_piece.code if self.pending_piece else None
        return self.board.encode(), pending

    @property
    def phase(self) -> TurnPhase:
        if self.pending_piece is None:
            return TurnPhase.AWAITING_SELECTION
        return TurnPhase.AWAITING_PLACEMENT

    def is_free(self, piece: Piece) -> bool:
        return piece in self.free_pieces

    # =========================================================================
    # Turn protocol
    # =========================================================================

    def pick(self, piece: Piece) -> GameState:
        """Return new state with piece selected for the opponent to place."""
        if self.pending_piece is not None:
            raise PendingPieceExists(
                f"Piece {self.pending_piece} is already waiting to be placed"
            )
        if not self.is_free(piece):
            raise PieceAlreadyUsed(f"Piece {piece} is not available")

        return replace(
            self,
            free_pieces=tuple(p for p in self.free_pieces if p != piece),
            pending_piece=piece,
        )

    def place(self, x: int, y: int) -> GameState:
        """Return new state with the pending piece placed at (x, y)."""
        if not in_range(x, y):
            raise OutOfRange(f"Cell ({x}, {y}) is outside the board")
        if self.pending_piece is None:
            raise NoPendingPiece("No piece has been picked")
        if self.board.get(x, y) is not None:
            raise CellOccupied(f"Cell ({x}, {y}) is already occupied")

        return replace(
            self,
            board=self.board.with_piece(x, y, self.pending_piece),
            pending_piece=None,
        )

    def check_invariant(self) -> None:
        """
        Verify board, free pool and pending piece partition all 16 pieces.

        Raises InvariantViolation otherwise.
        """
        on_board = [piece for _, piece in self.board.occupied()]
        pending = [self.pending_piece] if self.pending_piece else []
        everything = on_board + list(self.free_pieces) + pending

        if len(everything) != len(set(everything)):
            raise InvariantViolation("A piece is in more than one place")
        if set(everything) != set(all_pieces()):
            raise InvariantViolation(
                f"Pieces cover {len(set(everything))} of 16"
            )
