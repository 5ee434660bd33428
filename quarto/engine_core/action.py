"""
Action System - Actions, payloads, and results.

Actions represent the two moves of the turn protocol:
1. PICK - select a free piece for the opponent
2. PLACE - put the pending piece on an empty cell

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import ErrorCode
from .pieces import Piece


class ActionType(Enum):
    """Types of actions in the system."""
    PICK = "pick"
    PLACE = "place"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    PICK uses piece; PLACE uses x and y.
    Validation happens in the reducer.
    """
    piece: Piece | None = None
    x: int | None = None
    y: int | None = None

    # Who asked for the move (informational only)
    player_id: str | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload

    @classmethod
    def pick(cls, piece: Piece, player_id: str | None = None) -> Action:
        """Factory for pick action."""
        return cls(
            action_type=ActionType.PICK,
            payload=ActionPayload(piece=piece, player_id=player_id),
        )

    @classmethod
    def place(cls, x: int, y: int, player_id: str | None = None) -> Action:
        """Factory for place action."""
        return cls(
            action_type=ActionType.PLACE,
            payload=ActionPayload(x=x, y=y, player_id=player_id),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Error message and code (if failed)
    - Win/draw status after a placement
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: ErrorCode | None = None

    # Human-readable description of what changed
    state_changes: list[str] = field(default_factory=list)

    # Set after a successful placement
    quarto: bool = False
    draw: bool = False
    winning_lines: list[tuple[tuple[int, int], ...]] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
