"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying
- Returns ActionResult with success/failure, never raises for bad moves
- Reports quarto/draw after every placement
"""

from __future__ import annotations
from dataclasses import dataclass

from .action import Action, ActionResult, ActionType
from .errors import ErrorCode, QuartoError
from .state import GameState
from .win_checker import is_draw, winning_lines


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        validation_error = self._validate_action(action)
        if validation_error:
            return ActionResult.failure(validation_error, error_code=ErrorCode.VALIDATION_ERROR)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.VALIDATION_ERROR,
            )

        try:
            return handler(state, action)
        except QuartoError as e:
            return ActionResult.failure(e.message, error_code=e.code)

    def _validate_action(self, action: Action) -> str | None:
        """
        Check the payload has the fields the action type needs.

        Returns error message if invalid, None if valid.
        """
        payload = action.payload
        if action.action_type == ActionType.PICK and payload.piece is None:
            return "Pick requires a piece"
        if action.action_type == ActionType.PLACE:
            if payload.x is None or payload.y is None:
                return "Place requires x and y"
        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PICK: self._handle_pick,
            ActionType.PLACE: self._handle_place,
        }
        return handlers.get(action_type)

    def _handle_pick(self, state: GameState, action: Action) -> ActionResult:
        """Handle pick action."""
        piece = action.payload.piece
        new_state = state.pick(piece)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Picked {piece} for the next placement"],
        )

    def _handle_place(self, state: GameState, action: Action) -> ActionResult:
        """Handle place action, then check the board."""
        x, y = action.payload.x, action.payload.y
        piece = state.pending_piece
        new_state = state.place(x, y)

        result = ActionResult.success_with_state(
            new_state,
            changes=[f"Placed {piece} at ({x}, {y})"],
        )
        # A quarto elsewhere on the board still stands after this move
        result.winning_lines = winning_lines(new_state.board)
        result.quarto = bool(result.winning_lines)
        result.draw = not result.quarto and is_draw(new_state.board)
        if result.quarto:
            result.state_changes.append("Quarto!")
        elif result.draw:
            result.state_changes.append("Board is full - draw")
        return result


def apply_action(state: GameState, action: Action) -> ActionResult:
    """Convenience function to apply an action."""
    return Reducer().apply(state, action)
