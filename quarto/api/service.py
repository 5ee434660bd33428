"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session manager calls
2. Converts engine errors into ErrorResponse values
3. Formats game state for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from .schemas import (
    CellInfo,
    ErrorResponse,
    GameResponse,
    GameStatus,
    JoinRequest,
    MoveResponse,
    PickRequest,
    PieceInfo,
    PlaceRequest,
)
from ..engine_core.errors import ErrorCode, QuartoError
from ..engine_core.pieces import Piece
from ..engine_core.state import TurnPhase
from ..session import GameView, MoveOutcome, SessionManager
from ..storage import PlayerRole


def piece_info(piece: Piece) -> PieceInfo:
    return PieceInfo(
        code=piece.code,
        color=piece.color.name.lower(),
        height=piece.height.name.lower(),
        shape=piece.shape.name.lower(),
        top=piece.top.name.lower(),
    )


def error_response(error: QuartoError) -> ErrorResponse:
    return ErrorResponse(error=error.message, error_code=error.code)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService(session_manager=SessionManager(store))

        game = service.create_game()
        response = service.pick(game.game_id, PickRequest(piece="BSCF"))
        response = service.place(game.game_id, PlaceRequest(x=0, y=0))
    """
    session_manager: SessionManager

    def create_game(self) -> GameResponse:
        return self._game_to_response(self.session_manager.create_game())

    def get_game(self, game_id: str) -> Union[GameResponse, ErrorResponse]:
        try:
            game = self.session_manager.get_game(game_id)
        except QuartoError as e:
            return error_response(e)
        return self._game_to_response(game)

    def list_games(self) -> list[str]:
        return self.session_manager.list_games()

    def delete_game(self, game_id: str) -> bool:
        return self.session_manager.forget(game_id)

    def join(self, game_id: str, request: JoinRequest) -> Union[GameResponse, ErrorResponse]:
        try:
            game = self.session_manager.join(game_id, PlayerRole(request.role.value))
        except QuartoError as e:
            return error_response(e)
        return self._game_to_response(game)

    def pick(self, game_id: str, request: PickRequest) -> Union[MoveResponse, ErrorResponse]:
        try:
            outcome = self.session_manager.pick(
                game_id, request.piece, player_id=request.player_id
            )
        except QuartoError as e:
            return error_response(e)
        return self._outcome_to_response(outcome, "pick")

    def place(self, game_id: str, request: PlaceRequest) -> Union[MoveResponse, ErrorResponse]:
        try:
            outcome = self.session_manager.place(
                game_id, request.x, request.y, player_id=request.player_id
            )
        except QuartoError as e:
            return error_response(e)
        return self._outcome_to_response(outcome, "place")

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _outcome_to_response(
        self,
        outcome: MoveOutcome,
        action: str,
    ) -> Union[MoveResponse, ErrorResponse]:
        result = outcome.result
        if not result.success:
            return ErrorResponse(
                error=result.error,
                error_code=result.error_code or ErrorCode.INTERNAL_ERROR,
                details={"action": action},
            )
        return MoveResponse(
            game_id=outcome.game.game_id,
            action=action,
            changes=result.state_changes,
            quarto=result.quarto,
            draw=result.draw,
            game=self._game_to_response(outcome.game),
        )

    def _game_to_response(self, game: GameView) -> GameResponse:
        state = game.state
        record = game.record

        if game.quarto:
            status = GameStatus.QUARTO
        elif game.draw:
            status = GameStatus.DRAW
        elif state.phase == TurnPhase.AWAITING_PLACEMENT:
            status = GameStatus.AWAITING_PLACEMENT
        else:
            status = GameStatus.AWAITING_SELECTION

        return GameResponse(
            game_id=record.game_id,
            status=status,
            board_text=state.board.encode(),
            cells=[
                CellInfo(x=x, y=y, piece=piece_info(piece))
                for (x, y), piece in state.board.occupied()
            ],
            next_piece=piece_info(state.pending_piece) if state.pending_piece else None,
            free_pieces=[piece.code for piece in state.free_pieces],
            assigned_first=record.assigned_first,
            assigned_second=record.assigned_second,
            winning_lines=[list(line) for line in game.winning_lines],
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
