"""
Session Manager - Runs rules-engine moves against stored games.

LIFECYCLE:
1. A game is created in the store (empty board, no pending piece)
2. Players bind the first and second roles
3. Each move:
   - load the record and rebuild GameState
   - apply pick or place through the reducer
   - save the new state if the move succeeded
4. The caller checks the result for quarto / draw

CONCURRENCY:
- One lock per game id covers the whole load -> apply -> save sequence
- Different games never block each other
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Optional
import logging
import threading

from ..engine_core.action import Action, ActionResult
from ..engine_core.errors import GameNotFound, QuartoError
from ..engine_core.pieces import Piece
from ..engine_core.state import GameState
from ..engine_core.reducer import Reducer
from ..engine_core.win_checker import is_draw, winning_lines
from ..storage import GameRecord, GameStore, PlayerRole

logger = logging.getLogger(__name__)


@dataclass
class GameView:
    """A stored game together with its rebuilt state and board status."""
    record: GameRecord
    state: GameState
    quarto: bool = False
    draw: bool = False
    winning_lines: list = field(default_factory=list)

    @property
    def game_id(self) -> str:
        return self.record.game_id

    @classmethod
    def build(cls, record: GameRecord, state: Optional[GameState] = None) -> GameView:
        state = state or record.to_state()
        lines = winning_lines(state.board)
        return cls(
            record=record,
            state=state,
            quarto=bool(lines),
            draw=not lines and is_draw(state.board),
            winning_lines=lines,
        )


@dataclass
class MoveOutcome:
    """Result of one move: the reducer result plus the game after it."""
    result: ActionResult
    game: GameView

    @property
    def success(self) -> bool:
        return self.result.success


class SessionManager:
    """
    Applies moves to stored games.

    Responsibilities:
    - Create and look up games
    - Bind player roles
    - Serialize pick/place per game id and persist the result
    """

    def __init__(self, store: GameStore, reducer: Reducer | None = None):
        self.store = store
        self.reducer = reducer or Reducer()
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, game_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[game_id] = lock
            return lock

    def _drop_lock(self, game_id: str) -> None:
        with self._registry_lock:
            self._locks.pop(game_id, None)

    @contextmanager
    def _locked(self, game_id: str):
        """Hold the game's lock; a missing game leaves no lock behind."""
        with self._lock_for(game_id):
            try:
                yield
            except GameNotFound:
                self._drop_lock(game_id)
                raise

    def create_game(self) -> GameView:
        return GameView.build(self.store.create_game())

    def get_game(self, game_id: str) -> GameView:
        """Raises GameNotFound."""
        return GameView.build(self.store.get_game(game_id))

    def list_games(self) -> list[str]:
        return [record.game_id for record in self.store.list_games()]

    def join(self, game_id: str, role: PlayerRole) -> GameView:
        """Bind a role. Raises GameNotFound or RoleAlreadyAssigned."""
        with self._locked(game_id):
            return GameView.build(self.store.assign_role(game_id, role))

    def pick(self, game_id: str, piece: Piece | str, player_id: str | None = None) -> MoveOutcome:
        """
        Pick a piece for the opponent.

        Accepts a Piece or its 4-character code. Raises GameNotFound or
        InvalidPieceCode; protocol failures come back in the result.
        """
        if isinstance(piece, str):
            piece = Piece.from_code(piece)
        return self._apply(game_id, Action.pick(piece, player_id=player_id))

    def place(self, game_id: str, x: int, y: int, player_id: str | None = None) -> MoveOutcome:
        """Place the pending piece. Protocol failures come back in the result."""
        return self._apply(game_id, Action.place(x, y, player_id=player_id))

    def _apply(self, game_id: str, action: Action) -> MoveOutcome:
        with self._locked(game_id):
            record = self.store.get_game(game_id)
            state = record.to_state()
            result = self.reducer.apply(state, action)

            if not result.success:
                logger.warning(
                    f"Rejected {action.action_type.value} on game {game_id}: "
                    f"{result.error} ({result.error_code.value})"
                )
                return MoveOutcome(result=result, game=GameView.build(record, state))

            record = self.store.save_state(game_id, result.new_state)
            for change in result.state_changes:
                logger.info(f"Game {game_id}: {change}")
            return MoveOutcome(
                result=result,
                game=GameView.build(record, result.new_state),
            )

    def forget(self, game_id: str) -> bool:
        """Delete a game and drop its lock."""
        with self._lock_for(game_id):
            deleted = self.store.delete_game(game_id)
        self._drop_lock(game_id)
        return deleted


def describe_error(error: QuartoError) -> str:
    return f"{error.message} ({error.code.value})"
