"""
Game Store - SQLite persistence for game records.

The store:
- Keeps one row per game in the `game` table
- Stores the board as canonical text and the pending piece as its code
- Tracks whether each of the two player roles has been bound
- Knows nothing about the rules; callers rebuild GameState from the record

Each call opens its own connection, so a store can be shared across
threads. Serializing mutations of one game is the session manager's job.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional
import logging
import sqlite3
import time
import uuid

from ..engine_core.board import BoardState
from ..engine_core.errors import DatabaseExists, GameNotFound, RoleAlreadyAssigned
from ..engine_core.state import NO_PIECE, GameState

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS game
(
  id INTEGER PRIMARY KEY,
  uuid VARCHAR UNIQUE NOT NULL,
  assigned_1st BOOLEAN DEFAULT 0,
  assigned_2nd BOOLEAN DEFAULT 0,
  board_state VARCHAR NOT NULL,
  next_piece VARCHAR,
  created_at REAL,
  updated_at REAL
);
"""


class PlayerRole(Enum):
    """The two seats of a game."""
    FIRST = "first"
    SECOND = "second"

    @property
    def column(self) -> str:
        return "assigned_1st" if self is PlayerRole.FIRST else "assigned_2nd"


@dataclass
class GameRecord:
    """A persisted game, as stored."""
    game_id: str
    board_text: str
    next_piece: Optional[str] = None
    assigned_first: bool = False
    assigned_second: bool = False
    created_at: float = 0.0
    updated_at: float = 0.0

    def to_state(self) -> GameState:
        return GameState.from_record(self.board_text, self.next_piece)

    @property
    def next_piece_label(self) -> str:
        return self.next_piece or NO_PIECE

    def is_assigned(self, role: PlayerRole) -> bool:
        if role is PlayerRole.FIRST:
            return self.assigned_first
        return self.assigned_second


class GameStore:
    """
    SQLite-backed store of game records.

    Usage:
        store = GameStore("quarto.db")
        store.initialize()

        record = store.create_game()
        state = store.load_state(record.game_id)
        store.save_state(record.game_id, state.pick(piece))
    """

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def exists(self) -> bool:
        return self.db_path.exists()

    def initialize(self, exist_ok: bool = True) -> None:
        """
        Create the database file and schema.

        Raises DatabaseExists if the file exists and exist_ok is False.
        """
        if self.exists() and not exist_ok:
            raise DatabaseExists(f"Database already exists: {self.db_path}")
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = self._connect()
        try:
            with conn:
                conn.executescript(SCHEMA)
        finally:
            conn.close()
        logger.info(f"Initialized game database at {self.db_path}")

    def create_game(self, game_id: str | None = None) -> GameRecord:
        """Insert a fresh game (empty board, no pending piece)."""
        now = time.time()
        record = GameRecord(
            game_id=game_id or str(uuid.uuid4()),
            board_text=BoardState.empty().encode(),
            created_at=now,
            updated_at=now,
        )
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    "INSERT INTO game (uuid, board_state, next_piece, created_at, updated_at)"
                    " VALUES (?, ?, ?, ?, ?)",
                    (record.game_id, record.board_text, None, now, now),
                )
        finally:
            conn.close()
        logger.info(f"Created game {record.game_id}")
        return record

    def get_game(self, game_id: str) -> GameRecord:
        """Load a game record. Raises GameNotFound."""
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT * FROM game WHERE uuid = ?", (game_id,)
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            raise GameNotFound(f"Game not found: {game_id}")
        return self._row_to_record(row)

    def list_games(self) -> list[GameRecord]:
        conn = self._connect()
        try:
            rows = conn.execute("SELECT * FROM game ORDER BY id").fetchall()
        finally:
            conn.close()
        return [self._row_to_record(row) for row in rows]

    def load_state(self, game_id: str) -> GameState:
        return self.get_game(game_id).to_state()

    def save_state(self, game_id: str, state: GameState) -> GameRecord:
        """Persist a game state in one transaction. Raises GameNotFound."""
        board_text, next_piece = state.to_record()
        conn = self._connect()
        try:
            with conn:
                cursor = conn.execute(
                    "UPDATE game SET board_state = ?, next_piece = ?, updated_at = ?"
                    " WHERE uuid = ?",
                    (board_text, next_piece, time.time(), game_id),
                )
        finally:
            conn.close()
        if cursor.rowcount == 0:
            raise GameNotFound(f"Game not found: {game_id}")
        return self.get_game(game_id)

    def assign_role(self, game_id: str, role: PlayerRole) -> GameRecord:
        """
        Bind a player role to the game.

        Raises GameNotFound, or RoleAlreadyAssigned if the seat is taken.
        """
        conn = self._connect()
        try:
            with conn:
                cursor = conn.execute(
                    f"UPDATE game SET {role.column} = 1, updated_at = ?"
                    f" WHERE uuid = ? AND {role.column} = 0",
                    (time.time(), game_id),
                )
        finally:
            conn.close()
        if cursor.rowcount == 0:
            # Distinguish a missing game from a taken seat
            self.get_game(game_id)
            raise RoleAlreadyAssigned(
                f"The {role.value} player of game {game_id} is already assigned"
            )
        logger.info(f"Assigned {role.value} player to game {game_id}")
        return self.get_game(game_id)

    def delete_game(self, game_id: str) -> bool:
        conn = self._connect()
        try:
            with conn:
                cursor = conn.execute("DELETE FROM game WHERE uuid = ?", (game_id,))
        finally:
            conn.close()
        return cursor.rowcount > 0

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> GameRecord:
        return GameRecord(
            game_id=row["uuid"],
            board_text=row["board_state"],
            next_piece=row["next_piece"],
            assigned_first=bool(row["assigned_1st"]),
            assigned_second=bool(row["assigned_2nd"]),
            created_at=row["created_at"] or 0.0,
            updated_at=row["updated_at"] or 0.0,
        )
