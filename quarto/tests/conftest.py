"""
Pytest fixtures for Quarto tests.
"""

import pytest

from ..engine_core.board import BoardState
from ..engine_core.pieces import Piece
from ..engine_core.state import GameState
from ..session import SessionManager
from ..storage import GameStore


FULL_BOARD_TEXT = "\n".join([
    "BSCF BSCH BSSF BSSH",
    "BTCF BTCH BTSF BTSH",
    "WSCF WSCH WSSF WSSH",
    "WTCF WTCH WTSF WTSH",
])

# Full board with no shared attribute on any of the 10 lines
DRAW_BOARD_TEXT = "\n".join([
    "BSCF BTSH WSCH WTSF",
    "WSSH WTCF BSSF BTCH",
    "BTSF BSCH WTSH WSCF",
    "WTCH WSSF BTCF BSSH",
])

EMPTY_ROW = "                   "


def board_text(*rows: str) -> str:
    """Build board text, padding missing rows with empty ones."""
    lines = list(rows) + [EMPTY_ROW] * (4 - len(rows))
    return "\n".join(lines)


@pytest.fixture
def new_state() -> GameState:
    """A fresh game: empty board, all pieces free."""
    return GameState.new()


@pytest.fixture
def bscf() -> Piece:
    return Piece.from_code("BSCF")


@pytest.fixture
def full_board() -> BoardState:
    return BoardState.decode(FULL_BOARD_TEXT)


@pytest.fixture
def store(tmp_path) -> GameStore:
    """An initialized store in a temporary directory."""
    store = GameStore(tmp_path / "quarto.db")
    store.initialize()
    return store


@pytest.fixture
def manager(store: GameStore) -> SessionManager:
    return SessionManager(store)
