"""
Session Module - Moves against persisted games.

A session is one stored game:
- Created empty in the game store
- Joined by a first and a second player
- Advanced by pick/place, each persisted before the next runs

The rules engine assumes exclusive access for each move; the manager
provides it with a lock per game id.
"""

from .manager import SessionManager, GameView, MoveOutcome, describe_error

__all__ = [
    "SessionManager",
    "GameView",
    "MoveOutcome",
    "describe_error",
]
