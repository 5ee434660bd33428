"""
Storage Module - Persistence of game records.

A game record is the board text, the pending piece code (or none) and
two flags marking which player roles are bound. The rules engine never
touches the database; the session manager loads and saves records.
"""

from .game_store import GameStore, GameRecord, PlayerRole

__all__ = [
    "GameStore",
    "GameRecord",
    "PlayerRole",
]
