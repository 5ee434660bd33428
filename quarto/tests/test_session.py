"""
Tests for the session manager.

Tests:
- Moves are persisted only when they succeed
- Quarto status after placement
- Per-game locking under concurrent moves
"""

import threading

import pytest

from ..engine_core.errors import ErrorCode, GameNotFound, InvalidPieceCode, RoleAlreadyAssigned
from ..engine_core.pieces import Piece
from ..engine_core.state import TurnPhase
from ..storage import PlayerRole


class TestMoves:
    """Tests for pick/place through the manager."""

    def test_pick_and_place_persist(self, manager, store, bscf):
        """Successful moves are written to the store."""
        game = manager.create_game()

        outcome = manager.pick(game.game_id, "BSCF")
        assert outcome.success
        assert store.get_game(game.game_id).next_piece == "BSCF"

        outcome = manager.place(game.game_id, 0, 0)
        assert outcome.success
        reloaded = manager.get_game(game.game_id)
        assert reloaded.state.board.get(0, 0) == bscf
        assert reloaded.state.phase == TurnPhase.AWAITING_SELECTION

    def test_failed_move_not_persisted(self, manager, store):
        """Rejected moves leave the stored record alone."""
        game = manager.create_game()
        manager.pick(game.game_id, "BSCF")
        before = store.get_game(game.game_id)

        outcome = manager.pick(game.game_id, "WTSH")

        assert not outcome.success
        assert outcome.result.error_code == ErrorCode.PENDING_PIECE_EXISTS
        after = store.get_game(game.game_id)
        assert after.next_piece == before.next_piece == "BSCF"
        assert after.updated_at == before.updated_at

    def test_pick_accepts_piece_objects(self, manager, bscf):
        """pick() takes Piece objects as well as codes."""
        game = manager.create_game()
        assert manager.pick(game.game_id, bscf).success

    def test_bad_piece_code_raises(self, manager):
        """Unknown piece codes raise before touching the store."""
        game = manager.create_game()
        with pytest.raises(InvalidPieceCode):
            manager.pick(game.game_id, "XXXX")

    def test_unknown_game(self, manager):
        """Unknown game ids raise GameNotFound."""
        with pytest.raises(GameNotFound):
            manager.place("missing", 0, 0)

    def test_quarto_reported(self, manager):
        """A completed row is reported on the outcome and on reload."""
        game = manager.create_game()
        for y, code in enumerate(["BSCF", "BSCH", "BSSF", "BTSH"]):
            manager.pick(game.game_id, code)
            outcome = manager.place(game.game_id, 0, y)

        assert outcome.result.quarto
        assert outcome.game.quarto
        assert manager.get_game(game.game_id).quarto


class TestJoin:
    """Tests for role binding."""

    def test_join_both_roles(self, manager):
        """Both roles can be bound."""
        game = manager.create_game()
        manager.join(game.game_id, PlayerRole.FIRST)
        view = manager.join(game.game_id, PlayerRole.SECOND)

        assert view.record.assigned_first
        assert view.record.assigned_second

    def test_join_twice(self, manager):
        """Binding a role twice raises."""
        game = manager.create_game()
        manager.join(game.game_id, PlayerRole.SECOND)
        with pytest.raises(RoleAlreadyAssigned):
            manager.join(game.game_id, PlayerRole.SECOND)


class TestConcurrency:
    """Only one pick wins when several race on the same game."""

    def test_concurrent_picks(self, manager):
        """Exactly one of several racing picks succeeds."""
        game = manager.create_game()
        codes = ["BSCF", "BSCH", "WTSH", "WTSF", "BTCF", "WSCH"]
        outcomes = []
        barrier = threading.Barrier(len(codes))

        def pick(code):
            barrier.wait()
            outcomes.append(manager.pick(game.game_id, code))

        threads = [threading.Thread(target=pick, args=(code,)) for code in codes]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        winners = [o for o in outcomes if o.success]
        assert len(winners) == 1
        stored = manager.get_game(game.game_id)
        assert stored.state.pending_piece == Piece.from_code(winners[0].game.record.next_piece)
        stored.state.check_invariant()

    def test_forget_drops_game(self, manager):
        """forget() deletes the game."""
        game = manager.create_game()
        assert manager.forget(game.game_id)
        assert game.game_id not in manager.list_games()

    def test_missing_games_leave_no_locks(self, manager):
        """Moves and joins on unknown ids do not keep per-game locks."""
        for i in range(50):
            with pytest.raises(GameNotFound):
                manager.place(f"missing-{i}", 0, 0)
            with pytest.raises(GameNotFound):
                manager.join(f"missing-{i}", PlayerRole.FIRST)

        assert manager._locks == {}

    def test_existing_game_keeps_its_lock(self, manager):
        """A game that exists keeps its lock between moves."""
        game = manager.create_game()
        manager.pick(game.game_id, "BSCF")
        assert game.game_id in manager._locks
