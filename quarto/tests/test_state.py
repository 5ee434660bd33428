"""
Tests for GameState and the pick/place protocol.

Tests:
- Fresh and reconstructed games
- pick() and place() transitions and failures
- The board / pool / pending partition
"""

import pytest

from ..engine_core.board import BoardState
from ..engine_core.errors import (
    CellOccupied, InvalidBoardText, InvalidPieceCode, InvariantViolation,
    NoPendingPiece, OutOfRange, PendingPieceExists, PieceAlreadyUsed,
)
from ..engine_core.pieces import Piece, all_pieces
from ..engine_core.state import GameState, TurnPhase
from .conftest import FULL_BOARD_TEXT, board_text


class TestNewGame:
    """Tests for a fresh game."""

    def test_empty_board_full_pool(self, new_state):
        """A new game has an empty board and all 16 pieces free."""
        assert new_state.board == BoardState.empty()
        assert len(new_state.free_pieces) == 16
        assert new_state.pending_piece is None
        assert new_state.phase == TurnPhase.AWAITING_SELECTION
        new_state.check_invariant()


class TestReconstruction:
    """Tests for from_record() / to_record()."""

    def test_full_board_has_empty_pool(self):
        """A full board leaves nothing free."""
        state = GameState.from_record(FULL_BOARD_TEXT)
        assert len(state.free_pieces) == 0
        assert state.pending_piece is None
        state.check_invariant()

    def test_pool_is_complement_minus_pending(self):
        """Free pieces are those not on the board or pending."""
        state = GameState.from_record(board_text("BSCF BSCH          "), "WTSH")
        assert state.pending_piece == Piece.from_code("WTSH")
        assert len(state.free_pieces) == 13
        assert Piece.from_code("BSCF") not in state.free_pieces
        assert Piece.from_code("WTSH") not in state.free_pieces
        assert state.phase == TurnPhase.AWAITING_PLACEMENT
        state.check_invariant()

    @pytest.mark.parametrize("pending", [None, "", "none", "NONE"])
    def test_no_pending_piece(self, pending):
        """Missing, empty and "none" labels mean nothing is pending."""
        state = GameState.from_record(board_text(), pending)
        assert state.pending_piece is None
        assert len(state.free_pieces) == 16

    def test_pending_piece_on_board_rejected(self):
        """The pending piece cannot already be on the board."""
        with pytest.raises(PieceAlreadyUsed):
            GameState.from_record(board_text("BSCF               "), "BSCF")

    def test_invalid_pending_code(self):
        """A bad pending code is rejected."""
        with pytest.raises(InvalidPieceCode):
            GameState.from_record(board_text(), "ZZZZ")

    def test_invalid_board_text(self):
        """Bad board text is rejected."""
        with pytest.raises(InvalidBoardText):
            GameState.from_record("not a board")

    def test_round_trip(self, new_state, bscf):
        """to_record() output rebuilds the same state."""
        state = new_state.pick(bscf).place(1, 1).pick(Piece.from_code("WTSH"))
        board_text_, pending = state.to_record()
        assert pending == "WTSH"
        assert GameState.from_record(board_text_, pending) == state


class TestPick:
    """Tests for pick()."""

    def test_pick_moves_piece_to_pending(self, new_state, bscf):
        """Picking moves the piece from the pool to pending."""
        state = new_state.pick(bscf)
        assert state.pending_piece == bscf
        assert bscf not in state.free_pieces
        assert len(state.free_pieces) == 15
        assert state.phase == TurnPhase.AWAITING_PLACEMENT
        state.check_invariant()

    def test_pick_leaves_original_untouched(self, new_state, bscf):
        """The original state is not changed."""
        new_state.pick(bscf)
        assert new_state.pending_piece is None
        assert len(new_state.free_pieces) == 16

    def test_pick_while_pending_fails(self, new_state, bscf):
        """A second pick while one is pending fails."""
        state = new_state.pick(bscf)
        with pytest.raises(PendingPieceExists):
            state.pick(Piece.from_code("WTSH"))

    def test_pick_same_piece_twice_fails(self, new_state, bscf):
        """Picking the pending piece again fails on the pending check."""
        state = new_state.pick(bscf)
        # Pending check wins over pool check
        with pytest.raises(PendingPieceExists):
            state.pick(bscf)

    def test_pick_placed_piece_fails(self, new_state, bscf):
        """A piece on the board cannot be picked."""
        state = new_state.pick(bscf).place(0, 0)
        with pytest.raises(PieceAlreadyUsed):
            state.pick(bscf)


class TestPlace:
    """Tests for place()."""

    def test_place_writes_pending_piece(self, new_state, bscf):
        """Placing writes the pending piece and clears it."""
        state = new_state.pick(bscf).place(2, 3)
        assert state.board.get(2, 3) == bscf
        assert state.pending_piece is None
        assert state.phase == TurnPhase.AWAITING_SELECTION
        state.check_invariant()

    @pytest.mark.parametrize("x,y", [(4, 0), (0, 4), (4, 4), (-1, 2)])
    def test_out_of_range(self, new_state, bscf, x, y):
        """Coordinates outside the board fail."""
        state = new_state.pick(bscf)
        with pytest.raises(OutOfRange):
            state.place(x, y)

    def test_out_of_range_checked_before_pending(self, new_state):
        """Range is checked before the pending piece."""
        with pytest.raises(OutOfRange):
            new_state.place(4, 0)

    def test_no_pending_piece(self, new_state):
        """Placing with nothing pending fails."""
        with pytest.raises(NoPendingPiece):
            new_state.place(0, 0)

    def test_cell_occupied(self, new_state, bscf):
        """Placing on an occupied cell fails."""
        state = new_state.pick(bscf).place(0, 0).pick(Piece.from_code("WTSH"))
        with pytest.raises(CellOccupied):
            state.place(0, 0)
        # Nothing changed
        assert state.pending_piece == Piece.from_code("WTSH")
        state.check_invariant()


class TestPartitionInvariant:
    """The 16 pieces always split into board / pool / pending."""

    def test_full_game(self, new_state):
        """A full game keeps every piece accounted for once."""
        state = new_state
        cells = [(r, c) for r in range(4) for c in range(4)]
        for piece, (x, y) in zip(all_pieces(), cells):
            state = state.pick(piece)
            state.check_invariant()
            state = state.place(x, y)
            state.check_invariant()
        assert state.board.is_full()
        assert state.free_pieces == ()

    def test_violation_detected(self, bscf):
        """A piece both on the board and free is a violation."""
        broken = GameState(pending_piece=bscf)  # bscf also still in the pool
        with pytest.raises(InvariantViolation):
            broken.check_invariant()

    def test_missing_piece_detected(self, new_state):
        """A piece missing everywhere is a violation."""
        broken = GameState(free_pieces=new_state.free_pieces[1:])
        with pytest.raises(InvariantViolation):
            broken.check_invariant()
