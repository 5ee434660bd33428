"""
Board State - The 4x4 grid and its canonical text encoding.

Canonical text:
- exactly 4 lines joined by a single newline, no trailing newline
- each line holds 4 cells separated by a single space (19 characters)
- a cell is a 4-character piece code, or 4 spaces when empty

Boards are values: with_piece() returns a new board.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .errors import (
    CellOccupied,
    DuplicatePiece,
    InvalidBoardText,
    InvalidPieceCode,
    OutOfRange,
)
from .pieces import Piece

BOARD_SIZE = 4
EMPTY_CELL = " " * 4
CELL_SEPARATOR = " "
LINE_LENGTH = BOARD_SIZE * 4 + (BOARD_SIZE - 1) * len(CELL_SEPARATOR)

Cell = Optional[Piece]
Coord = tuple[int, int]


def _empty_grid() -> tuple[tuple[Cell, ...], ...]:
    return tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE))


def in_range(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass(frozen=True)
class BoardState:
    """
    A 4x4 grid of optional pieces.

    Invariant: no piece appears in more than one cell.
    """
    cells: tuple[tuple[Cell, ...], ...] = field(default_factory=_empty_grid)

    @classmethod
    def empty(cls) -> BoardState:
        return cls()

    def get(self, row: int, col: int) -> Cell:
        """Get the piece at (row, col), or None."""
        if not in_range(row, col):
            raise OutOfRange(f"Cell ({row}, {col}) is outside the board")
        return self.cells[row][col]

    def with_piece(self, row: int, col: int, piece: Piece) -> BoardState:
        """Return new board with piece placed at (row, col)."""
        if self.get(row, col) is not None:
            raise CellOccupied(f"Cell ({row}, {col}) already holds {self.cells[row][col]}")
        if piece in self.pieces():
            raise DuplicatePiece(f"Piece {piece} is already on the board")

        new_row = list(self.cells[row])
        new_row[col] = piece
        new_cells = list(self.cells)
        new_cells[row] = tuple(new_row)
        return BoardState(cells=tuple(new_cells))

    def occupied(self) -> Iterator[tuple[Coord, Piece]]:
        """Iterate over ((row, col), piece) for every occupied cell."""
        for row, cells in enumerate(self.cells):
            for col, piece in enumerate(cells):
                if piece is not None:
                    yield (row, col), piece

    def pieces(self) -> set[Piece]:
        return {piece for _, piece in self.occupied()}

    def empty_cells(self) -> list[Coord]:
        return [
            (row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.cells[row][col] is None
        ]

    @property
    def piece_count(self) -> int:
        return sum(1 for _ in self.occupied())

    def is_full(self) -> bool:
        return self.piece_count == BOARD_SIZE * BOARD_SIZE

    # =========================================================================
    # Canonical text
    # =========================================================================

    def encode(self) -> str:
        """Encode the board as canonical text."""
        return "\n".join(
            CELL_SEPARATOR.join(
                piece.code if piece is not None else EMPTY_CELL
                for piece in row
            )
            for row in self.cells
        )

    @classmethod
    def decode(cls, text: str) -> BoardState:
        """
        Decode canonical board text.

        Raises InvalidBoardText for malformed layout or piece codes,
        DuplicatePiece if a piece appears more than once.
        """
        lines = text.split("\n")
        if len(lines) != BOARD_SIZE:
            raise InvalidBoardText(
                f"Board text must have {BOARD_SIZE} lines, got {len(lines)}"
            )

        rows: list[tuple[Cell, ...]] = []
        seen: set[Piece] = set()
        for row, line in enumerate(lines):
            if len(line) != LINE_LENGTH:
                raise InvalidBoardText(
                    f"Line {row} must be {LINE_LENGTH} characters, got {len(line)}"
                )
            cells: list[Cell] = []
            for col in range(BOARD_SIZE):
                start = col * 5
                segment = line[start:start + 4]
                if col < BOARD_SIZE - 1 and line[start + 4] != CELL_SEPARATOR:
                    raise InvalidBoardText(
                        f"Line {row} has a bad separator at column {start + 4}"
                    )
                if segment == EMPTY_CELL:
                    cells.append(None)
                    continue
                try:
                    piece = Piece.from_code(segment)
                except InvalidPieceCode as e:
                    raise InvalidBoardText(
                        f"Cell ({row}, {col}): {e.message}"
                    ) from e
                if piece in seen:
                    raise DuplicatePiece(f"Piece {piece} appears more than once")
                seen.add(piece)
                cells.append(piece)
            rows.append(tuple(cells))

        return cls(cells=tuple(rows))

    def render(self) -> str:
        """Human-readable grid with row and column indices."""
        header = "    " + "    ".join(f"{col}" for col in range(BOARD_SIZE))
        divider = "  +" + "-----" * BOARD_SIZE
        lines = [header, divider]
        for row, cells in enumerate(self.cells):
            body = " ".join(
                piece.code if piece is not None else "...."
                for piece in cells
            )
            lines.append(f"{row} | {body}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.encode()
