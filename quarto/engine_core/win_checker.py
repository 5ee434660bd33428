"""
Win Checker - Detects a completed Quarto line.

A line is a quarto on an attribute when all 4 of its cells are occupied
and the pieces share one value of that attribute. A board is a quarto
when any of the 10 lines is a quarto on any of the 4 attributes.

All functions are pure.
"""

from __future__ import annotations
from typing import Optional

from .board import BOARD_SIZE, BoardState, Coord
from .pieces import Attribute

Line = tuple[Coord, ...]


def _build_lines() -> tuple[Line, ...]:
    rows = [tuple((r, c) for c in range(BOARD_SIZE)) for r in range(BOARD_SIZE)]
    cols = [tuple((r, c) for r in range(BOARD_SIZE)) for c in range(BOARD_SIZE)]
    diagonal = tuple((i, i) for i in range(BOARD_SIZE))
    anti_diagonal = tuple((i, BOARD_SIZE - 1 - i) for i in range(BOARD_SIZE))
    return tuple(rows + cols + [diagonal, anti_diagonal])


# 4 rows, 4 columns, 2 diagonals
WIN_LINES: tuple[Line, ...] = _build_lines()


def line_matches(board: BoardState, line: Line, attribute: Attribute) -> bool:
    """Check whether every cell of the line holds a piece sharing the attribute."""
    values = set()
    for row, col in line:
        piece = board.get(row, col)
        if piece is None:
            return False
        values.add(piece.attribute(attribute))
    return len(values) == 1


def matching_attributes(board: BoardState, line: Line) -> list[Attribute]:
    """All attributes on which the line is a quarto."""
    return [attr for attr in Attribute if line_matches(board, line, attr)]


def winning_lines(
    board: BoardState,
    last_move: Optional[Coord] = None,
) -> list[Line]:
    """
    Lines that are a quarto on at least one attribute.

    If last_move is given, only lines through that cell are checked.
    """
    lines = WIN_LINES
    if last_move is not None:
        lines = tuple(line for line in WIN_LINES if last_move in line)
    return [line for line in lines if matching_attributes(board, line)]


def is_quarto(board: BoardState, last_move: Optional[Coord] = None) -> bool:
    """True if any line is a quarto."""
    lines = WIN_LINES
    if last_move is not None:
        lines = tuple(line for line in WIN_LINES if last_move in line)
    return any(
        line_matches(board, line, attr)
        for line in lines
        for attr in Attribute
    )


def is_draw(board: BoardState) -> bool:
    """The board is full and no line is a quarto."""
    return board.is_full() and not is_quarto(board)
