"""
Quarto - Rules engine for the two-player board game Quarto.

The engine provides:
- The 16 pieces and their four binary attributes
- Canonical text encoding of the 4x4 board
- The pick-then-place turn protocol
- Win detection over rows, columns and diagonals

Around it: a SQLite game store, a session manager, a CLI and an HTTP API.
"""

__version__ = "0.1.0"
