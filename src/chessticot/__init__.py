"""chessticot: a UCI chess engine."""

__version__ = "0.1.0"
