"""Notation package: FEN positions and UCI move tokens."""

from chessticot.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from chessticot.core.notation.uci import format_move, parse_move

__all__ = [
    "STARTING_FEN",
    "format_move",
    "parse_move",
    "position_from_fen",
    "position_to_fen",
]
