"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from chessticot.core import Position, parse_move

    pos = Position.initial()
    pos = pos.apply(parse_move("e2e4", pos))
    print(pos.fen())
"""

from chessticot.core.board import Board
from chessticot.core.enums import CastlingRights, Color, PieceType
from chessticot.core.move import Move
from chessticot.core.move_generator import MoveGenerator
from chessticot.core.notation import (
    STARTING_FEN,
    format_move,
    parse_move,
    position_from_fen,
    position_to_fen,
)
from chessticot.core.piece import Piece
from chessticot.core.position import Position
from chessticot.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "PieceType",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    # Notation
    "STARTING_FEN",
    "format_move",
    "parse_move",
    "position_from_fen",
    "position_to_fen",
]
