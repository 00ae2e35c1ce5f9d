"""UCI long-algebraic move tokens (``e2e4``, ``e7e8q``)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessticot.core.enums import PieceType
from chessticot.core.move import PROMOTION_PIECES, Move
from chessticot.core.types import parse_square, promotion_rank, rank_of
from chessticot.errors import MoveParseError

if TYPE_CHECKING:
    from chessticot.core.position import Position


def parse_move(text: str, position: Position) -> Move:
    """Parse a UCI token into a :class:`Move` played in *position*.

    The position decides only whether a promotion letter is required (a pawn
    reaching its last rank) or forbidden (anything else). Full legality is
    not checked.
    """
    token = text.strip()
    if len(token) not in (4, 5):
        raise MoveParseError(f"Invalid move token (need 4-5 chars): {text!r}")

    try:
        from_sq = parse_square(token[0:2])
        to_sq = parse_square(token[2:4])
    except ValueError:
        raise MoveParseError(f"Invalid move squares: {text!r}") from None

    promotion: PieceType | None = None
    if len(token) == 5:
        promotion = PROMOTION_PIECES.get(token[4])
        if promotion is None:
            raise MoveParseError(f"Invalid promotion letter in move: {text!r}")

    piece = position.board[from_sq]
    if piece is None:
        raise MoveParseError(f"No piece on {token[0:2]} for move {text!r}")

    promotes = piece.piece_type == PieceType.PAWN and rank_of(to_sq) == promotion_rank(
        piece.color
    )
    if promotes and promotion is None:
        raise MoveParseError(f"Promotion piece required for move {text!r}")
    if not promotes and promotion is not None:
        raise MoveParseError(f"Move {text!r} is not a promotion")

    return Move(from_sq, to_sq, promotion)


def format_move(move: Move, position: Position | None = None) -> str:
    """Render *move* as a lower-case 4-5 character UCI token.

    *position* is accepted for symmetry with :func:`parse_move`; rendering
    never needs it.
    """
    return move.uci
