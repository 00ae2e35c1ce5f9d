"""Move value object (one ply: origin, destination, optional promotion)."""

from __future__ import annotations

from dataclasses import dataclass

from chessticot.core.enums import PieceType
from chessticot.core.types import Square, square_name

# Promotion letter ↔ piece kind, shared by the read and write paths.
PROMOTION_LETTERS: dict[PieceType, str] = {
    PieceType.QUEEN: "q",
    PieceType.ROOK: "r",
    PieceType.BISHOP: "b",
    PieceType.KNIGHT: "n",
}
PROMOTION_PIECES: dict[str, PieceType] = {v: k for k, v in PROMOTION_LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Castling is expressed as the king's two-file step and en passant as the
    pawn's diagonal step onto the target square; :meth:`Position.apply`
    recognises both from the board.
    """

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    def __post_init__(self) -> None:
        for sq in (self.from_sq, self.to_sq):
            if not 0 <= sq < 64:
                raise ValueError(f"Square index out of range: {sq}")
        if self.promotion is not None and self.promotion not in PROMOTION_LETTERS:
            raise ValueError(f"Cannot promote to {self.promotion.name}")

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += PROMOTION_LETTERS[self.promotion]
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
