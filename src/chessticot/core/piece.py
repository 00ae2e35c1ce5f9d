"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessticot.core.enums import Color, PieceType

_TYPE_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_LETTER_TYPES: dict[str, PieceType] = {v: k for k, v in _TYPE_LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable (color, kind) pair; FEN letter case encodes the color."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        letter = _TYPE_LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        piece_type = _LETTER_TYPES.get(char.lower()) if len(char) == 1 else None
        if piece_type is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, piece_type)

    def is_a(self, color: Color, piece_type: PieceType) -> bool:
        return self.color == color and self.piece_type == piece_type
