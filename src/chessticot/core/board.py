"""Board - immutable piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from chessticot.core.enums import Color, PieceType
from chessticot.core.piece import Piece
from chessticot.core.types import Square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """64-square placement. Never changes once built; see :meth:`with_changes`."""

    __slots__ = ("_squares",)

    def __init__(self, squares: Iterable[Piece | None] | None = None) -> None:
        cells = (None,) * 64 if squares is None else tuple(squares)
        if len(cells) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(cells)}")
        self._squares: tuple[Piece | None, ...] = cells

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __iter__(self) -> Iterator[Piece | None]:
        return iter(self._squares)

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [
            sq
            for sq, piece in enumerate(self._squares)
            if piece is not None and piece.is_a(color, piece_type)
        ]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [
            sq
            for sq, piece in enumerate(self._squares)
            if piece is not None and piece.color == color
        ]

    def king_square(self, color: Color) -> Square:
        """Return the king square for *color*."""
        kings = self.pieces(color, PieceType.KING)
        if not kings:
            raise ValueError(f"No {color.name} king on board")
        return kings[0]

    # -- Derivation ---------------------------------------------------------

    def with_changes(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with *changes* applied in insertion order."""
        cells = list(self._squares)
        for sq, piece in changes.items():
            cells[sq] = piece
        return Board(cells)

    @classmethod
    def initial(cls) -> Board:
        """Standard starting placement."""
        cells: list[Piece | None] = [None] * 64
        for f, pt in enumerate(_BACK_RANK):
            cells[make_square(f, 0)] = Piece(Color.WHITE, pt)
            cells[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            cells[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            cells[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return cls(cells)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(self._squares)

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
