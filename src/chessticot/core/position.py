"""Position - complete game state (board + metadata) as an immutable value."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessticot.core.board import Board
from chessticot.core.enums import CastlingRights, Color, PieceType
from chessticot.core.move import Move
from chessticot.core.piece import Piece
from chessticot.core.types import Square, file_of, make_square, rank_of

# Home corner of each rook → the right it guards.
_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Positions are values. :meth:`apply` returns the successor and leaves the
    receiver untouched, so a session can hold on to any earlier state.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    def __post_init__(self) -> None:
        if self.halfmove_clock < 0:
            raise ValueError(f"Halfmove clock must be >= 0: {self.halfmove_clock}")
        if self.fullmove_number < 1:
            raise ValueError(f"Fullmove number must be >= 1: {self.fullmove_number}")

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position, white to move."""
        return cls()

    @classmethod
    def from_fen(cls, fen: str) -> Position:
        from chessticot.core.notation.fen import position_from_fen

        return position_from_fen(fen)

    def fen(self) -> str:
        from chessticot.core.notation.fen import position_to_fen

        return position_to_fen(self)

    # ── Core move operation ──────────────────────────────────────────────

    def apply(self, move: Move) -> Position:
        """Return the position after *move*.

        No legality check is made. Castling is recognised as a king moving two
        files and en passant as a pawn moving diagonally onto the en-passant
        square. An unsound move gives an unspecified but well-formed result;
        with an empty origin nothing is relocated and only the turn passes.
        """
        piece = self.board[move.from_sq]
        if piece is None:
            return self._pass_turn()

        is_pawn = piece.piece_type == PieceType.PAWN
        from_file, from_rank = file_of(move.from_sq), rank_of(move.from_sq)
        to_file, to_rank = file_of(move.to_sq), rank_of(move.to_sq)

        changes: dict[Square, Piece | None] = {move.from_sq: None}
        captured = self.board[move.to_sq]

        # En passant: the captured pawn sits beside the destination
        if (
            is_pawn
            and captured is None
            and move.to_sq == self.en_passant
            and from_file != to_file
        ):
            ep_capture_sq = make_square(to_file, from_rank)
            captured = self.board[ep_capture_sq]
            changes[ep_capture_sq] = None

        placed = piece
        if move.promotion is not None:
            placed = Piece(piece.color, move.promotion)
        changes[move.to_sq] = placed

        # Slide the rook for castling
        if piece.piece_type == PieceType.KING and abs(to_file - from_file) == 2:
            if to_file > from_file:
                rook_from, rook_to = make_square(7, from_rank), make_square(5, from_rank)
            else:
                rook_from, rook_to = make_square(0, from_rank), make_square(3, from_rank)
            changes[rook_to] = self.board[rook_from]
            changes[rook_from] = None

        # En passant target for the opponent
        next_en_passant: Square | None = None
        if is_pawn and from_file == to_file and abs(to_rank - from_rank) == 2:
            next_en_passant = make_square(from_file, (from_rank + to_rank) // 2)

        if is_pawn or captured is not None:
            halfmove_clock = 0
        else:
            halfmove_clock = self.halfmove_clock + 1

        fullmove_number = self.fullmove_number
        if self.side_to_move == Color.BLACK:
            fullmove_number += 1

        return Position(
            board=self.board.with_changes(changes),
            side_to_move=self.side_to_move.opposite,
            castling=self._castling_after(move, piece),
            en_passant=next_en_passant,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )

    def _pass_turn(self) -> Position:
        fullmove_number = self.fullmove_number
        if self.side_to_move == Color.BLACK:
            fullmove_number += 1
        return Position(
            board=self.board,
            side_to_move=self.side_to_move.opposite,
            castling=self.castling,
            en_passant=None,
            halfmove_clock=self.halfmove_clock + 1,
            fullmove_number=fullmove_number,
        )

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _castling_after(self, move: Move, piece: Piece) -> CastlingRights:
        rights = self.castling
        if piece.piece_type == PieceType.KING:
            rights &= ~CastlingRights.for_color(piece.color)

        for sq in (move.from_sq, move.to_sq):
            corner = _ROOK_CORNERS.get(sq)
            if corner is not None:
                rights &= ~corner
        return rights

    def __str__(self) -> str:
        return self.fen()
