"""Legal and pseudo-legal move generation + attack detection.

Used by the bundled searcher. The protocol layer never calls into this
module: moves received from the front-end are applied as given.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessticot.core.board import Board
from chessticot.core.enums import CastlingRights, Color, PieceType
from chessticot.core.move import PROMOTION_LETTERS, Move
from chessticot.core.types import (
    Square,
    file_of,
    home_rank,
    make_square,
    pawn_step,
    promotion_rank,
    rank_of,
)

if TYPE_CHECKING:
    from chessticot.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_PROMOTION_TYPES: tuple[PieceType, ...] = tuple(PROMOTION_LETTERS)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_of(sq) + df
            ar = rank_of(sq) + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_of(sq) + df
            ar = rank_of(sq) + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color* on *board*?"""
    # A pawn of by_color attacks sq from one rank behind it.
    pawn_rank = rank_of(sq) - (1 if by_color == Color.WHITE else -1)
    if 0 <= pawn_rank < 8:
        for df in (-1, 1):
            af = file_of(sq) + df
            if 0 <= af < 8:
                piece = board[make_square(af, pawn_rank)]
                if piece is not None and piece.is_a(by_color, PieceType.PAWN):
                    return True

    for to_sq in _KNIGHT_TARGETS[sq]:
        piece = board[to_sq]
        if piece is not None and piece.is_a(by_color, PieceType.KNIGHT):
            return True

    for to_sq in _KING_TARGETS[sq]:
        piece = board[to_sq]
        if piece is not None and piece.is_a(by_color, PieceType.KING):
            return True

    for rays, slider in ((_BISHOP_RAYS, PieceType.BISHOP), (_ROOK_RAYS, PieceType.ROOK)):
        for ray in rays[sq]:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in (
                    slider,
                    PieceType.QUEEN,
                ):
                    return True
                break

    return False


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`."""

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        moving_color = self._pos.side_to_move
        legal: list[Move] = []
        for move in self.generate_pseudo_legal_moves():
            after = self._pos.apply(move).board
            if not is_square_attacked(
                after, after.king_square(moving_color), moving_color.opposite
            ):
                legal.append(move)
        return legal

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        board = self._board

        for sq in board.all_pieces(color):
            piece_type = board[sq].piece_type  # type: ignore[union-attr]
            if piece_type == PieceType.PAWN:
                self._gen_pawn(sq, color, moves)
            elif piece_type == PieceType.KNIGHT:
                self._gen_steps(sq, color, _KNIGHT_TARGETS[sq], moves)
            elif piece_type == PieceType.KING:
                self._gen_steps(sq, color, _KING_TARGETS[sq], moves)
                self._gen_castling(sq, color, moves)
            else:
                self._gen_sliding(sq, color, _SLIDER_RAYS[piece_type][sq], moves)
        return moves

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return is_square_attacked(self._board, king_sq, color.opposite)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        step = pawn_step(color)
        last_rank = promotion_rank(color)
        start_rank = home_rank(color) + (1 if color == Color.WHITE else -1)

        targets: list[Square] = []
        one_step = sq + step
        if 0 <= one_step < 64 and board.is_empty(one_step):
            targets.append(one_step)
            two_step = one_step + step
            if rank_of(sq) == start_rank and board.is_empty(two_step):
                targets.append(two_step)

        for df in (-1, 1):
            af = file_of(sq) + df
            if not 0 <= af < 8 or not 0 <= one_step < 64:
                continue
            cap_sq = make_square(af, rank_of(one_step))
            target = board[cap_sq]
            if (target is not None and target.color != color) or (
                target is None and cap_sq == self._pos.en_passant
            ):
                targets.append(cap_sq)

        for to_sq in targets:
            if rank_of(to_sq) == last_rank:
                moves.extend(Move(sq, to_sq, pt) for pt in _PROMOTION_TYPES)
            else:
                moves.append(Move(sq, to_sq))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        offset = make_square(0, home_rank(color))
        if king_sq != offset + 4 or self.is_in_check(color):
            return

        board = self._board
        opponent = color.opposite
        rights = self._pos.castling & CastlingRights.for_color(color)

        kingside = (
            CastlingRights.WHITE_KINGSIDE
            if color == Color.WHITE
            else CastlingRights.BLACK_KINGSIDE
        )
        if rights & kingside:
            f_sq = offset + 5
            g_sq = offset + 6
            if (
                board.is_empty(f_sq)
                and board.is_empty(g_sq)
                and not is_square_attacked(board, f_sq, opponent)
                and not is_square_attacked(board, g_sq, opponent)
            ):
                moves.append(Move(king_sq, g_sq))

        queenside = (
            CastlingRights.WHITE_QUEENSIDE
            if color == Color.WHITE
            else CastlingRights.BLACK_QUEENSIDE
        )
        if rights & queenside:
            b_sq = offset + 1
            c_sq = offset + 2
            d_sq = offset + 3
            if (
                board.is_empty(b_sq)
                and board.is_empty(c_sq)
                and board.is_empty(d_sq)
                and not is_square_attacked(board, c_sq, opponent)
                and not is_square_attacked(board, d_sq, opponent)
            ):
                moves.append(Move(king_sq, c_sq))
