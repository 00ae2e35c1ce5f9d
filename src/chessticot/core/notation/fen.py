"""FEN parsing and serialization."""

from __future__ import annotations

from chessticot.core.board import Board
from chessticot.core.enums import CastlingRights, Color
from chessticot.core.piece import Piece
from chessticot.core.position import Position
from chessticot.core.types import Square, make_square, parse_square, rank_of, square_name
from chessticot.errors import FenError

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_LETTERS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    The two clock fields may be omitted and default to ``0`` and ``1``.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise FenError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = _parse_placement(placement, fen)

    # Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise FenError(f"Invalid FEN side-to-move field: {side_part!r}")

    castling = _parse_castling(castling_part)

    # En passant
    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise FenError(f"Invalid FEN en-passant square: {ep_part!r}") from None
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if rank_of(ep) != expected_ep_rank:
            raise FenError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # Clocks (optional)
    halfmove = _parse_counter(parts[4], "halfmove clock") if len(parts) > 4 else 0
    fullmove = _parse_counter(parts[5], "fullmove number") if len(parts) > 5 else 1
    if fullmove < 1:
        raise FenError(f"Invalid FEN fullmove number: {parts[5]!r}")

    return Position(board, side, castling, ep, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to six-field FEN."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    side_str = "w" if pos.side_to_move == Color.WHITE else "b"
    castling_str = (
        "".join(ch for ch, right in _CASTLING_LETTERS if pos.castling & right) or "-"
    )
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FenError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    cells: list[Piece | None] = [None] * 64
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isascii() and ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise FenError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise FenError(f"Invalid FEN rank width: {fen!r}")
                try:
                    cells[make_square(file, rank)] = Piece.from_char(ch)
                except ValueError as exc:
                    raise FenError(f"{exc} in {fen!r}") from None
                file += 1
            if file > 8:
                raise FenError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise FenError(f"Invalid FEN rank width: {fen!r}")
    return Board(cells)


def _parse_castling(castling_part: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if castling_part == "-":
        return castling

    # Letters must appear at most once each and in KQkq order.
    remaining = iter(_CASTLING_LETTERS)
    for ch in castling_part:
        for letter, right in remaining:
            if letter == ch:
                castling |= right
                break
        else:
            raise FenError(f"Invalid FEN castling field: {castling_part!r}")
    return castling


def _parse_counter(text: str, label: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise FenError(f"Invalid FEN {label}: {text!r}")
    return int(text)
