"""Tests for Position.apply."""

import pytest

from chessticot.core.enums import CastlingRights, Color, PieceType
from chessticot.core.move import Move
from chessticot.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chessticot.core.piece import Piece
from chessticot.core.position import Position
from chessticot.core.types import (
    A1, A2, C1, D1, D5, D7, E1, E2, E3, E4, E5, E7, E8, F1, G1, G8, H1, H8,
    parse_square,
)

_CASTLING_FEN = "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1"


class TestInitial:
    def test_matches_starting_fen(self) -> None:
        assert Position.initial() == position_from_fen(STARTING_FEN)

    def test_defaults(self) -> None:
        pos = Position.initial()
        assert pos.side_to_move == Color.WHITE
        assert pos.castling == CastlingRights.ALL
        assert pos.en_passant is None
        assert (pos.halfmove_clock, pos.fullmove_number) == (0, 1)

    def test_invalid_clocks_rejected(self) -> None:
        with pytest.raises(ValueError):
            Position(halfmove_clock=-1)
        with pytest.raises(ValueError):
            Position(fullmove_number=0)


class TestApply:
    def test_returns_new_position(self) -> None:
        pos = Position.initial()
        after = pos.apply(Move(E2, E4))
        assert pos == Position.initial()
        assert after is not pos
        assert after.board[E4] == Piece(Color.WHITE, PieceType.PAWN)
        assert after.board[E2] is None

    def test_side_switches(self) -> None:
        after = Position.initial().apply(Move(E2, E4))
        assert after.side_to_move == Color.BLACK

    def test_fullmove_increments_after_black(self) -> None:
        pos = Position.initial().apply(Move(E2, E4))
        assert pos.fullmove_number == 1
        pos = pos.apply(Move(E7, E5))
        assert pos.fullmove_number == 2

    def test_halfmove_clock(self) -> None:
        pos = Position.initial().apply(Move(G1, parse_square("f3")))
        assert pos.halfmove_clock == 1
        pos = pos.apply(Move(G8, parse_square("f6")))
        assert pos.halfmove_clock == 2
        pos = pos.apply(Move(E2, E3))
        assert pos.halfmove_clock == 0

    def test_capture_resets_halfmove_clock(self) -> None:
        pos = position_from_fen("4k3/8/8/3n4/8/8/8/3RK3 w - - 7 30")
        after = pos.apply(Move(D1, D5))
        assert after.halfmove_clock == 0
        assert after.board[D5] == Piece(Color.WHITE, PieceType.ROOK)

    def test_empty_origin_passes_turn(self) -> None:
        pos = Position.initial().apply(Move(E2, E4))
        after = pos.apply(Move(E5, parse_square("e6")))
        assert after.board == pos.board
        assert after.side_to_move == Color.WHITE
        assert after.en_passant is None
        assert after.castling == pos.castling
        assert (after.halfmove_clock, after.fullmove_number) == (1, 2)
        assert after.fen() == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 1 2"
        )


class TestEnPassant:
    def test_double_push_sets_target(self) -> None:
        pos = Position.initial().apply(Move(E2, E4))
        assert pos.en_passant == E3

    def test_next_move_replaces_target(self) -> None:
        pos = Position.initial().apply(Move(E2, E4)).apply(Move(D7, D5))
        assert pos.en_passant == parse_square("d6")

    def test_other_move_clears_target(self) -> None:
        pos = Position.initial().apply(Move(E2, E4))
        pos = pos.apply(Move(G8, parse_square("f6")))
        assert pos.en_passant is None

    def test_single_push_has_no_target(self) -> None:
        assert Position.initial().apply(Move(E2, E3)).en_passant is None

    def test_capture_removes_passed_pawn(self) -> None:
        fen = "rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3"
        pos = position_from_fen(fen)
        after = pos.apply(Move(E5, parse_square("f6")))
        assert after.board[parse_square("f6")] == Piece(Color.WHITE, PieceType.PAWN)
        assert after.board[parse_square("f5")] is None
        assert after.board[D5] == Piece(Color.BLACK, PieceType.PAWN)
        assert after.halfmove_clock == 0


class TestCastlingRightsUpdate:
    def test_king_move_removes_rights(self) -> None:
        pos = position_from_fen(_CASTLING_FEN).apply(Move(E1, D1))
        assert not (pos.castling & CastlingRights.WHITE_BOTH)
        assert pos.castling & CastlingRights.BLACK_BOTH == CastlingRights.BLACK_BOTH

    def test_rook_move_removes_one_right(self) -> None:
        pos = position_from_fen(_CASTLING_FEN).apply(Move(A1, parse_square("b1")))
        assert not (pos.castling & CastlingRights.WHITE_QUEENSIDE)
        assert bool(pos.castling & CastlingRights.WHITE_KINGSIDE)

    def test_rook_captured_on_corner(self) -> None:
        fen = "r3k2r/8/8/8/8/8/6b1/R3K2R b KQkq - 0 1"
        pos = position_from_fen(fen).apply(Move(parse_square("g2"), H1))
        assert not (pos.castling & CastlingRights.WHITE_KINGSIDE)
        assert bool(pos.castling & CastlingRights.WHITE_QUEENSIDE)

    def test_castling_kingside(self) -> None:
        pos = position_from_fen(_CASTLING_FEN).apply(Move(E1, G1))
        assert pos.board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[F1] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board[H1] is None
        assert pos.board[E1] is None

    def test_castling_queenside(self) -> None:
        pos = position_from_fen(_CASTLING_FEN).apply(Move(E1, C1))
        assert pos.board[C1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[D1] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board[A1] is None

    def test_black_castling_fen(self) -> None:
        pos = position_from_fen(_CASTLING_FEN).apply(Move(A2, parse_square("a3")))
        pos = pos.apply(Move(E8, G8))
        assert position_to_fen(pos) == "r4rk1/pppppppp/8/8/8/P7/1PPPPPPP/R3K2R w KQ - 1 2"

    def test_both_kingside_rooks_leave_home(self) -> None:
        pos = position_from_fen(_CASTLING_FEN).apply(Move(H1, parse_square("h3")))
        pos = pos.apply(Move(H8, parse_square("h4")))
        assert pos.castling == (
            CastlingRights.WHITE_QUEENSIDE | CastlingRights.BLACK_QUEENSIDE
        )


class TestPromotion:
    def test_promote_to_queen(self) -> None:
        pos = position_from_fen("8/4P3/8/8/8/8/4k3/4K3 w - - 0 1")
        after = pos.apply(Move(E7, E8, PieceType.QUEEN))
        assert after.board[E8] == Piece(Color.WHITE, PieceType.QUEEN)
        assert after.board[E7] is None

    def test_underpromotion_black(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/3p4/4K3 b - - 0 1")
        after = pos.apply(Move(parse_square("d2"), D1, PieceType.KNIGHT))
        assert after.board[D1] == Piece(Color.BLACK, PieceType.KNIGHT)
        assert after.fullmove_number == 2


class TestValueSemantics:
    def test_equal_positions_hash_equal(self) -> None:
        a = Position.initial().apply(Move(E2, E4))
        b = position_from_fen(
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )
        assert a == b
        assert hash(a) == hash(b)

    def test_fen_method(self) -> None:
        assert Position.initial().fen() == STARTING_FEN
        assert Position.from_fen(STARTING_FEN) == Position.initial()

    def test_frozen(self) -> None:
        pos = Position.initial()
        with pytest.raises(AttributeError):
            pos.halfmove_clock = 3  # type: ignore[misc]
