"""Pure-Python fixed-depth search (negamax + alpha-beta)."""

from __future__ import annotations

import logging

from chessticot.core.enums import Color, PieceType
from chessticot.core.move import Move
from chessticot.core.move_generator import MoveGenerator
from chessticot.core.position import Position
from chessticot.core.types import Square, file_of, rank_of
from chessticot.engine.search import SearchLimits, SearchResult
from chessticot.errors import NoLegalMoveError

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000
_MATE_SCORE = 100_000

_PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 0,
}


class PythonSearchEngine:
    """Small classical searcher used as the session's search collaborator."""

    __slots__ = ("_limits", "_nodes")

    def __init__(self, limits: SearchLimits | None = None) -> None:
        self._limits = limits if limits is not None else SearchLimits()
        self._nodes = 0

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    # ── SearchCollaborator protocol ──────────────────────────────────────

    def best_move(self, position: Position) -> Move:
        result = self.search(position, self._limits)
        if result.best_move is None:
            raise NoLegalMoveError(f"No legal move in {position.fen()}")
        return result.best_move

    def search(self, position: Position, limits: SearchLimits) -> SearchResult:
        self._nodes = 0

        for color in Color:
            if len(position.board.pieces(color, PieceType.KING)) != 1:
                raise NoLegalMoveError(
                    f"Cannot search without exactly one {color.name} king: "
                    f"{position.fen()}"
                )

        root_gen = MoveGenerator(position)
        root_moves = root_gen.generate_legal_moves()
        if not root_moves:
            if root_gen.is_in_check(position.side_to_move):
                return SearchResult(None, -_MATE_SCORE, 0, self._nodes)
            return SearchResult(None, 0, 0, self._nodes)

        best_move: Move | None = None
        best_score = -_INF_SCORE
        alpha = -_INF_SCORE
        beta = _INF_SCORE

        for move in self._order_moves(position, root_moves):
            score = -self._negamax(
                position.apply(move), limits.max_depth - 1, -beta, -alpha, ply=1
            )
            if score > best_score:
                best_score = score
                best_move = move
            if score > alpha:
                alpha = score

        _LOGGER.debug(
            "Searched depth %d: %s (%d cp, %d nodes)",
            limits.max_depth,
            best_move,
            best_score,
            self._nodes,
        )
        return SearchResult(best_move, best_score, limits.max_depth, self._nodes)

    def _negamax(
        self,
        position: Position,
        depth: int,
        alpha: int,
        beta: int,
        ply: int,
    ) -> int:
        self._nodes += 1
        if depth <= 0:
            return self._static_eval(position)

        gen = MoveGenerator(position)
        moves = gen.generate_legal_moves()
        if not moves:
            if gen.is_in_check(position.side_to_move):
                # Prefer the shortest mate.
                return -_MATE_SCORE + ply
            return 0

        best_score = -_INF_SCORE
        for move in self._order_moves(position, moves):
            score = -self._negamax(position.apply(move), depth - 1, -beta, -alpha, ply + 1)
            if score > best_score:
                best_score = score
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break
        return best_score

    # ── Move ordering ────────────────────────────────────────────────────

    def _order_moves(self, position: Position, moves: list[Move]) -> list[Move]:
        return sorted(
            moves,
            key=lambda move: self._move_order_score(position, move),
            reverse=True,
        )

    def _move_order_score(self, position: Position, move: Move) -> int:
        moving_piece = position.board[move.from_sq]
        if moving_piece is None:
            return -_INF_SCORE

        score = 0
        if move.promotion is not None:
            score += 20_000 + _PIECE_VALUES[move.promotion]

        target_piece = position.board[move.to_sq]
        if target_piece is not None:
            score += 10_000
            score += 10 * _PIECE_VALUES[target_piece.piece_type]
            score -= _PIECE_VALUES[moving_piece.piece_type]

        score += self._piece_square_bonus(
            moving_piece.piece_type, moving_piece.color, move.to_sq
        ) - self._piece_square_bonus(
            moving_piece.piece_type, moving_piece.color, move.from_sq
        )
        return score

    # ── Evaluation ───────────────────────────────────────────────────────

    def _static_eval(self, position: Position) -> int:
        score = 0
        for sq, piece in enumerate(position.board):
            if piece is None:
                continue
            val = _PIECE_VALUES[piece.piece_type]
            val += self._piece_square_bonus(piece.piece_type, piece.color, sq)
            score += val if piece.color == Color.WHITE else -val

        if position.side_to_move == Color.WHITE:
            return score
        return -score

    def _piece_square_bonus(
        self,
        piece_type: PieceType,
        color: Color,
        sq: Square,
    ) -> int:
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        if color == Color.BLACK:
            rank_idx = 7 - rank_idx

        center_dist = abs(file_idx - 3) + abs(rank_idx - 3)

        if piece_type == PieceType.PAWN:
            return rank_idx * 12 - abs(file_idx - 3) * 2
        if piece_type == PieceType.KNIGHT:
            return 28 - center_dist * 8
        if piece_type == PieceType.BISHOP:
            return 22 - center_dist * 5 + rank_idx * 2
        if piece_type == PieceType.ROOK:
            return 10 + rank_idx * 3 - abs(file_idx - 3)
        if piece_type == PieceType.QUEEN:
            return 6 - center_dist * 2

        # King: stay home while pieces are on the board.
        if rank_idx <= 1:
            return 18 - abs(file_idx - 4) * 2
        return -rank_idx * 8
