"""Rendering of engine → front-end lines (without trailing newline)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessticot.core.notation import format_move

if TYPE_CHECKING:
    from chessticot.core.move import Move
    from chessticot.core.position import Position

UCI_OK = "uciok"
READY_OK = "readyok"


def id_name(name: str) -> str:
    return f"id name {name}"


def id_author(author: str) -> str:
    return f"id author {author}"


def identification(name: str, author: str) -> list[str]:
    """The three lines answering ``uci``, in protocol order."""
    return [id_name(name), id_author(author), UCI_OK]


def best_move(move: Move, position: Position | None = None) -> str:
    return f"bestmove {format_move(move, position)}"
