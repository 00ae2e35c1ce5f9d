"""Exception hierarchy shared by the protocol, notation and session layers."""

from __future__ import annotations


class ChessticotError(Exception):
    """Base class for every error raised by chessticot."""


# ── Protocol parse errors ────────────────────────────────────────────────────


class FenError(ChessticotError, ValueError):
    """A board-description (FEN) string could not be parsed."""


class MoveParseError(ChessticotError, ValueError):
    """A UCI move token is malformed or inconsistent with its position."""


class CommandParseError(ChessticotError, ValueError):
    """An input line is not a supported protocol command."""


# ── Contract violations ──────────────────────────────────────────────────────


class SessionContractError(ChessticotError, RuntimeError):
    """The front-end sequenced commands in an order the session forbids."""


class NoPositionError(SessionContractError):
    """A search was requested before any position was set."""


class NoBestMoveError(SessionContractError):
    """A result was requested before any search completed."""


# ── Search ───────────────────────────────────────────────────────────────────


class NoLegalMoveError(ChessticotError):
    """The side to move has no legal move (checkmate or stalemate)."""
