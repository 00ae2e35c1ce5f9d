"""Parsing of front-end input lines into :data:`Command` values."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeAlias

from chessticot.core.notation import parse_move, position_from_fen
from chessticot.core.position import Position
from chessticot.errors import CommandParseError, FenError, MoveParseError

_LOGGER = logging.getLogger(__name__)

_MOVES_MARKER = "moves"
_MAX_FEN_FIELDS = 6


# ── Command variants ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Identify:
    """``uci``: the front-end asks who we are."""


@dataclass(frozen=True, slots=True)
class IsReady:
    """``isready``: synchronisation ping."""


@dataclass(frozen=True, slots=True)
class NewGame:
    """``ucinewgame``: forget the previous game."""


@dataclass(frozen=True, slots=True)
class SetPosition:
    """``position ...`` with the move list already replayed."""

    position: Position


@dataclass(frozen=True, slots=True)
class StartSearch:
    """``go``."""


@dataclass(frozen=True, slots=True)
class StopSearch:
    """``stop``: report the last computed move."""


@dataclass(frozen=True, slots=True)
class Terminate:
    """``quit``."""


Command: TypeAlias = (
    Identify | IsReady | NewGame | SetPosition | StartSearch | StopSearch | Terminate
)

_BARE_COMMANDS: dict[str, Callable[[], Command]] = {
    "uci": Identify,
    "isready": IsReady,
    "ucinewgame": NewGame,
    "stop": StopSearch,
    "quit": Terminate,
}


# ── Parsing ──────────────────────────────────────────────────────────────────


def parse_command(line: str) -> Command:
    """Parse one input line.

    Raises :class:`CommandParseError` for anything that is not a supported
    command, including an empty line.
    """
    tokens = line.split()
    if not tokens:
        raise CommandParseError("Empty command line")

    head, args = tokens[0], tokens[1:]
    if head == "position":
        return SetPosition(parse_position_args(args))
    if head == "go":
        if args:
            _LOGGER.debug("Ignoring go arguments: %s", " ".join(args))
        return StartSearch()

    factory = _BARE_COMMANDS.get(head)
    if factory is None:
        raise CommandParseError(f"Unsupported command: {head!r}")
    if args:
        raise CommandParseError(f"Unexpected arguments for {head!r}: {' '.join(args)!r}")
    return factory()


def parse_position_args(args: Sequence[str]) -> Position:
    """Build the position described by the tokens after ``position``.

    ``startpos`` or ``fen <fields>``, optionally followed by ``moves`` and a
    list of UCI tokens replayed one at a time.
    """
    if not args:
        raise CommandParseError("position: expected 'startpos' or 'fen'")

    mode, rest = args[0], list(args[1:])
    if _MOVES_MARKER in rest:
        marker = rest.index(_MOVES_MARKER)
        board_tokens, move_tokens = rest[:marker], rest[marker + 1 :]
    else:
        board_tokens, move_tokens = rest, []

    if mode == "startpos":
        if board_tokens:
            raise CommandParseError(
                f"position startpos: unexpected tokens {' '.join(board_tokens)!r}"
            )
        position = Position.initial()
    elif mode == "fen":
        if not 1 <= len(board_tokens) <= _MAX_FEN_FIELDS:
            raise CommandParseError(
                f"position fen: expected 1-{_MAX_FEN_FIELDS} fields, "
                f"got {len(board_tokens)}"
            )
        try:
            position = position_from_fen(" ".join(board_tokens))
        except FenError as exc:
            raise CommandParseError(f"position fen: {exc}") from exc
    else:
        raise CommandParseError(f"position: unknown mode {mode!r}")

    return replay_moves(position, move_tokens)


def replay_moves(position: Position, tokens: Sequence[str]) -> Position:
    """Apply *tokens* left to right, each parsed against the position so far."""
    current = position
    for token in tokens:
        try:
            move = parse_move(token, current)
        except MoveParseError as exc:
            raise CommandParseError(f"position moves: {exc}") from exc
        current = current.apply(move)
    return current
