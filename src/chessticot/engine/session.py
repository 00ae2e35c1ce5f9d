"""Session dispatcher: one line in, ordered actions out, executed in order.

The session owns the only mutable state in the engine: the current
position and the last move the search collaborator produced. Both start
absent; reading either while absent is a contract violation and raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO, TypeAlias

from chessticot.config import EngineConfig
from chessticot.errors import CommandParseError, NoBestMoveError, NoPositionError
from chessticot.protocol import responses
from chessticot.protocol.commands import (
    Command,
    Identify,
    IsReady,
    NewGame,
    SetPosition,
    StartSearch,
    StopSearch,
    Terminate,
    parse_command,
)

if TYPE_CHECKING:
    from chessticot.core.move import Move
    from chessticot.core.position import Position
    from chessticot.engine.search import SearchCollaborator

_LOGGER = logging.getLogger(__name__)


# ── Action variants ──────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class EmitText:
    text: str


@dataclass(frozen=True, slots=True)
class ReplacePosition:
    position: Position


@dataclass(frozen=True, slots=True)
class ResetSession:
    pass


@dataclass(frozen=True, slots=True)
class ComputeBestMove:
    pass


@dataclass(frozen=True, slots=True)
class EmitBestMove:
    pass


@dataclass(frozen=True, slots=True)
class Halt:
    pass


Action: TypeAlias = (
    EmitText | ReplacePosition | ResetSession | ComputeBestMove | EmitBestMove | Halt
)


def actions_for(command: Command, config: EngineConfig) -> list[Action]:
    """Translate *command* into the actions that carry it out, in order."""
    if isinstance(command, Identify):
        return [
            EmitText(line) for line in responses.identification(config.name, config.author)
        ]
    if isinstance(command, IsReady):
        return [EmitText(responses.READY_OK)]
    if isinstance(command, NewGame):
        return [ResetSession()]
    if isinstance(command, SetPosition):
        return [ReplacePosition(command.position)]
    if isinstance(command, StartSearch):
        return [ComputeBestMove()]
    if isinstance(command, StopSearch):
        return [EmitBestMove()]
    if isinstance(command, Terminate):
        return [Halt()]
    raise TypeError(f"Unknown command: {command!r}")


# ── Dispatcher ───────────────────────────────────────────────────────────────


class Session:
    """Synchronous UCI session over a pair of text streams.

    Thread-safety: none needed. One line is read, parsed and fully executed
    before the next read; a running search blocks the loop.
    """

    __slots__ = ("_engine", "_out", "_config", "_position", "_best_move", "_alive")

    def __init__(
        self,
        engine: SearchCollaborator,
        out: TextIO,
        config: EngineConfig | None = None,
    ) -> None:
        self._engine = engine
        self._out = out
        self._config = config if config is not None else EngineConfig()
        self._position: Position | None = None
        self._best_move: Move | None = None
        self._alive = True

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position | None:
        return self._position

    @property
    def best_move(self) -> Move | None:
        return self._best_move

    @property
    def alive(self) -> bool:
        return self._alive

    def require_position(self) -> Position:
        if self._position is None:
            raise NoPositionError("'go' received before any 'position' command")
        return self._position

    def require_best_move(self) -> Move:
        if self._best_move is None:
            raise NoBestMoveError("'stop' received before any search completed")
        return self._best_move

    # ── Loop ─────────────────────────────────────────────────────────────

    def run(self, stream: TextIO) -> None:
        """Process *stream* line by line until ``quit`` or end of input."""
        while self._alive:
            line = stream.readline()
            if not line:
                _LOGGER.info("Input closed, ending session")
                break
            self.handle_line(line)

    def handle_line(self, line: str) -> bool:
        """Parse and execute one input line; return whether the session lives on."""
        text = line.strip()
        if not text:
            _LOGGER.debug("Skipping blank line")
            return self._alive

        _LOGGER.debug("<< %s", text)
        try:
            command = parse_command(text)
        except CommandParseError as exc:
            if not self._config.lenient:
                raise
            _LOGGER.warning("Skipping unparseable line %r: %s", text, exc)
            return self._alive

        for action in actions_for(command, self._config):
            self.execute(action)
        return self._alive

    def execute(self, action: Action) -> None:
        """Run a single action against the session state."""
        if isinstance(action, EmitText):
            self._emit(action.text)
        elif isinstance(action, ReplacePosition):
            self._position = action.position
        elif isinstance(action, ResetSession):
            self._position = None
            self._best_move = None
        elif isinstance(action, ComputeBestMove):
            position = self.require_position()
            self._best_move = self._engine.best_move(position)
            _LOGGER.info("Best move for %s: %s", position.fen(), self._best_move)
        elif isinstance(action, EmitBestMove):
            self._emit(responses.best_move(self.require_best_move(), self._position))
        elif isinstance(action, Halt):
            self._alive = False
        else:
            raise TypeError(f"Unknown action: {action!r}")

    def _emit(self, text: str) -> None:
        _LOGGER.debug(">> %s", text)
        self._out.write(text + "\n")
        self._out.flush()
