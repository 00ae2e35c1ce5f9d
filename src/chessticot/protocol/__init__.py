"""UCI protocol layer: command parsing and response rendering."""

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
    parse_position_args,
    replay_moves,
)
from chessticot.protocol.responses import (
    READY_OK,
    UCI_OK,
    best_move,
    id_author,
    id_name,
    identification,
)

__all__ = [
    # Commands
    "Command",
    "Identify",
    "IsReady",
    "NewGame",
    "SetPosition",
    "StartSearch",
    "StopSearch",
    "Terminate",
    "parse_command",
    "parse_position_args",
    "replay_moves",
    # Responses
    "READY_OK",
    "UCI_OK",
    "best_move",
    "id_author",
    "id_name",
    "identification",
]
