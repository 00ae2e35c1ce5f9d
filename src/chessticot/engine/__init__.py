"""Engine package: session dispatcher and search collaborator."""

from chessticot.engine.python_search import PythonSearchEngine
from chessticot.engine.search import SearchCollaborator, SearchLimits, SearchResult
from chessticot.engine.session import (
    Action,
    ComputeBestMove,
    EmitBestMove,
    EmitText,
    Halt,
    ReplacePosition,
    ResetSession,
    Session,
    actions_for,
)

__all__ = [
    "Action",
    "ComputeBestMove",
    "EmitBestMove",
    "EmitText",
    "Halt",
    "PythonSearchEngine",
    "ReplacePosition",
    "ResetSession",
    "SearchCollaborator",
    "SearchLimits",
    "SearchResult",
    "Session",
    "actions_for",
]
