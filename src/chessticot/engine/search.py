"""Search collaborator contract and shared search models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chessticot.core.move import Move
    from chessticot.core.position import Position


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = 2

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"Search depth must be >= 1: {self.max_depth}")


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score_cp: int
    depth: int
    nodes: int


class SearchCollaborator(Protocol):
    """Anything that picks a move for the session.

    The call is synchronous and must not mutate *position*; positions are
    immutable values, so implementations get that for free.
    """

    def best_move(self, position: Position) -> Move: ...
