"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import io

import pytest

from chessticot.config import EngineConfig
from chessticot.core.move import Move
from chessticot.core.notation import parse_move
from chessticot.core.position import Position
from chessticot.engine.session import Session


class FixedMoveEngine:
    """Search stub that always answers with the same UCI token."""

    def __init__(self, token: str = "e2e4") -> None:
        self.token = token
        self.seen: list[Position] = []

    def best_move(self, position: Position) -> Move:
        self.seen.append(position)
        return parse_move(self.token, position)


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig(name="chessticot", author="Simisticot")


@pytest.fixture
def fixed_engine() -> FixedMoveEngine:
    return FixedMoveEngine()


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def session(
    fixed_engine: FixedMoveEngine, output: io.StringIO, config: EngineConfig
) -> Session:
    return Session(fixed_engine, output, config)
