"""Engine configuration and its command-line front end."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from dataclasses import dataclass

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable start-up settings for one engine process.

    Args:
        name: Reported in ``id name``.
        author: Reported in ``id author``.
        search_depth: Plies searched by the bundled engine on ``go``.
        lenient: Log and skip unparseable lines instead of aborting.
        log_level: Threshold for diagnostics written to stderr.
    """

    name: str = "chessticot"
    author: str = "Simisticot"
    search_depth: int = 2
    lenient: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if not self.name.strip() or not self.author.strip():
            raise ValueError("Engine name and author must not be blank")
        if self.search_depth < 1:
            raise ValueError(f"Search depth must be >= 1: {self.search_depth}")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_args(cls, argv: Sequence[str] | None = None) -> EngineConfig:
        """Build a config from command-line arguments (``sys.argv[1:]`` if None)."""
        args = build_arg_parser().parse_args(argv)
        return cls(
            name=args.name,
            author=args.author,
            search_depth=args.depth,
            lenient=args.lenient,
            log_level=args.log_level,
        )


def build_arg_parser() -> argparse.ArgumentParser:
    defaults = EngineConfig()
    parser = argparse.ArgumentParser(
        prog="chessticot",
        description="UCI chess engine speaking over stdin/stdout.",
    )
    parser.add_argument("--name", default=defaults.name, help="engine name")
    parser.add_argument("--author", default=defaults.author, help="engine author")
    parser.add_argument(
        "--depth",
        type=int,
        default=defaults.search_depth,
        help="search depth in plies",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="skip unparseable lines instead of exiting",
    )
    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        type=str.upper,
        choices=_LOG_LEVELS,
        help="stderr log threshold",
    )
    return parser
