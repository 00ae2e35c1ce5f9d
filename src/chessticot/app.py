"""Application entry point."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from chessticot.config import EngineConfig
from chessticot.engine import PythonSearchEngine, SearchLimits, Session

_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int | str) -> None:
    """Send diagnostics to stderr; stdout is reserved for protocol lines."""
    logging.basicConfig(level=level, stream=sys.stderr, format=_LOG_FORMAT)


def run_engine(
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Run one UCI session and return the process exit status."""
    config = EngineConfig.from_args(argv)
    configure_logging(config.log_level_value)

    engine = PythonSearchEngine(SearchLimits(max_depth=config.search_depth))
    session = Session(engine, stdout if stdout is not None else sys.stdout, config)
    _LOGGER.info("Starting %s (depth %d)", config.name, config.search_depth)
    session.run(stdin if stdin is not None else sys.stdin)
    return 0


def main() -> None:
    """Launch the engine on the process's standard streams."""
    sys.exit(run_engine())


if __name__ == "__main__":
    main()
