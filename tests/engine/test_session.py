"""Tests for the session dispatcher."""

import io

import pytest

from chessticot.config import EngineConfig
from chessticot.core.move import Move
from chessticot.core.notation import parse_move
from chessticot.core.position import Position
from chessticot.core.types import E2, E4
from chessticot.engine.session import (
    ComputeBestMove,
    EmitBestMove,
    EmitText,
    Halt,
    ReplacePosition,
    ResetSession,
    Session,
    actions_for,
)
from chessticot.errors import CommandParseError, NoBestMoveError, NoPositionError
from chessticot.protocol.commands import (
    Identify,
    IsReady,
    NewGame,
    SetPosition,
    StartSearch,
    StopSearch,
    Terminate,
)

_ID_LINES = "id name chessticot\nid author Simisticot\nuciok\n"


class TestActionsFor:
    def test_identify(self, config: EngineConfig) -> None:
        assert actions_for(Identify(), config) == [
            EmitText("id name chessticot"),
            EmitText("id author Simisticot"),
            EmitText("uciok"),
        ]

    def test_identify_uses_config(self) -> None:
        actions = actions_for(Identify(), EngineConfig(name="Other", author="Me"))
        assert actions[:2] == [EmitText("id name Other"), EmitText("id author Me")]

    def test_single_action_commands(self, config: EngineConfig) -> None:
        pos = Position.initial()
        assert actions_for(IsReady(), config) == [EmitText("readyok")]
        assert actions_for(NewGame(), config) == [ResetSession()]
        assert actions_for(SetPosition(pos), config) == [ReplacePosition(pos)]
        assert actions_for(StartSearch(), config) == [ComputeBestMove()]
        assert actions_for(StopSearch(), config) == [EmitBestMove()]
        assert actions_for(Terminate(), config) == [Halt()]

    def test_unknown_command(self, config: EngineConfig) -> None:
        with pytest.raises(TypeError):
            actions_for("uci", config)  # type: ignore[arg-type]


class TestSessionState:
    def test_starts_empty(self, session: Session) -> None:
        assert session.position is None
        assert session.best_move is None
        assert session.alive

    def test_position_replaced(self, session: Session) -> None:
        session.handle_line("position startpos moves e2e4")
        assert session.position == Position.initial().apply(Move(E2, E4))
        session.handle_line("position startpos")
        assert session.position == Position.initial()

    def test_go_records_best_move(self, session: Session, fixed_engine) -> None:
        session.handle_line("position startpos")
        session.handle_line("go")
        assert session.best_move == Move(E2, E4)
        assert fixed_engine.seen == [Position.initial()]

    def test_go_does_not_write(self, session: Session, output: io.StringIO) -> None:
        session.handle_line("position startpos")
        session.handle_line("go")
        assert output.getvalue() == ""

    def test_new_game_clears_state(self, session: Session) -> None:
        session.handle_line("position startpos")
        session.handle_line("go")
        session.handle_line("ucinewgame")
        assert session.position is None
        assert session.best_move is None

    def test_quit_ends_session(self, session: Session) -> None:
        assert session.handle_line("quit") is False
        assert not session.alive

    def test_blank_line_skipped(self, session: Session, output: io.StringIO) -> None:
        assert session.handle_line("   \n") is True
        assert output.getvalue() == ""


class TestSessionOutput:
    def test_uci_emits_identification(
        self, session: Session, output: io.StringIO
    ) -> None:
        session.handle_line("uci")
        assert output.getvalue() == _ID_LINES

    def test_uci_independent_of_state(
        self, session: Session, output: io.StringIO
    ) -> None:
        session.handle_line("position startpos")
        session.handle_line("go")
        session.handle_line("uci")
        assert output.getvalue() == _ID_LINES

    def test_isready(self, session: Session, output: io.StringIO) -> None:
        session.handle_line("isready")
        assert output.getvalue() == "readyok\n"

    def test_stop_formats_against_current_position(
        self, session: Session, output: io.StringIO
    ) -> None:
        session.handle_line("position startpos")
        session.handle_line("go")
        session.handle_line("stop")
        session.handle_line("stop")
        assert output.getvalue() == "bestmove e2e4\nbestmove e2e4\n"


class TestContractViolations:
    def test_stop_before_go(self, session: Session, output: io.StringIO) -> None:
        session.handle_line("position startpos")
        with pytest.raises(NoBestMoveError):
            session.handle_line("stop")
        assert output.getvalue() == ""

    def test_go_without_position(self, session: Session) -> None:
        with pytest.raises(NoPositionError):
            session.handle_line("go")

    def test_require_accessors(self, session: Session) -> None:
        with pytest.raises(NoPositionError):
            session.require_position()
        with pytest.raises(NoBestMoveError):
            session.require_best_move()

    def test_parse_error_is_fatal_by_default(self, session: Session) -> None:
        with pytest.raises(CommandParseError):
            session.handle_line("skibidi")

    def test_lenient_skips_bad_lines(
        self, fixed_engine, output: io.StringIO, caplog: pytest.LogCaptureFixture
    ) -> None:
        session = Session(fixed_engine, output, EngineConfig(lenient=True))
        assert session.handle_line("skibidi") is True
        session.handle_line("isready")
        assert output.getvalue() == "readyok\n"
        assert "Skipping unparseable line" in caplog.text

    def test_lenient_does_not_cover_contract_errors(
        self, fixed_engine, output: io.StringIO
    ) -> None:
        session = Session(fixed_engine, output, EngineConfig(lenient=True))
        with pytest.raises(NoBestMoveError):
            session.handle_line("stop")


class TestRun:
    def test_end_to_end(self, session: Session, output: io.StringIO) -> None:
        session.run(io.StringIO("uci\nposition startpos\ngo\nstop\nquit\n"))
        assert output.getvalue() == _ID_LINES + "bestmove e2e4\n"
        assert not session.alive

    def test_stops_reading_after_quit(
        self, session: Session, output: io.StringIO
    ) -> None:
        stream = io.StringIO("quit\nuci\n")
        session.run(stream)
        assert output.getvalue() == ""
        assert stream.readline() == "uci\n"

    def test_end_of_input_ends_cleanly(
        self, session: Session, output: io.StringIO
    ) -> None:
        session.run(io.StringIO("isready\n"))
        assert output.getvalue() == "readyok\n"
        assert session.alive

    def test_fen_and_startpos_sessions_agree(self, fixed_engine) -> None:
        a = Session(fixed_engine, io.StringIO())
        b = Session(fixed_engine, io.StringIO())
        a.run(
            io.StringIO(
                "position fen rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
                " moves e2e4 e7e5\n"
            )
        )
        b.run(io.StringIO("position startpos moves e2e4 e7e5\n"))
        assert a.position == b.position
        assert a.position is not None

    def test_search_sees_replayed_position(self, fixed_engine) -> None:
        fixed_engine.token = "g1f3"
        out = io.StringIO()
        session = Session(fixed_engine, out)
        session.run(io.StringIO("position startpos moves e2e4 e7e5\ngo\nstop\n"))
        expected = Position.initial()
        for token in ("e2e4", "e7e5"):
            expected = expected.apply(parse_move(token, expected))
        assert fixed_engine.seen == [expected]
        assert out.getvalue() == "bestmove g1f3\n"
