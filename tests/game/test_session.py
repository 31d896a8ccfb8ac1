"""Tests for GameSession - history, undo and listeners."""

import logging

import pytest

from rookery.core.enums import Color, GameStatus
from rookery.core.move import Move
from rookery.core.state import GameState
from rookery.core.types import Position, parse_square
from rookery.game.session import GameSession


def _mv(text: str) -> Move:
    return Move(parse_square(text[:2]), parse_square(text[2:4]))


def _submit_all(session: GameSession, *moves: str) -> None:
    for text in moves:
        assert session.submit_move(_mv(text)), text


class TestNewGame:
    def test_defaults(self) -> None:
        session = GameSession()
        assert session.turn == Color.WHITE
        assert session.status == GameStatus.PLAYING
        assert session.ply_count == 0
        assert len(session.legal_moves()) == 20

    def test_custom_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        session = GameSession(fen)
        assert session.turn == Color.BLACK

    def test_new_game_resets(self) -> None:
        session = GameSession()
        _submit_all(session, "e2e4")
        session.new_game()
        assert session.ply_count == 0
        assert session.turn == Color.WHITE


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        session = GameSession()
        assert session.submit_move(_mv("e2e4"))
        assert session.turn == Color.BLACK
        assert session.ply_count == 1

    def test_illegal_move_rejected(self, caplog: pytest.LogCaptureFixture) -> None:
        session = GameSession()
        with caplog.at_level(logging.WARNING, logger="rookery.game.session"):
            assert not session.submit_move(_mv("e2e5"))
        assert session.turn == Color.WHITE
        assert "Rejected move" in caplog.text

    def test_off_board_move_rejected(self) -> None:
        session = GameSession()
        assert not session.submit_move(Move(Position(-1, 4), Position(-1, 5)))
        assert not session.submit_move(Move(Position(8, 0), Position(7, 0)))
        assert session.ply_count == 0

    def test_legal_moves_from_origin(self) -> None:
        session = GameSession()
        targets = {m.to_pos.name for m in session.legal_moves(parse_square("g1"))}
        assert targets == {"f3", "h3"}

    def test_move_event_fires(self) -> None:
        session = GameSession()
        seen: list[str] = []
        session.events.on_move.append(lambda move, state: seen.append(str(move)))
        _submit_all(session, "e2e4", "e7e5")
        assert seen == ["e2e4", "e7e5"]

    def test_game_over_event_on_checkmate(self) -> None:
        session = GameSession()
        finished: list[GameState] = []
        session.events.on_game_over.append(finished.append)
        _submit_all(session, "f2f3", "e7e5", "g2g4", "d8h4")
        assert session.is_game_over
        assert len(finished) == 1
        assert finished[0].winner == Color.BLACK

    def test_no_moves_after_game_over(self) -> None:
        session = GameSession()
        _submit_all(session, "f2f3", "e7e5", "g2g4", "d8h4")
        assert not session.submit_move(_mv("e1f2"))
        assert session.ply_count == 4


class TestUndo:
    def test_undo_restores_previous_snapshot(self) -> None:
        session = GameSession()
        start = session.state
        _submit_all(session, "e2e4")
        undone = session.undo_move()
        assert undone == _mv("e2e4")
        assert session.state is start
        assert session.ply_count == 0

    def test_undo_empty_returns_none(self) -> None:
        assert GameSession().undo_move() is None

    def test_undo_after_mate_reopens_game(self) -> None:
        session = GameSession()
        _submit_all(session, "f2f3", "e7e5", "g2g4", "d8h4")
        session.undo_move()
        assert not session.is_game_over
        assert session.turn == Color.BLACK

    def test_history_snapshots_are_independent(self) -> None:
        session = GameSession()
        _submit_all(session, "e2e4", "d7d5", "e4d5")
        history = session.history
        assert len(history) == 4
        assert len({id(s.board) for s in history}) == 4
        assert history[0].board[parse_square("e2")] is not None
        assert len(history[-1].captured_pieces.of_color(Color.BLACK)) == 1
