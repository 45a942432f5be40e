"""GameSession: human/engine turn flow and end-of-game handling."""

import logging
import random

import pytest

from parkchess.pieces import Color, Square
from parkchess.position import Position
from parkchess.search import Search
from parkchess.session import GameSession, GameStatus


def _session(position: Position | None = None, depth: int = 2) -> GameSession:
    search = Search(depth=depth, engine_color=Color.BLACK, jitter=0.0, rng=random.Random(5))
    return GameSession(position=position, search=search)


def test_new_session_waits_for_human():
    session = _session()
    assert session.status is GameStatus.PLAYING
    assert session.running
    assert session.engine_color is Color.BLACK
    assert not session.engine_to_move
    assert session.play_engine_move() is None
    assert session.position.history == []


def test_human_then_engine_move():
    session = _session()
    session.select(6, 4)
    session.select(4, 4)
    assert session.engine_to_move

    move = session.play_engine_move()
    assert move is not None
    assert session.position.piece_at(*move.to_square).color is Color.BLACK
    assert session.position.to_move is Color.WHITE
    assert session.position.selected_square is None
    assert len(session.position.history) == 2
    assert not session.engine_to_move


def test_clicks_during_engine_turn_are_ignored():
    session = _session()
    session.select(6, 4)
    session.select(4, 4)
    assert session.engine_to_move

    session.select(1, 4)
    session.select(3, 4)
    assert len(session.position.history) == 1
    assert session.position.selected_square is None
    assert session.position.piece_at(1, 4) is not None
    assert session.position.to_move is Color.BLACK
    assert session.engine_to_move


def test_human_without_moves_ends_game():
    session = _session(Position.from_fen("k7/8/8/8/8/1q6/8/K7 w - - 0 1"))
    assert not session.position.is_in_check(Color.WHITE)
    assert session.status is GameStatus.NO_MOVES
    assert session.winner is None
    assert not session.running
    assert not session.engine_to_move


def test_check_is_reported(caplog):
    session = _session(Position.from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1"))
    with caplog.at_level(logging.INFO, logger="parkchess.session"):
        session.select(7, 0)
        session.select(0, 0)
    assert session.status is GameStatus.CHECK
    assert session.running
    assert "Black is in CHECK!" in caplog.text


def test_human_checkmate_ends_game(caplog):
    session = _session(Position.from_fen("k7/8/1K6/8/8/8/8/2Q5 w - - 0 1"))
    with caplog.at_level(logging.INFO, logger="parkchess.session"):
        session.select(7, 2)
        session.select(0, 2)
    assert session.status is GameStatus.CHECKMATE
    assert session.winner is Color.WHITE
    assert not session.running
    assert not session.engine_to_move
    assert session.play_engine_move() is None
    assert "CHECKMATE! White wins!" in caplog.text

    # Clicks after the end are ignored.
    session.select(2, 1)
    assert session.position.selected_square is None


def test_engine_without_moves_ends_game():
    session = _session(Position.from_fen("k7/2Q5/1K6/8/8/8/8/8 b - - 0 1"))
    assert session.engine_to_move
    assert session.play_engine_move() is None
    assert session.status is GameStatus.NO_MOVES
    assert session.winner is None
    assert not session.running


def test_mated_position_is_detected_on_creation():
    fen = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w - - 1 3"
    session = _session(Position.from_fen(fen))
    assert session.status is GameStatus.CHECKMATE
    assert session.winner is Color.BLACK


def test_stop_and_new_game():
    session = _session()
    session.select(6, 4)
    session.select(4, 4)
    session.stop()
    assert session.status is GameStatus.STOPPED
    assert session.play_engine_move() is None

    session.new_game()
    assert session.status is GameStatus.PLAYING
    assert session.position.history == []
    assert session.position.piece_at(6, 4) is not None


def test_engine_and_human_need_different_colors():
    with pytest.raises(ValueError):
        GameSession(search=Search(engine_color=Color.WHITE), human_color=Color.WHITE)


def test_engine_move_is_replayed_through_selection():
    session = _session(Position.from_fen("3rk3/8/8/8/8/8/8/3Q2K1 b - - 0 1"), depth=2)
    move = session.play_engine_move()
    assert (move.from_square, move.to_square) == (Square(0, 3), Square(7, 3))
    assert session.position.captured_by_black == [move.captured]
    assert session.status is GameStatus.CHECK
