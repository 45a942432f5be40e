"""
Game session: turn scheduling between a human player and the engine.

A GameSession owns one live Position and one Search. The presentation layer
receives the session explicitly (see web.app.create_app) and forwards board
clicks to select(); when it is the engine's turn it calls play_engine_move(),
which asks the search for a move and replays it through the same two-step
selection protocol a human uses. There is no process-wide "current game";
whoever builds the UI decides which session it talks to.
"""

from __future__ import annotations

import logging
from enum import Enum

from parkchess.pieces import Color, Move
from parkchess.position import Position
from parkchess.search import Search

_log = logging.getLogger(__name__)


class GameStatus(str, Enum):
    PLAYING = "playing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    NO_MOVES = "no_moves"   # side to move has no move while not in check
    STOPPED = "stopped"


class GameSession:
    """
    One human-versus-engine game.

    Attributes:
        position:    The live position. Only this session writes to it.
        search:      Engine for the color opposite human_color.
        human_color: Side the human plays.
        status:      Status after the most recent ply.
    """

    def __init__(
        self,
        position: Position | None = None,
        search: Search | None = None,
        human_color: Color = Color.WHITE,
    ) -> None:
        self.human_color = human_color
        self.position = position or Position()
        self.search = search or Search(engine_color=human_color.opponent)
        if self.search.engine_color is human_color:
            raise ValueError("engine and human cannot play the same color")
        self.status = GameStatus.PLAYING
        self._refresh_status()

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self.status in (GameStatus.PLAYING, GameStatus.CHECK)

    @property
    def engine_color(self) -> Color:
        return self.search.engine_color

    @property
    def engine_to_move(self) -> bool:
        return self.running and self.position.to_move is self.engine_color

    @property
    def winner(self) -> Color | None:
        if self.status is GameStatus.CHECKMATE:
            return self.position.to_move.opponent
        return None

    # -----------------------------------------------------------------------
    # Commands
    # -----------------------------------------------------------------------

    def select(self, row: int, col: int) -> None:
        """
        Forward a board click to the position while the game runs and it is
        the human's turn. Clicks during the engine's turn are ignored.
        """
        if not self.running or self.position.to_move is not self.human_color:
            return
        ply = len(self.position.history)
        self.position.select(row, col)
        if len(self.position.history) != ply:
            self._refresh_status()

    def play_engine_move(self) -> Move | None:
        """
        Let the engine make its move if it is the engine's turn.

        Returns:
            The move played, or None when it was not the engine's turn or the
            engine had no legal move. In the latter case the game ends.
        """
        if not self.engine_to_move:
            return None

        move = self.search.find_best_move(self.position)
        if move is None:
            if self.position.is_in_checkmate(self.engine_color):
                self.status = GameStatus.CHECKMATE
            else:
                self.status = GameStatus.NO_MOVES
            _log.info("Engine has no legal move: %s", self.status.value)
            return None

        _log.info(
            "Engine moved from [%d,%d] to [%d,%d] (%s)",
            move.from_square.row,
            move.from_square.col,
            move.to_square.row,
            move.to_square.col,
            move.uci(),
        )
        self.position.select(move.from_square.row, move.from_square.col)
        self.position.select(move.to_square.row, move.to_square.col)
        self._refresh_status()
        return move

    def stop(self) -> None:
        self.status = GameStatus.STOPPED

    def new_game(self) -> None:
        self.position = Position()
        self.status = GameStatus.PLAYING
        self._refresh_status()

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _refresh_status(self) -> None:
        to_move = self.position.to_move
        if self.position.is_in_checkmate(to_move):
            self.status = GameStatus.CHECKMATE
            _log.info("CHECKMATE! %s wins!", to_move.opponent.value.capitalize())
        elif self.position.is_in_check(to_move):
            self.status = GameStatus.CHECK
            _log.info("%s is in CHECK!", to_move.value.capitalize())
        elif to_move is self.human_color and not self.position.possible_moves_for_color(to_move):
            # The engine side is handled when it is asked to move.
            self.status = GameStatus.NO_MOVES
            _log.info("%s has no legal move", to_move.value.capitalize())
        else:
            self.status = GameStatus.PLAYING
