"""
Search entry point: fixed-depth minimax with alpha-beta pruning, an immediate
capture bonus at the root, and randomized tie-breaking.

The public surface is Search.find_best_move(). The caller applies the
returned move itself (by replaying it through Position.select), so the
search never touches the caller's live position. Every node works on its
own Position.copy(); no mutable board crosses a recursive call.

Scoring at the root:

    score(move) = minimax(child, depth - 1, -inf, +inf, maximizing=False)
                  + CAPTURE_BONUS_FACTOR * CAPTURE_VALUES[captured]
                  + uniform jitter in [0, jitter)

The capture bonus is an immediate-reward term layered on top of the
recursive score. It biases the engine toward captures that a shallow fixed
depth might otherwise undervalue. The jitter is strictly smaller than one
centipawn, so it only separates moves whose other components tie; any moves
that still tie exactly are chosen between uniformly at random.

There is no move ordering: moves are searched in generation order (board
scanned row-major, then per-piece generation order). Pruning effectiveness
therefore depends on that order alone.

Threading model:
    None. find_best_move() blocks until the whole tree is searched. There is
    no time limit and no cancellation.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass

from parkchess.constants import CAPTURE_BONUS_FACTOR, CAPTURE_VALUES, JITTER, SEARCH_DEPTH
from parkchess.evaluate import evaluate_position
from parkchess.pieces import Color, Move
from parkchess.position import Position

_log = logging.getLogger(__name__)


@dataclass
class SearchStats:
    """
    Counters for the most recent find_best_move() call.

    Attributes:
        node_count:  Positions visited by minimax, leaves included.
        leaf_count:  Positions scored by the static evaluation.
        best_score:  Root score of the chosen move (capture bonus and jitter
                     included).
        candidates:  Number of root moves that tied for best_score.
    """

    node_count: int = 0
    leaf_count: int = 0
    best_score: float = -math.inf
    candidates: int = 0


def capture_bonus(move: Move) -> float:
    """Immediate reward for the piece `move` captures, 0 for a quiet move."""
    if move.captured is None:
        return 0.0
    return CAPTURE_VALUES[move.captured.kind] * CAPTURE_BONUS_FACTOR


class Search:
    """
    Computer opponent for one color.

    Attributes:
        depth:        Search depth in plies, counted from the root move.
        engine_color: Color the engine plays; the evaluation is from its
                      perspective.
        jitter:       Upper bound of the uniform tie-break noise. 0 makes the
                      root scores deterministic.
        rng:          Source of jitter and of the final tie-break choice.
        stats:        Counters of the last search.
    """

    def __init__(
        self,
        depth: int = SEARCH_DEPTH,
        engine_color: Color = Color.BLACK,
        jitter: float = JITTER,
        rng: random.Random | None = None,
    ) -> None:
        if depth < 1:
            raise ValueError(f"search depth must be at least 1, got {depth}")
        self.depth = depth
        self.engine_color = engine_color
        self.jitter = jitter
        self.rng = rng or random.Random()
        self.stats = SearchStats()

    def find_best_move(self, position: Position) -> Move | None:
        """
        Choose a move for the engine color.

        Args:
            position: The live position. Not modified; every candidate is
                      tried on a copy.

        Returns:
            The chosen move, or None when the engine color has no legal move
            (checkmate, or the stalemate case the engine does not report).
            None ends the game; it is not an error to retry.
        """
        self.stats = SearchStats()
        moves = position.possible_moves_for_color(self.engine_color)
        if not moves:
            return None

        best_score = -math.inf
        best_moves: list[Move] = []

        for move in moves:
            child = position.copy()
            child.apply_move(move)
            score = self.minimax(child, self.depth - 1, -math.inf, math.inf, False)
            score += capture_bonus(move)
            if self.jitter:
                score += self.rng.random() * self.jitter

            if score > best_score:
                best_score = score
                best_moves = [move]
            elif score == best_score:
                best_moves.append(move)

        chosen = self.rng.choice(best_moves)
        self.stats.best_score = best_score
        self.stats.candidates = len(best_moves)
        _log.debug(
            "search depth=%d moves=%d nodes=%d leaves=%d best=%s score=%.2f ties=%d",
            self.depth,
            len(moves),
            self.stats.node_count,
            self.stats.leaf_count,
            chosen.uci(),
            best_score,
            len(best_moves),
        )
        return chosen

    def minimax(
        self,
        position: Position,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        prune: bool = True,
    ) -> float:
        """
        Minimax over legal moves with optional alpha-beta pruning.

        Args:
            position:   Node to search. Children are searched on copies, so
                        this position is not modified.
            depth:      Remaining depth in plies. 0 returns the static
                        evaluation.
            alpha:      Best score the maximizing side can already guarantee.
            beta:       Best score the minimizing side can already guarantee.
            maximizing: True when the engine color moves at this node, False
                        when its opponent does.
            prune:      Stop searching siblings once beta <= alpha. With
                        prune=False the full tree is searched; the returned
                        score is the same either way.

        Returns:
            Score from the engine color's perspective.

        A node where the side to move has no legal move is scored by the
        static evaluation. Checkmate therefore counts only through the
        material left on the board, not as a decisive win or loss.
        """
        self.stats.node_count += 1

        if depth == 0:
            self.stats.leaf_count += 1
            return evaluate_position(position, self.engine_color)

        color = self.engine_color if maximizing else self.engine_color.opponent
        moves = position.possible_moves_for_color(color)
        if not moves:
            self.stats.leaf_count += 1
            return evaluate_position(position, self.engine_color)

        if maximizing:
            best = -math.inf
            for move in moves:
                child = position.copy()
                child.apply_move(move)
                score = self.minimax(child, depth - 1, alpha, beta, False, prune)
                best = max(best, score)
                alpha = max(alpha, score)
                if prune and beta <= alpha:
                    break
            return best

        best = math.inf
        for move in moves:
            child = position.copy()
            child.apply_move(move)
            score = self.minimax(child, depth - 1, alpha, beta, True, prune)
            best = min(best, score)
            beta = min(beta, score)
            if prune and beta <= alpha:
                break
        return best
