"""
Park Chess engine package.

This package implements the rules core and computer opponent of a casual
human-versus-computer chess game: a mailbox position with two-phase legal
move generation, check and checkmate detection, and a fixed-depth minimax
search with alpha-beta pruning.

Modules:
    constants — Board geometry, piece values, bonuses and search parameters
    pieces    — Color, PieceKind, Piece, Square, Move and GameState values
    position  — Position: selection protocol, move generation, check/mate
    evaluate  — Static evaluation from the engine color's perspective
    search    — Minimax with alpha-beta pruning and randomized tie-breaks
    session   — GameSession: human/engine turn scheduling
"""

from parkchess.pieces import Color, GameState, Move, Piece, PieceKind, Square
from parkchess.position import Position
from parkchess.search import Search, SearchStats
from parkchess.session import GameSession, GameStatus

__all__ = [
    "Color",
    "GameSession",
    "GameState",
    "GameStatus",
    "Move",
    "Piece",
    "PieceKind",
    "Position",
    "Search",
    "SearchStats",
    "Square",
]
