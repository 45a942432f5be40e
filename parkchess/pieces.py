"""
Value types shared by the position, evaluation and search modules.

Everything here is immutable. A square's occupant is replaced, never
mutated, when a move is executed, so a Piece can be shared freely between
a live position and the copies the search makes of it.

Coordinates are (row, col) with row 0 at Black's back rank (rank 8) and
col 0 on the a-file. python-chess is used only to turn those coordinates
and piece kinds into the usual display strings ("e2", "N", "♞").
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import NamedTuple

import chess


class Color(Enum):
    """Side of the board. Exactly one color is to move at any time."""

    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> Color:
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Row delta of a pawn step: White advances toward row 0."""
        return -1 if self is Color.WHITE else 1

    def to_chess(self) -> chess.Color:
        return chess.WHITE if self is Color.WHITE else chess.BLACK


class PieceKind(IntEnum):
    """
    Piece type. Values match the python-chess piece type constants so a
    PieceKind can be handed to chess.Piece directly for symbol lookup.
    """

    PAWN = chess.PAWN
    KNIGHT = chess.KNIGHT
    BISHOP = chess.BISHOP
    ROOK = chess.ROOK
    QUEEN = chess.QUEEN
    KING = chess.KING


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    color: Color

    def symbol(self) -> str:
        """FEN letter: upper case for White, lower case for Black."""
        return chess.Piece(int(self.kind), self.color.to_chess()).symbol()

    def unicode_symbol(self) -> str:
        return chess.Piece(int(self.kind), self.color.to_chess()).unicode_symbol()

    @classmethod
    def from_symbol(cls, symbol: str) -> Piece:
        p = chess.Piece.from_symbol(symbol)
        return cls(PieceKind(p.piece_type), Color.WHITE if p.color == chess.WHITE else Color.BLACK)


class Square(NamedTuple):
    row: int
    col: int

    def to_chess(self) -> chess.Square:
        """python-chess square index (a1 = 0). Row 7 is rank 1."""
        return chess.square(self.col, 7 - self.row)

    @property
    def name(self) -> str:
        """Coordinate name for display, e.g. Square(6, 4).name == "e2"."""
        return chess.square_name(self.to_chess())

    @classmethod
    def from_chess(cls, square: chess.Square) -> Square:
        return cls(7 - chess.square_rank(square), chess.square_file(square))

    @classmethod
    def from_name(cls, name: str) -> Square:
        return cls.from_chess(chess.parse_square(name))


@dataclass(frozen=True)
class Move:
    """
    One ply. `captured` is set if and only if the destination square was
    occupied before the move.

    The en passant, castling and promotion fields are reserved: the move
    generator never produces such moves, so they always hold their defaults.
    """

    from_square: Square
    to_square: Square
    captured: Piece | None = None
    is_en_passant: bool = False
    is_castling: bool = False
    promotion: PieceKind | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def uci(self) -> str:
        """Coordinate pair such as "e2e4", used for display and logging."""
        return self.from_square.name + self.to_square.name

    def __str__(self) -> str:
        return self.uci()


@dataclass(frozen=True)
class GameState:
    """
    Read-only snapshot handed to the presentation layer.

    is_stalemate and en_passant_target are reserved and never computed;
    they always read False and None.
    """

    current_player: Color
    selected_square: Square | None
    valid_moves: tuple[Square, ...]
    move_history: tuple[Move, ...]
    captured_by_white: tuple[Piece, ...]
    captured_by_black: tuple[Piece, ...]
    is_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False
    en_passant_target: Square | None = field(default=None)
