"""
Position: the single source of truth for the board and the legal moves on it.

A Position owns an 8x8 grid of optional pieces plus the turn, selection,
history and capture bookkeeping of a game. It advances exactly one ply per
completed selection pair (select a piece, then select a destination).

Move generation is two-phase:

1. Pseudo-legal generation per piece kind. This follows the piece's movement
   shape and the occupancy of the board but ignores king safety.
2. Legality filter. Each pseudo-legal move is simulated on a throwaway grid
   and kept only if the mover's king is not attacked afterwards. "Attacked"
   means some opponent piece's pseudo-legal list contains the king's square.

This enforces "a move must not leave one's own king in check" without any
per-piece pin or check special cases. The cost is O(moves x opponent moves)
per query, which is fine at board scale.

The generator deliberately stops short of the full rules: no castling, no
en passant, no promotion, and stalemate is never reported.

The pseudo-legal and attack helpers are module-level functions over a bare
grid so that simulation never needs a full Position.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator

import chess

from parkchess.constants import (
    BACK_RANK_ORDER,
    BISHOP_DIRECTIONS,
    BLACK_BACK_ROW,
    BLACK_PAWN_ROW,
    BOARD_SIZE,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    QUEEN_DIRECTIONS,
    ROOK_DIRECTIONS,
    WHITE_BACK_ROW,
    WHITE_PAWN_ROW,
)
from parkchess.pieces import Color, GameState, Move, Piece, PieceKind, Square

_log = logging.getLogger(__name__)

Grid = list[list[Piece | None]]
BoardSnapshot = tuple[tuple[Piece | None, ...], ...]


# ---------------------------------------------------------------------------
# Grid helpers
# ---------------------------------------------------------------------------


def _on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def empty_grid() -> Grid:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def initial_grid() -> Grid:
    """Standard starting array: White on rows 6-7, Black on rows 0-1."""
    grid = empty_grid()
    for col, kind in enumerate(BACK_RANK_ORDER):
        grid[WHITE_BACK_ROW][col] = Piece(kind, Color.WHITE)
        grid[WHITE_PAWN_ROW][col] = Piece(PieceKind.PAWN, Color.WHITE)
        grid[BLACK_BACK_ROW][col] = Piece(kind, Color.BLACK)
        grid[BLACK_PAWN_ROW][col] = Piece(PieceKind.PAWN, Color.BLACK)
    return grid


def copy_grid(grid: Grid) -> Grid:
    # Pieces are immutable, so copying the rows is a full value copy.
    return [row[:] for row in grid]


# ---------------------------------------------------------------------------
# Pseudo-legal generation
# ---------------------------------------------------------------------------


def _pawn_targets(grid: Grid, row: int, col: int, color: Color) -> list[Square]:
    targets: list[Square] = []
    step = color.forward
    start_row = WHITE_PAWN_ROW if color is Color.WHITE else BLACK_PAWN_ROW

    next_row = row + step
    if _on_board(next_row, col) and grid[next_row][col] is None:
        targets.append(Square(next_row, col))
        two_row = row + 2 * step
        if row == start_row and grid[two_row][col] is None:
            targets.append(Square(two_row, col))

    for dc in (-1, 1):
        r, c = row + step, col + dc
        if _on_board(r, c):
            target = grid[r][c]
            if target is not None and target.color is not color:
                targets.append(Square(r, c))

    return targets


def _step_targets(
    grid: Grid, row: int, col: int, color: Color, offsets: tuple[tuple[int, int], ...]
) -> list[Square]:
    targets: list[Square] = []
    for dr, dc in offsets:
        r, c = row + dr, col + dc
        if _on_board(r, c):
            target = grid[r][c]
            if target is None or target.color is not color:
                targets.append(Square(r, c))
    return targets


def _ray_targets(
    grid: Grid, row: int, col: int, color: Color, directions: tuple[tuple[int, int], ...]
) -> list[Square]:
    targets: list[Square] = []
    for dr, dc in directions:
        r, c = row + dr, col + dc
        while _on_board(r, c):
            target = grid[r][c]
            if target is None:
                targets.append(Square(r, c))
            else:
                if target.color is not color:
                    targets.append(Square(r, c))
                break
            r += dr
            c += dc
    return targets


_GENERATORS: dict[PieceKind, Callable[[Grid, int, int, Color], list[Square]]] = {
    PieceKind.PAWN:   _pawn_targets,
    PieceKind.KNIGHT: lambda g, r, c, color: _step_targets(g, r, c, color, KNIGHT_OFFSETS),
    PieceKind.BISHOP: lambda g, r, c, color: _ray_targets(g, r, c, color, BISHOP_DIRECTIONS),
    PieceKind.ROOK:   lambda g, r, c, color: _ray_targets(g, r, c, color, ROOK_DIRECTIONS),
    PieceKind.QUEEN:  lambda g, r, c, color: _ray_targets(g, r, c, color, QUEEN_DIRECTIONS),
    PieceKind.KING:   lambda g, r, c, color: _step_targets(g, r, c, color, KING_OFFSETS),
}


def pseudo_legal_targets(grid: Grid, row: int, col: int) -> list[Square]:
    """
    Destinations reachable by the piece on (row, col) by movement shape alone.

    Args:
        grid: Board to generate on. Not modified.
        row:  Source row.
        col:  Source column.

    Returns:
        Destination squares in generation order; empty if the square is empty.
    """
    piece = grid[row][col]
    if piece is None:
        return []
    return _GENERATORS[piece.kind](grid, row, col, piece.color)


# ---------------------------------------------------------------------------
# Attack and king-safety helpers
# ---------------------------------------------------------------------------


def find_king(grid: Grid, color: Color) -> Square | None:
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            piece = grid[row][col]
            if piece is not None and piece.kind is PieceKind.KING and piece.color is color:
                return Square(row, col)
    return None


def is_square_attacked(grid: Grid, square: Square, by_color: Color) -> bool:
    """True if any `by_color` piece has `square` in its pseudo-legal list."""
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            piece = grid[row][col]
            if piece is not None and piece.color is by_color:
                if square in pseudo_legal_targets(grid, row, col):
                    return True
    return False


def leaves_king_safe(grid: Grid, from_square: Square, to_square: Square) -> bool:
    """
    Simulate from_square -> to_square on a copy of `grid` and report whether
    the mover's king is left unattacked.
    """
    piece = grid[from_square.row][from_square.col]
    assert piece is not None, f"no piece on {from_square.name}"

    sim = copy_grid(grid)
    sim[to_square.row][to_square.col] = piece
    sim[from_square.row][from_square.col] = None

    king = find_king(sim, piece.color)
    assert king is not None, f"{piece.color.value} king missing from the board"
    return not is_square_attacked(sim, king, piece.color.opponent)


# ---------------------------------------------------------------------------
# Position
# ---------------------------------------------------------------------------


class Position:
    """
    Aggregate root for one game: board, side to move, selection state,
    move history and captured-piece lists.

    The presentation layer mutates a Position only through select(). The
    search mutates only its own copies, through apply_move().

    Attributes:
        to_move:           Color whose turn it is.
        selected_square:   Square picked by the first half of a selection
                           pair, or None.
        valid_moves:       Legal destinations of the selected piece.
        history:           Executed moves, oldest first. Append-only.
        captured_by_white: Black pieces White has taken. Append-only.
        captured_by_black: White pieces Black has taken. Append-only.
    """

    def __init__(self, grid: Grid | None = None, to_move: Color = Color.WHITE) -> None:
        self._grid: Grid = copy_grid(grid) if grid is not None else initial_grid()
        self.to_move: Color = to_move
        self.selected_square: Square | None = None
        self.valid_moves: list[Square] = []
        self.history: list[Move] = []
        self.captured_by_white: list[Piece] = []
        self.captured_by_black: list[Piece] = []

    @classmethod
    def from_fen(cls, fen: str) -> Position:
        """
        Build a position from the placement and side-to-move fields of a FEN.

        Intended for fixtures and benchmarks. Castling rights, the en passant
        square and the move clocks are ignored because the generator does not
        model them.

        Raises:
            ValueError: if python-chess rejects the FEN.
        """
        board = chess.Board(fen)
        grid = empty_grid()
        for sq, p in board.piece_map().items():
            square = Square.from_chess(sq)
            grid[square.row][square.col] = Piece.from_symbol(p.symbol())
        return cls(grid, Color.WHITE if board.turn == chess.WHITE else Color.BLACK)

    def copy(self) -> Position:
        """Independent value copy; nothing mutable is shared with self."""
        other = Position.__new__(Position)
        other._grid = copy_grid(self._grid)
        other.to_move = self.to_move
        other.selected_square = self.selected_square
        other.valid_moves = list(self.valid_moves)
        other.history = list(self.history)
        other.captured_by_white = list(self.captured_by_white)
        other.captured_by_black = list(self.captured_by_black)
        return other

    # -----------------------------------------------------------------------
    # Read-only views
    # -----------------------------------------------------------------------

    def piece_at(self, row: int, col: int) -> Piece | None:
        if not _on_board(row, col):
            return None
        return self._grid[row][col]

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares in row-major order, optionally for one color."""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self._grid[row][col]
                if piece is not None and (color is None or piece.color is color):
                    yield Square(row, col), piece

    def get_board(self) -> BoardSnapshot:
        return tuple(tuple(row) for row in self._grid)

    def get_game_state(self) -> GameState:
        """
        Snapshot for the UI. Check and checkmate are computed on demand for
        the side to move; stalemate and en passant are reserved fields.
        """
        in_check = self.is_in_check(self.to_move)
        return GameState(
            current_player=self.to_move,
            selected_square=self.selected_square,
            valid_moves=tuple(self.valid_moves),
            move_history=tuple(self.history),
            captured_by_white=tuple(self.captured_by_white),
            captured_by_black=tuple(self.captured_by_black),
            is_check=in_check,
            is_checkmate=in_check and not self._has_legal_move(self.to_move),
        )

    def render(self) -> str:
        """Text diagram, rank 8 on top, e.g. for logs and the benchmark."""
        lines = []
        for row in range(BOARD_SIZE):
            cells = [p.symbol() if p is not None else "." for p in self._grid[row]]
            lines.append(f"{BOARD_SIZE - row} " + " ".join(cells))
        lines.append("  " + " ".join(chess.FILE_NAMES))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Position(to_move={self.to_move.value}, ply={len(self.history)})\n{self.render()}"

    # -----------------------------------------------------------------------
    # Selection protocol
    # -----------------------------------------------------------------------

    def select(self, row: int, col: int) -> None:
        """
        Drive piece selection and move execution from a board click.

        - Off-board coordinates are ignored.
        - Clicking a piece of the side to move selects it and stores its
          legal destinations.
        - Clicking one of those destinations while a piece is selected
          executes the move and clears the selection.
        - Anything else is ignored; the current selection is kept.
        """
        if not _on_board(row, col):
            return

        piece = self._grid[row][col]
        if piece is not None and piece.color is self.to_move:
            self.selected_square = Square(row, col)
            self.valid_moves = self.legal_moves_from(row, col)
        elif self.selected_square is not None and Square(row, col) in self.valid_moves:
            move = Move(self.selected_square, Square(row, col), captured=piece)
            self.apply_move(move)
            _log.debug("%s played %s", self.to_move.opponent.value, move.uci())
            self.selected_square = None
            self.valid_moves = []

    # -----------------------------------------------------------------------
    # Move generation
    # -----------------------------------------------------------------------

    def legal_moves_from(self, row: int, col: int) -> list[Square]:
        """
        Legal destinations of the piece on (row, col): pseudo-legal moves that
        do not leave its own king attacked. Empty for an empty square.
        """
        if not _on_board(row, col) or self._grid[row][col] is None:
            return []
        source = Square(row, col)
        return [
            target
            for target in pseudo_legal_targets(self._grid, row, col)
            if leaves_king_safe(self._grid, source, target)
        ]

    def is_legal_move(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        """True if the side to move owns the piece on the source square and
        (to_row, to_col) is one of its legal destinations."""
        if not _on_board(from_row, from_col):
            return False
        piece = self._grid[from_row][from_col]
        if piece is None or piece.color is not self.to_move:
            return False
        return Square(to_row, to_col) in self.legal_moves_from(from_row, from_col)

    def possible_moves_for_color(self, color: Color) -> list[Move]:
        """
        Every legal move of `color`, board scanned row-major and each piece's
        destinations in generation order. Used by the search at every node.
        """
        moves: list[Move] = []
        for square, _ in self.pieces(color):
            for target in self.legal_moves_from(square.row, square.col):
                moves.append(Move(square, target, captured=self._grid[target.row][target.col]))
        return moves

    def _has_legal_move(self, color: Color) -> bool:
        return any(self.legal_moves_from(sq.row, sq.col) for sq, _ in self.pieces(color))

    def apply_move(self, move: Move) -> None:
        """
        Execute one ply without re-validating it.

        The move must come from this position's own generation (the selection
        protocol or possible_moves_for_color). Any occupant of the destination
        is recorded in the mover's captured list and discarded.
        """
        piece = self._grid[move.from_square.row][move.from_square.col]
        assert piece is not None, f"no piece on {move.from_square.name}"

        target = self._grid[move.to_square.row][move.to_square.col]
        if target is not None:
            if piece.color is Color.WHITE:
                self.captured_by_white.append(target)
            else:
                self.captured_by_black.append(target)
        if move.captured != target:
            move = Move(move.from_square, move.to_square, captured=target)

        self._grid[move.to_square.row][move.to_square.col] = piece
        self._grid[move.from_square.row][move.from_square.col] = None
        self.history.append(move)
        self.to_move = self.to_move.opponent

    # -----------------------------------------------------------------------
    # Check and checkmate
    # -----------------------------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        king = find_king(self._grid, color)
        assert king is not None, f"{color.value} king missing from the board"
        return is_square_attacked(self._grid, king, color.opponent)

    def is_in_checkmate(self, color: Color) -> bool:
        """In check with no legal move that leaves the king safe."""
        return self.is_in_check(color) and not self._has_legal_move(color)
