"""
Static position evaluation: material plus simple positional bonuses.

The search needs a numeric score for any position so it can compare the
leaves of its tree. This evaluation is deliberately small:

- Material: every piece is worth its PIECE_VALUES entry. The king carries a
  large finite value so that positions with a missing king (which legal
  play never reaches) would still compare sensibly.
- Pawns gain a bonus per row advanced toward the enemy back rank.
- Knights and bishops gain a bonus for being near the centre and a flat
  bonus once they have left their first two rows.
- Rooks gain a bonus on a file with no pawns of either color.

Unlike a negamax evaluation, the score is always from the engine color's
perspective: the search maximizes at engine-color nodes and minimizes at
opponent nodes. A positive score favors the engine color.

Terminal nodes (checkmate, or the unreported stalemate case) get no special
score. They are valued by this function like any other leaf.
"""

from parkchess.constants import (
    BLACK_PAWN_ROW,
    BOARD_CENTER,
    BOARD_SIZE,
    CENTER_BONUS,
    CENTER_DISTANCE_BASE,
    DEVELOPED_BONUS,
    OPEN_FILE_BONUS,
    PAWN_ADVANCE_BONUS,
    PIECE_VALUES,
    WHITE_PAWN_ROW,
)
from parkchess.pieces import Color, Piece, PieceKind
from parkchess.position import BoardSnapshot, Position


def _pawn_on_file(board: BoardSnapshot, col: int) -> bool:
    for row in range(BOARD_SIZE):
        piece = board[row][col]
        if piece is not None and piece.kind is PieceKind.PAWN:
            return True
    return False


def piece_score(board: BoardSnapshot, row: int, col: int, piece: Piece) -> float:
    """
    Material value plus positional bonus of one piece, before the sign
    for the engine's perspective is applied.

    Args:
        board: Board snapshot, used for the rook open-file test.
        row:   Row of the piece.
        col:   Column of the piece.
        piece: The piece on (row, col).

    Returns:
        Non-negative centipawn score.
    """
    value: float = PIECE_VALUES[piece.kind]

    if piece.kind is PieceKind.PAWN:
        # Black advances toward row 7, White toward row 0.
        advanced = row if piece.color is Color.BLACK else (BOARD_SIZE - 1) - row
        value += advanced * PAWN_ADVANCE_BONUS

    elif piece.kind in (PieceKind.KNIGHT, PieceKind.BISHOP):
        center_distance = abs(BOARD_CENTER - row) + abs(BOARD_CENTER - col)
        value += (CENTER_DISTANCE_BASE - center_distance) * CENTER_BONUS
        if piece.color is Color.BLACK and row > BLACK_PAWN_ROW:
            value += DEVELOPED_BONUS
        elif piece.color is Color.WHITE and row < WHITE_PAWN_ROW:
            value += DEVELOPED_BONUS

    elif piece.kind is PieceKind.ROOK:
        if not _pawn_on_file(board, col):
            value += OPEN_FILE_BONUS

    return value


def evaluate_position(position: Position, engine_color: Color) -> float:
    """
    Score `position` from `engine_color`'s point of view.

    Args:
        position:     Position to score. Not modified.
        engine_color: Side the search plays for. Its pieces add to the score,
                      the opponent's pieces subtract.

    Returns:
        Centipawn score; positive favors engine_color.

    Example:
        >>> evaluate_position(Position(), Color.BLACK)  # symmetric start
        0.0
    """
    board = position.get_board()
    score = 0.0
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            piece = board[row][col]
            if piece is None:
                continue
            value = piece_score(board, row, col, piece)
            if piece.color is engine_color:
                score += value
            else:
                score -= value
    return score
