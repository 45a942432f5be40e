"""
Engine constants: board geometry, piece values, evaluation bonuses, and
search parameters.

All numeric constants used throughout the engine are defined here so that
the position, evaluation and search modules never introduce magic numbers
of their own. Centralizing constants makes tuning and experimentation much
easier.

Piece values follow the centipawn convention (1 pawn = 100 cp). Two tables
exist on purpose: PIECE_VALUES feeds the static evaluation, CAPTURE_VALUES
feeds the immediate capture bonus at the search root. They differ only for
the bishop.
"""

from parkchess.pieces import PieceKind

# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------
# Row 0 is Black's back rank (rank 8), row 7 is White's back rank (rank 1).

BOARD_SIZE: int = 8

WHITE_BACK_ROW: int = 7
WHITE_PAWN_ROW: int = 6
BLACK_BACK_ROW: int = 0
BLACK_PAWN_ROW: int = 1

BACK_RANK_ORDER: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)

# ---------------------------------------------------------------------------
# Movement patterns
# ---------------------------------------------------------------------------
# (row, col) deltas. The order of each tuple is the generation order, which
# is also the search order since the search does no move ordering.

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1),
)

BISHOP_DIRECTIONS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRECTIONS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1),
)
KING_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)

# ---------------------------------------------------------------------------
# Piece values (centipawns)
# ---------------------------------------------------------------------------
# The king carries a large finite value rather than infinity so that
# material sums stay ordinary floats.

PIECE_VALUES: dict[PieceKind, int] = {
    PieceKind.PAWN:   100,
    PieceKind.KNIGHT: 300,
    PieceKind.BISHOP: 325,
    PieceKind.ROOK:   500,
    PieceKind.QUEEN:  900,
    PieceKind.KING:   10_000,
}

CAPTURE_VALUES: dict[PieceKind, int] = {
    PieceKind.PAWN:   100,
    PieceKind.KNIGHT: 300,
    PieceKind.BISHOP: 300,
    PieceKind.ROOK:   500,
    PieceKind.QUEEN:  900,
    PieceKind.KING:   10_000,
}

# Fraction of the captured piece's value credited immediately at the root.
CAPTURE_BONUS_FACTOR: float = 0.5

# ---------------------------------------------------------------------------
# Positional bonuses
# ---------------------------------------------------------------------------

PAWN_ADVANCE_BONUS: int = 3          # per row advanced
CENTER_BONUS: int = 3                # per unit of (7 - distance to centre)
CENTER_DISTANCE_BASE: int = 7
BOARD_CENTER: float = 3.5            # centre of the 0..7 grid on both axes
DEVELOPED_BONUS: int = 20            # minor piece left its first two rows
OPEN_FILE_BONUS: int = 30            # rook on a file with no pawns

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------
# SEARCH_DEPTH is in plies, counted from the root move. JITTER is the upper
# bound of the uniform tie-break noise; it must stay below one centipawn
# unit so it never reorders moves that differ in material.

SEARCH_DEPTH: int = 3
JITTER: float = 0.1

# Bounds accepted by the web adapter when a new game asks for a depth.
MIN_SEARCH_DEPTH: int = 1
MAX_SEARCH_DEPTH: int = 4
