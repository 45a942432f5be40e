"""Static evaluation: material, positional bonuses and perspective."""

import pytest

from parkchess.evaluate import evaluate_position, piece_score
from parkchess.pieces import Color, Piece, PieceKind
from parkchess.position import Position

KINGS_ONLY = "4k3/8/8/8/8/8/8/4K3 w - - 0 1"


def test_start_position_is_balanced(start):
    assert evaluate_position(start, Color.BLACK) == 0
    assert evaluate_position(start, Color.WHITE) == 0


def test_lone_kings_are_balanced():
    assert evaluate_position(Position.from_fen(KINGS_ONLY), Color.BLACK) == 0


@pytest.mark.parametrize(
    "fen",
    [
        "r1bqkbnr/pppp1ppp/2n5/4p3/3PP3/5N2/PPP2PPP/RNBQKB1R b - - 0 3",
        "4k3/8/8/n7/8/8/8/R3K3 w - - 0 1",
    ],
)
def test_perspectives_are_opposite(fen):
    position = Position.from_fen(fen)
    assert evaluate_position(position, Color.WHITE) == -evaluate_position(position, Color.BLACK)


def test_extra_material_favors_its_owner():
    # Black is a rook up.
    position = Position.from_fen("r3k3/8/8/8/8/8/8/4K3 w - - 0 1")
    assert evaluate_position(position, Color.BLACK) == 530  # rook on an open file
    assert evaluate_position(position, Color.WHITE) == -530


def test_pawn_advancement_bonus():
    # Black pawn on row 4 (e4) has advanced four rows; White pawn on e2 one row.
    position = Position.from_fen("4k3/8/8/8/4p3/8/4P3/4K3 w - - 0 1")
    board = position.get_board()
    assert piece_score(board, 4, 4, Piece(PieceKind.PAWN, Color.BLACK)) == 100 + 4 * 3
    assert piece_score(board, 6, 4, Piece(PieceKind.PAWN, Color.WHITE)) == 100 + 1 * 3
    assert evaluate_position(position, Color.BLACK) == 9


def test_knight_centralization_and_development():
    board = Position.from_fen(KINGS_ONLY).get_board()
    knight = Piece(PieceKind.KNIGHT, Color.BLACK)
    # d5 is 1.0 from the centre and off Black's first two rows.
    assert piece_score(board, 3, 3, knight) == 300 + (7 - 1.0) * 3 + 20
    # b8 is 6.0 from the centre and undeveloped.
    assert piece_score(board, 0, 1, knight) == 300 + (7 - 6.0) * 3
    # Row 1 still counts as undeveloped for Black.
    assert piece_score(board, 1, 3, knight) == 300 + (7 - 3.0) * 3


def test_bishop_development_for_white():
    board = Position.from_fen(KINGS_ONLY).get_board()
    bishop = Piece(PieceKind.BISHOP, Color.WHITE)
    assert piece_score(board, 5, 2, bishop) == 325 + (7 - 3.0) * 3 + 20
    assert piece_score(board, 6, 2, bishop) == 325 + (7 - 4.0) * 3


def test_rook_open_file_bonus_counts_either_color_pawn():
    rook = Piece(PieceKind.ROOK, Color.WHITE)
    open_file = Position.from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1").get_board()
    own_pawn = Position.from_fen("4k3/8/8/8/8/8/P7/R3K3 w - - 0 1").get_board()
    enemy_pawn = Position.from_fen("4k3/p7/8/8/8/8/8/R3K3 w - - 0 1").get_board()
    assert piece_score(open_file, 7, 0, rook) == 530
    assert piece_score(own_pawn, 7, 0, rook) == 500
    assert piece_score(enemy_pawn, 7, 0, rook) == 500


def test_king_value_dominates():
    board = Position.from_fen(KINGS_ONLY).get_board()
    assert piece_score(board, 7, 4, Piece(PieceKind.KING, Color.WHITE)) == 10_000
