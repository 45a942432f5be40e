"""
Cross-check legal move generation against python-chess.

The positions carry no castling rights and no en passant square, so the
only rule python-chess models that this engine does not is promotion. A
promotion appears there as four moves to the same square; comparing
(from, to) pairs folds them into the one plain pawn move generated here.
"""

import chess
import pytest

from parkchess.pieces import Square
from parkchess.position import Position

FENS = [
    "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1",
    "r1bqkbnr/pppp1ppp/2n5/4p3/3PP3/5N2/PPP2PPP/RNBQKB1R b - - 0 3",
    "r1bqk2r/pppp1ppp/2n2n2/2b1p3/2B1P3/3P1N2/PPP2PPP/RNBQK2R w - - 0 5",
    "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w - - 0 1",
    "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R b - - 0 1",
    "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
    "4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1",
    "4k3/8/8/8/8/8/3q4/4K3 w - - 0 1",
    "8/2P5/8/8/8/8/5p2/K6k w - - 0 1",
    "8/2P5/8/8/8/8/5p2/K6k b - - 0 1",
    "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w - - 1 3",
]


def _oracle_pairs(fen: str) -> set[tuple[Square, Square]]:
    board = chess.Board(fen)
    return {
        (Square.from_chess(m.from_square), Square.from_chess(m.to_square))
        for m in board.legal_moves
    }


@pytest.mark.parametrize("fen", FENS)
def test_legal_moves_match_python_chess(fen):
    position = Position.from_fen(fen)
    ours = [(m.from_square, m.to_square) for m in position.possible_moves_for_color(position.to_move)]
    assert len(ours) == len(set(ours))
    assert set(ours) == _oracle_pairs(fen)


@pytest.mark.parametrize("fen", FENS)
def test_check_and_mate_match_python_chess(fen):
    board = chess.Board(fen)
    position = Position.from_fen(fen)
    assert position.is_in_check(position.to_move) == board.is_check()
    assert position.is_in_checkmate(position.to_move) == board.is_checkmate()


@pytest.mark.parametrize("fen", FENS)
def test_captured_field_matches_destination(fen):
    board = chess.Board(fen)
    position = Position.from_fen(fen)
    for move in position.possible_moves_for_color(position.to_move):
        occupant = board.piece_at(move.to_square.to_chess())
        if occupant is None:
            assert move.captured is None
        else:
            assert move.captured is not None
            assert move.captured.symbol() == occupant.symbol()
