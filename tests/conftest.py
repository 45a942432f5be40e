"""Shared fixtures for the engine test suite."""

import random

import pytest

from parkchess.pieces import Color
from parkchess.position import Position
from parkchess.search import Search

# Row/col coordinates of the four fool's-mate plies: f2f3 e7e5 g2g4 Qd8h4#.
FOOLS_MATE = [((6, 5), (5, 5)), ((1, 4), (3, 4)), ((6, 6), (4, 6)), ((0, 3), (4, 7))]


def play(position: Position, from_rc: tuple[int, int], to_rc: tuple[int, int]) -> None:
    """Play one ply through the two-click selection protocol."""
    position.select(*from_rc)
    position.select(*to_rc)


@pytest.fixture
def start() -> Position:
    return Position()


@pytest.fixture
def fools_mate() -> Position:
    position = Position()
    for from_rc, to_rc in FOOLS_MATE:
        play(position, from_rc, to_rc)
    return position


@pytest.fixture
def quiet_search() -> Search:
    """Black engine with no jitter and a seeded tie-break."""
    return Search(depth=2, engine_color=Color.BLACK, jitter=0.0, rng=random.Random(1234))
