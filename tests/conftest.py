"""Pytest configuration and fixtures."""

import pytest

from connexe.core.grid import Cell
from connexe.core.maze import Maze
from connexe.core.session import NavigationSession


# 3x3 spanning tree; the route from S to E is right, right, down, down
#   +---+---+---+
#   | S         |
#   +   +---+   +
#   |       |   |
#   +   +---+   +
#   |       | E |
#   +---+---+---+
SPANNING_EDGES = [
    (Cell(0, 0), Cell(0, 1)),
    (Cell(0, 1), Cell(0, 2)),
    (Cell(0, 2), Cell(1, 2)),
    (Cell(1, 2), Cell(2, 2)),
    (Cell(0, 0), Cell(1, 0)),
    (Cell(1, 0), Cell(1, 1)),
    (Cell(1, 0), Cell(2, 0)),
    (Cell(2, 0), Cell(2, 1)),
]

SPANNING_ASCII = "\n".join([
    "+---+---+---+",
    "| S         |",
    "+   +---+   +",
    "|       |   |",
    "+   +---+   +",
    "|       | E |",
    "+---+---+---+",
])


@pytest.fixture
def spanning_maze() -> Maze:
    """3x3 perfect maze with start (0, 0) and end (2, 2)."""
    return Maze.from_edges(3, 3, SPANNING_EDGES, start=Cell(0, 0), end=Cell(2, 2))


@pytest.fixture
def loop_maze() -> Maze:
    """2x2 maze with every wall open (one cycle)."""
    return Maze.from_edges(
        2,
        2,
        [
            (Cell(0, 0), Cell(0, 1)),
            (Cell(0, 0), Cell(1, 0)),
            (Cell(0, 1), Cell(1, 1)),
            (Cell(1, 0), Cell(1, 1)),
        ],
        start=Cell(0, 0),
        end=Cell(1, 1),
    )


@pytest.fixture
def ring_maze() -> Maze:
    """3x3 maze whose border is an open ring around an unreachable center."""
    ring = [
        Cell(0, 0), Cell(0, 1), Cell(0, 2), Cell(1, 2),
        Cell(2, 2), Cell(2, 1), Cell(2, 0), Cell(1, 0),
    ]
    edges = [(ring[i], ring[(i + 1) % len(ring)]) for i in range(len(ring))]
    return Maze.from_edges(3, 3, edges)


@pytest.fixture
def corridor_maze() -> Maze:
    """1x41 corridor, fully open, from (0, 0) to (0, 40)."""
    edges = [(Cell(0, c), Cell(0, c + 1)) for c in range(40)]
    return Maze.from_edges(1, 41, edges, start=Cell(0, 0), end=Cell(0, 40))


@pytest.fixture
def session() -> NavigationSession:
    """A fresh idle session."""
    return NavigationSession(session_id="sess_test")


@pytest.fixture
def spanning_ascii() -> str:
    """Expected ASCII rendering of spanning_maze."""
    return SPANNING_ASCII
