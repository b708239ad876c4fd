"""
Connexe Path Solver

Pure path queries over an immutable Maze:
- BFS (default): shortest path, deterministic UP, DOWN, LEFT, RIGHT expansion
- DFS: any simple path
- Wall follower: left-hand rule, reduced to a simple path

None of these functions modify the maze, so they can run on any thread.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from .errors import NoPathFound
from .grid import Cell, Direction
from .maze import Maze


class SolverAlgorithm(Enum):
    """Available path solving algorithms."""
    BFS = "bfs"
    DFS = "dfs"
    WALL_FOLLOWER = "wall_follower"


@dataclass(frozen=True)
class Path:
    """An ordered sequence of adjacent cells joined by open edges."""
    cells: tuple[Cell, ...]

    @property
    def source(self) -> Cell:
        return self.cells[0]

    @property
    def destination(self) -> Cell:
        return self.cells[-1]

    @property
    def steps(self) -> int:
        """Number of moves needed to walk the path."""
        return len(self.cells) - 1

    def directions(self) -> list[Direction]:
        """The moves leading from source to destination."""
        return [a.direction_to(b) for a, b in zip(self.cells, self.cells[1:])]

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "cells": [cell.to_dict() for cell in self.cells],
            "steps": self.steps,
        }


@dataclass(frozen=True)
class SolveTrace:
    """
    A solved path together with the route held by the search at each step.

    steps[i] is the route from the source to the cell expanded at step i,
    so a front-end can animate the search one step at a time. The last
    step is always the returned path.
    """
    path: Path
    steps: tuple[tuple[Cell, ...], ...]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[tuple[Cell, ...]]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> tuple[Cell, ...]:
        return self.steps[index]

    def explored(self) -> set[Cell]:
        """Every cell the search went through."""
        return {cell for route in self.steps for cell in route}


def _no_path(source: Cell, destination: Cell) -> NoPathFound:
    return NoPathFound(f"No path from {source} to {destination}")


def _route_to(parents: dict[Cell, Optional[Cell]], cell: Cell) -> tuple[Cell, ...]:
    cells = []
    current: Optional[Cell] = cell
    while current is not None:
        cells.append(current)
        current = parents[current]
    return tuple(reversed(cells))


def _solve_bfs(maze: Maze, source: Cell, destination: Cell, trace: Optional[list] = None) -> Path:
    parents: dict[Cell, Optional[Cell]] = {source: None}
    queue = deque([source])

    while queue:
        cell = queue.popleft()
        if trace is not None:
            trace.append(_route_to(parents, cell))
        if cell == destination:
            return Path(_route_to(parents, cell))

        for other in maze.open_neighbors(cell):
            if other not in parents:
                parents[other] = cell
                queue.append(other)

    raise _no_path(source, destination)


def _solve_dfs(maze: Maze, source: Cell, destination: Cell, trace: Optional[list] = None) -> Path:
    visited = {source}
    route = [source]
    pending = [iter(maze.open_neighbors(source))]

    while route:
        if trace is not None:
            trace.append(tuple(route))
        if route[-1] == destination:
            return Path(tuple(route))

        for other in pending[-1]:
            if other not in visited:
                visited.add(other)
                route.append(other)
                pending.append(iter(maze.open_neighbors(other)))
                break
        else:
            # Dead end
            route.pop()
            pending.pop()

    raise _no_path(source, destination)


# Directions in clockwise order
_CLOCKWISE = [Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT]


def _solve_wall_follower(
    maze: Maze, source: Cell, destination: Cell, trace: Optional[list] = None
) -> Path:
    facing = Direction.RIGHT
    route = [source]
    positions = {source: 0}
    seen_states: set[tuple[Cell, Direction]] = set()
    cell = source
    if trace is not None:
        trace.append(tuple(route))

    while cell != destination:
        idx = _CLOCKWISE.index(facing)
        # Left hand on the wall: left, forward, right, back
        candidates = [_CLOCKWISE[(idx + turn) % 4] for turn in (-1, 0, 1, 2)]
        open_directions = maze.open_directions(cell)
        moves = [d for d in candidates if d in open_directions]
        if not moves:
            raise _no_path(source, destination)

        facing = moves[0]
        cell = cell.move(facing)

        # The walk is periodic once a (cell, heading) pair repeats
        if (cell, facing) in seen_states:
            raise _no_path(source, destination)
        seen_states.add((cell, facing))

        if cell in positions:
            # Came back to a known cell: drop the loop or dead end in between
            cut = positions[cell] + 1
            for dropped in route[cut:]:
                del positions[dropped]
            del route[cut:]
        else:
            positions[cell] = len(route)
            route.append(cell)

        if trace is not None:
            trace.append(tuple(route))

    return Path(tuple(route))


_SOLVERS = {
    SolverAlgorithm.BFS: _solve_bfs,
    SolverAlgorithm.DFS: _solve_dfs,
    SolverAlgorithm.WALL_FOLLOWER: _solve_wall_follower,
}


def solve(
    maze: Maze,
    source: Cell,
    destination: Cell,
    algorithm: SolverAlgorithm = SolverAlgorithm.BFS,
) -> Path:
    """
    Find a path between two cells of a maze.

    Args:
        maze: The maze to search.
        source: First cell of the path.
        destination: Last cell of the path.
        algorithm: Search strategy. Only BFS guarantees a shortest path.

    Returns:
        Path from source to destination.

    Raises:
        InvalidCell: If either cell is outside the grid.
        NoPathFound: If the destination is unreachable.
    """
    maze.grid.check_cell(source)
    maze.grid.check_cell(destination)
    return _SOLVERS[SolverAlgorithm(algorithm)](maze, source, destination)


def solve_with_trace(
    maze: Maze,
    source: Cell,
    destination: Cell,
    algorithm: SolverAlgorithm = SolverAlgorithm.BFS,
) -> SolveTrace:
    """
    Solve like solve(), also recording the current route at every step.

    Raises:
        InvalidCell: If either cell is outside the grid.
        NoPathFound: If the destination is unreachable.
    """
    maze.grid.check_cell(source)
    maze.grid.check_cell(destination)
    steps: list[tuple[Cell, ...]] = []
    path = _SOLVERS[SolverAlgorithm(algorithm)](maze, source, destination, steps)
    return SolveTrace(path=path, steps=tuple(steps))


def next_direction(maze: Maze, source: Cell, destination: Cell) -> Optional[Direction]:
    """Get the first move of the shortest path, or None when already there."""
    path = solve(maze, source, destination)
    if path.steps == 0:
        return None
    return path.directions()[0]


def distance(maze: Maze, source: Cell, destination: Cell) -> int:
    """Number of moves on the shortest path between two cells."""
    return solve(maze, source, destination).steps
