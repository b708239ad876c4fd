"""
Connexe Maze Generator

Builds perfect mazes (spanning trees over the grid) from a seed:
- Kruskal (canonical): shuffled wall list + union-find
- Randomized depth-first backtracker
- Randomized Prim

Every algorithm records its steps in a GenerationLog, so front-ends can
replay the construction one event at a time. The final Maze is only built
once the algorithm is done; partially generated mazes are never exposed
except through explicit log replay.

Imperfect mazes can be derived from a perfect one with introduce_chaos().
"""

import heapq
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union

from .errors import InvalidCell, InvalidEdge
from .grid import Cell, Grid, create_grid, is_adjacent
from .maze import Edge, Maze, normalize_edge
from .maze_solver import solve

logger = logging.getLogger(__name__)


class GenerationAlgorithm(Enum):
    """Available maze generation algorithms."""
    KRUSKAL = "kruskal"
    DFS = "dfs"
    PRIM = "prim"


class UnionFind:
    """Disjoint-set forest over integer ids, stored as parent/rank arrays."""

    def __init__(self, size: int):
        self.parent = list(range(size))
        self.rank = [0] * size
        self.components = size

    def find(self, x: int) -> int:
        """Get the representative of x's component (with path halving)."""
        parent = self.parent
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def union(self, a: int, b: int) -> bool:
        """
        Merge the components of a and b.

        Returns:
            True if they were in different components, False otherwise.
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False

        if self.rank[root_a] < self.rank[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        if self.rank[root_a] == self.rank[root_b]:
            self.rank[root_a] += 1
        self.components -= 1
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)


@dataclass(frozen=True)
class Connect:
    """Open the wall between two adjacent cells."""
    a: Cell
    b: Cell


@dataclass(frozen=True)
class Disconnect:
    """Close the wall between two adjacent cells."""
    a: Cell
    b: Cell


@dataclass(frozen=True)
class SetEndpoints:
    """Set the start and end cells of the maze."""
    start: Optional[Cell]
    end: Optional[Cell]


GenerationEvent = Union[Connect, Disconnect, SetEndpoints]


class _MazeBuilder:
    """Mutable scratch state used while an algorithm runs."""

    def __init__(self, grid: Grid):
        self.grid = grid
        self.edges: set[Edge] = set()
        self.start: Optional[Cell] = None
        self.end: Optional[Cell] = None

    @classmethod
    def from_maze(cls, maze: Maze) -> "_MazeBuilder":
        builder = cls(maze.grid)
        builder.edges = set(maze.edges)
        builder.start = maze.start
        builder.end = maze.end
        return builder

    def apply(self, event: GenerationEvent) -> None:
        if isinstance(event, SetEndpoints):
            self.start = event.start
            self.end = event.end
            return

        self.grid.check_cell(event.a)
        self.grid.check_cell(event.b)
        if not is_adjacent(event.a, event.b):
            raise InvalidEdge(f"Can't connect {event.a} to {event.b}: they are not adjacent")

        edge = normalize_edge(event.a, event.b)
        if isinstance(event, Connect):
            self.edges.add(edge)
        else:
            self.edges.discard(edge)

    def freeze(self) -> Maze:
        return Maze(self.grid, frozenset(self.edges), self.start, self.end)


class GenerationLog:
    """
    Ordered record of every step taken by a generation algorithm.

    Replaying the first N events with build_maze_until(N) rebuilds the maze
    as it was at that point of the algorithm.
    """

    def __init__(self, rows: int, cols: int, events: Optional[list[GenerationEvent]] = None):
        self.grid = create_grid(rows, cols)
        self._events: list[GenerationEvent] = list(events) if events else []

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def cols(self) -> int:
        return self.grid.cols

    @property
    def events(self) -> tuple[GenerationEvent, ...]:
        return tuple(self._events)

    def add(self, event: GenerationEvent, builder: Optional[_MazeBuilder] = None) -> None:
        """Append an event, applying it to the builder first when given."""
        if builder is not None:
            builder.apply(event)
        self._events.append(event)

    def copy(self) -> "GenerationLog":
        return GenerationLog(self.rows, self.cols, self._events)

    def build_maze_until(self, max_event_index: int) -> Maze:
        """
        Build the maze by applying all events strictly before max_event_index.

        Index 0 gives the initial maze (all walls closed), index len(log)
        gives the final maze.

        Raises:
            ValueError: If the index is outside [0, len(log)].
        """
        if not 0 <= max_event_index <= len(self._events):
            raise ValueError(
                f"max_event_index must be in [0, {len(self._events)}], got {max_event_index}"
            )

        builder = _MazeBuilder(self.grid)
        for event in self._events[:max_event_index]:
            builder.apply(event)
        return builder.freeze()

    def build_maze(self) -> Maze:
        """Replay every event and return the final maze."""
        return self.build_maze_until(len(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[GenerationEvent]:
        return iter(self._events)

    def __getitem__(self, index: int) -> GenerationEvent:
        return self._events[index]

    def __str__(self) -> str:
        lines = [f"GenerationLog [{self.rows}x{self.cols}] {len(self)} events:"]
        for i, event in enumerate(self._events):
            lines.append(f"  {i:<3} : {event}")
        return "\n".join(lines)


@dataclass
class GenerationResult:
    """A generated maze together with the log that produced it."""
    maze: Maze
    log: GenerationLog = field(repr=False)


def _check_seed(seed: int) -> None:
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise TypeError(f"seed must be an integer, got {seed!r}")


def _kruskal(grid: Grid, rng: random.Random, log: GenerationLog, builder: _MazeBuilder) -> None:
    pairs = list(grid.adjacent_pairs())
    rng.shuffle(pairs)

    components = UnionFind(grid.size)
    target = grid.size - 1
    opened = 0
    for a, b in pairs:
        if opened == target:
            break
        if components.union(grid.index_of(a), grid.index_of(b)):
            log.add(Connect(a, b), builder)
            opened += 1


def _dfs(grid: Grid, rng: random.Random, log: GenerationLog, builder: _MazeBuilder) -> None:
    def shuffled_neighbors(cell: Cell) -> Iterator[Cell]:
        neighbors = list(grid.neighbors(cell))
        rng.shuffle(neighbors)
        return iter(neighbors)

    origin = Cell(0, 0)
    visited = {origin}
    # Iterative: the path can be rows * cols cells deep
    stack = [(origin, shuffled_neighbors(origin))]
    while stack:
        cell, pending = stack[-1]
        for other in pending:
            if other not in visited:
                visited.add(other)
                log.add(Connect(cell, other), builder)
                stack.append((other, shuffled_neighbors(other)))
                break
        else:
            stack.pop()


def _prim(grid: Grid, rng: random.Random, log: GenerationLog, builder: _MazeBuilder) -> None:
    weights = {pair: rng.random() for pair in grid.adjacent_pairs()}

    origin = Cell(0, 0)
    visited = {origin}
    frontier: list[tuple[float, Cell, Cell]] = []

    def push_edges(cell: Cell) -> None:
        for other in grid.neighbors(cell):
            if other not in visited:
                heapq.heappush(frontier, (weights[normalize_edge(cell, other)], cell, other))

    push_edges(origin)
    while frontier and len(visited) < grid.size:
        _, cell, other = heapq.heappop(frontier)
        if other in visited:
            continue
        visited.add(other)
        log.add(Connect(cell, other), builder)
        push_edges(other)


_ALGORITHMS = {
    GenerationAlgorithm.KRUSKAL: _kruskal,
    GenerationAlgorithm.DFS: _dfs,
    GenerationAlgorithm.PRIM: _prim,
}


def generate_with_log(
    rows: int,
    cols: int,
    seed: int,
    algorithm: GenerationAlgorithm = GenerationAlgorithm.KRUSKAL,
) -> GenerationResult:
    """
    Generate a perfect maze and the log of every step taken.

    Args:
        rows: Number of rows (> 0).
        cols: Number of columns (> 0).
        seed: Seed for the random number generator.
        algorithm: Generation algorithm to use.

    Returns:
        GenerationResult with the maze (start at (0, 0), end at the
        opposite corner) and its generation log.

    Raises:
        InvalidDimension: If rows or cols is not positive.
        TypeError: If seed is not an integer.
    """
    grid = create_grid(rows, cols)
    _check_seed(seed)
    algorithm = GenerationAlgorithm(algorithm)

    rng = random.Random(seed)
    log = GenerationLog(rows, cols)
    builder = _MazeBuilder(grid)

    _ALGORITHMS[algorithm](grid, rng, log, builder)
    log.add(SetEndpoints(Cell(0, 0), Cell(rows - 1, cols - 1)), builder)

    maze = builder.freeze()
    logger.debug(
        f"Generated {rows}x{cols} maze with {algorithm.value} "
        f"(seed={seed}, {maze.edge_count} open edges)"
    )
    return GenerationResult(maze=maze, log=log)


def generate(
    rows: int,
    cols: int,
    seed: int,
    algorithm: GenerationAlgorithm = GenerationAlgorithm.KRUSKAL,
) -> Maze:
    """Generate a perfect rows x cols maze. See generate_with_log()."""
    return generate_with_log(rows, cols, seed, algorithm).maze


def introduce_chaos(result: GenerationResult, probability: float, seed: int) -> GenerationResult:
    """
    Turn a maze into an imperfect one by randomly opening and closing walls.

    The walls along the start -> end path are never closed, so the end stays
    reachable. Every adjacent pair is toggled with the given probability
    (clamped to [1 / (4 * cells), 1]) until at least one wall has changed.

    Args:
        result: A previous generation result; it is left untouched.
        probability: Chance of toggling each wall.
        seed: Seed for the random number generator.

    Returns:
        A new GenerationResult whose log extends the original one.

    Raises:
        InvalidCell: If the maze has no start/end cells.
    """
    _check_seed(seed)
    maze = result.maze
    if maze.start is None or maze.end is None:
        raise InvalidCell("Chaos requires a maze with start and end cells")

    grid = maze.grid
    path = solve(maze, maze.start, maze.end).cells
    if len(path) < 2:
        return result

    protected = {normalize_edge(a, b) for a, b in zip(path, path[1:])}
    if all(pair in protected for pair in grid.adjacent_pairs()):
        return result

    probability = min(max(probability, 1.0 / (4 * grid.size)), 1.0)
    rng = random.Random(seed)
    log = result.log.copy()
    builder = _MazeBuilder.from_maze(maze)

    changed = False
    while not changed:
        for a, b in grid.adjacent_pairs():
            if rng.random() > probability:
                continue
            if (a, b) in builder.edges:
                if (a, b) in protected:
                    continue
                log.add(Disconnect(a, b), builder)
            else:
                log.add(Connect(a, b), builder)
            changed = True

    chaotic = builder.freeze()
    logger.debug(
        f"Introduced chaos into {grid.rows}x{grid.cols} maze: "
        f"{maze.edge_count} -> {chaotic.edge_count} open edges"
    )
    return GenerationResult(maze=chaotic, log=log)
