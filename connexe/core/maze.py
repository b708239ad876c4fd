"""
Connexe Maze

An immutable maze: a grid plus the set of open edges (missing walls) between
adjacent cells, and optional start/end cells.

Once built, a Maze never changes. Generators, chaos and deserialization all
produce brand-new instances, so a Maze can be shared between threads and
front-ends without locking.

ASCII format (see Maze.to_ascii):
    +---+---+---+
    | S     |   |
    +---+   +   +
    |       | E |
    +---+---+---+
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator, Optional

from .errors import InvalidCell, InvalidEdge
from .grid import Cell, Direction, Grid, create_grid, is_adjacent

Edge = tuple[Cell, Cell]


def normalize_edge(a: Cell, b: Cell) -> Edge:
    """Order an edge so the smaller cell comes first."""
    return (a, b) if a <= b else (b, a)


@dataclass(frozen=True)
class Maze:
    """A rectangular maze over a Grid."""
    grid: Grid
    edges: frozenset[Edge] = frozenset()
    start: Optional[Cell] = None
    end: Optional[Cell] = None
    _adjacency: dict[Cell, tuple[Cell, ...]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        normalized = set()
        for a, b in self.edges:
            self.grid.check_cell(a)
            self.grid.check_cell(b)
            if not is_adjacent(a, b):
                raise InvalidEdge(f"Can't connect {a} to {b}: they are not adjacent")
            normalized.add(normalize_edge(a, b))
        object.__setattr__(self, "edges", frozenset(normalized))

        if (self.start is None) != (self.end is None):
            raise InvalidCell("Start and end must either both be set or both be empty")
        if self.start is not None:
            self.grid.check_cell(self.start)
            self.grid.check_cell(self.end)

        linked: dict[Cell, set[Cell]] = {}
        for a, b in self.edges:
            linked.setdefault(a, set()).add(b)
            linked.setdefault(b, set()).add(a)
        adjacency = {}
        for cell, others in linked.items():
            # Fixed UP, DOWN, LEFT, RIGHT order for reproducible traversals
            adjacency[cell] = tuple(
                cell.move(d) for d in Direction if cell.move(d) in others
            )
        object.__setattr__(self, "_adjacency", adjacency)

    @classmethod
    def from_edges(
        cls,
        rows: int,
        cols: int,
        edges: Iterable[Edge],
        start: Optional[Cell] = None,
        end: Optional[Cell] = None,
    ) -> "Maze":
        """Build a maze from its dimensions and a list of open-edge pairs."""
        return cls(create_grid(rows, cols), frozenset(edges), start, end)

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def cols(self) -> int:
        return self.grid.cols

    @property
    def edge_count(self) -> int:
        """Number of open edges."""
        return len(self.edges)

    def sorted_edges(self) -> list[Edge]:
        """Open edges in a stable order, for serialization and display."""
        return sorted(self.edges)

    def is_open(self, a: Cell, b: Cell) -> bool:
        """
        True when there is no wall between a and b.

        Non-adjacent cells are never open.

        Raises:
            InvalidCell: If either cell is outside the grid.
        """
        self.grid.check_cell(a)
        self.grid.check_cell(b)
        return normalize_edge(a, b) in self.edges

    def has_wall(self, cell: Cell, direction: Direction) -> bool:
        """True when the given side of a cell is closed (the border counts as a wall)."""
        other = cell.move(direction)
        if not self.grid.contains(other):
            self.grid.check_cell(cell)
            return True
        return not self.is_open(cell, other)

    def open_neighbors(self, cell: Cell) -> tuple[Cell, ...]:
        """Cells reachable in one step from cell, in UP, DOWN, LEFT, RIGHT order."""
        self.grid.check_cell(cell)
        return self._adjacency.get(cell, ())

    def open_directions(self, cell: Cell) -> list[Direction]:
        """Directions the player can walk from cell."""
        return [cell.direction_to(other) for other in self.open_neighbors(cell)]

    def reachable_from(self, cell: Cell) -> set[Cell]:
        """All cells connected to cell through open edges (cell included)."""
        seen = {self.grid.check_cell(cell)}
        stack = [cell]
        while stack:
            current = stack.pop()
            for other in self._adjacency.get(current, ()):
                if other not in seen:
                    seen.add(other)
                    stack.append(other)
        return seen

    def is_connected(self) -> bool:
        """True when every cell can reach every other cell."""
        return len(self.reachable_from(Cell(0, 0))) == self.grid.size

    def is_perfect(self) -> bool:
        """True when the open edges form a spanning tree."""
        return self.edge_count == self.grid.size - 1 and self.is_connected()

    def with_endpoints(self, start: Optional[Cell], end: Optional[Cell]) -> "Maze":
        """Return a copy of this maze with different endpoints."""
        return replace(self, start=start, end=end)

    def with_edges(self, edges: Iterable[Edge]) -> "Maze":
        """Return a copy of this maze with a different set of open edges."""
        return replace(self, edges=frozenset(edges))

    def cells(self) -> Iterator[Cell]:
        return self.grid.cells()

    def to_ascii(
        self,
        player: Optional[Cell] = None,
        path: Optional[Iterable[Cell]] = None,
    ) -> str:
        """
        Render the maze as text.

        Args:
            player: If provided, drawn as '@'.
            path: If provided, cells drawn as '.' (endpoints and player win).

        Returns:
            Multi-line ASCII string.
        """
        path_cells = set(path) if path is not None else set()

        def marker(cell: Cell) -> str:
            if cell == player:
                return "@"
            if cell == self.start:
                return "S"
            if cell == self.end:
                return "E"
            if cell in path_cells:
                return "."
            return " "

        lines = []
        for row in range(self.rows):
            top = ""
            middle = ""
            for col in range(self.cols):
                cell = Cell(row, col)
                top += "+" + ("---" if self.has_wall(cell, Direction.UP) else "   ")
                middle += "|" if self.has_wall(cell, Direction.LEFT) else " "
                middle += f" {marker(cell)} "
            lines.append(top + "+")
            lines.append(middle + "|")
        lines.append("+---" * self.cols + "+")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_ascii()
