"""
Connexe Grid Model

The addressable cell space every maze is built on:
- Cells identified by (row, col) coordinates
- The four movement directions
- Bounds checking and orthogonal adjacency

Coordinates:
    (0, 0) is the top-left cell. UP decreases the row, LEFT decreases the column.

    For a 3x4 grid, cell ids (used by the generator's union-find arena) are:
        0  1  2  3
        4  5  6  7
        8  9  10 11
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from .errors import InvalidCell, InvalidDimension


class Direction(Enum):
    """Movement directions, in the order neighbours are expanded."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        """Get (drow, dcol) for this direction."""
        deltas = {
            Direction.UP: (-1, 0),
            Direction.DOWN: (1, 0),
            Direction.LEFT: (0, -1),
            Direction.RIGHT: (0, 1),
        }
        return deltas[self]

    @property
    def opposite(self) -> "Direction":
        """Get the direction pointing the other way."""
        opposites = {
            Direction.UP: Direction.DOWN,
            Direction.DOWN: Direction.UP,
            Direction.LEFT: Direction.RIGHT,
            Direction.RIGHT: Direction.LEFT,
        }
        return opposites[self]


@dataclass(frozen=True, order=True)
class Cell:
    """A single grid cell. Ordered row-major."""
    row: int
    col: int

    def move(self, direction: Direction) -> "Cell":
        """Return the cell next to this one in the given direction."""
        drow, dcol = direction.delta
        return Cell(self.row + drow, self.col + dcol)

    def direction_to(self, other: "Cell") -> Direction:
        """Get the direction leading from this cell to an adjacent one."""
        for direction in Direction:
            if self.move(direction) == other:
                return direction
        raise ValueError(f"{other} is not adjacent to {self}")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"row": self.row, "col": self.col}

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


def is_adjacent(a: Cell, b: Cell) -> bool:
    """True iff a and b differ by exactly one unit along exactly one axis."""
    return abs(a.row - b.row) + abs(a.col - b.col) == 1


class Neighbors:
    """Lazy view over the in-bounds neighbours of a cell.

    Each iteration recomputes the neighbours, so the view can be walked
    any number of times.
    """

    def __init__(self, grid: "Grid", cell: Cell):
        self._grid = grid
        self._cell = cell

    def __iter__(self) -> Iterator[Cell]:
        for direction in Direction:
            candidate = self._cell.move(direction)
            if self._grid.contains(candidate):
                yield candidate

    def __contains__(self, other: object) -> bool:
        return (
            isinstance(other, Cell)
            and self._grid.contains(other)
            and is_adjacent(self._cell, other)
        )

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"Neighbors({self._cell}, {list(self)})"


@dataclass(frozen=True)
class Grid:
    """A bounded rectangular grid of rows x cols cells."""
    rows: int
    cols: int

    def __post_init__(self) -> None:
        for name in ("rows", "cols"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidDimension(f"{name} must be an integer, got {value!r}")
        if self.rows <= 0 or self.cols <= 0:
            raise InvalidDimension(
                f"Grid dimensions must be positive, got {self.rows}x{self.cols}"
            )

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.rows * self.cols

    def contains(self, cell: Cell) -> bool:
        """True when the cell lies inside the grid."""
        return 0 <= cell.row < self.rows and 0 <= cell.col < self.cols

    def check_cell(self, cell: Cell) -> Cell:
        """Return the cell unchanged, or raise InvalidCell if out of bounds."""
        if not self.contains(cell):
            raise InvalidCell(
                f"Cell {cell} is outside the {self.rows}x{self.cols} grid"
            )
        return cell

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield Cell(row, col)

    def neighbors(self, cell: Cell) -> Neighbors:
        """Get the orthogonal neighbours of a cell that exist within bounds."""
        return Neighbors(self, self.check_cell(cell))

    def is_adjacent(self, a: Cell, b: Cell) -> bool:
        """True when both cells are in the grid and orthogonally adjacent."""
        return self.contains(a) and self.contains(b) and is_adjacent(a, b)

    def adjacent_pairs(self) -> Iterator[tuple[Cell, Cell]]:
        """Enumerate every pair of adjacent cells exactly once.

        Pairs are yielded row-major, each cell paired with its right then its
        lower neighbour, smaller cell first.
        """
        for cell in self.cells():
            for direction in (Direction.RIGHT, Direction.DOWN):
                other = cell.move(direction)
                if self.contains(other):
                    yield cell, other

    def index_of(self, cell: Cell) -> int:
        """Convert a cell to its row-major integer id."""
        self.check_cell(cell)
        return cell.row * self.cols + cell.col

    def cell_at(self, index: int) -> Cell:
        """Convert a row-major integer id back to a cell."""
        if not 0 <= index < self.size:
            raise InvalidCell(f"Invalid cell id {index}, expected 0 <= id < {self.size}")
        return Cell(index // self.cols, index % self.cols)


def create_grid(rows: int, cols: int) -> Grid:
    """
    Create a rows x cols grid.

    Raises:
        InvalidDimension: If rows or cols is not a positive integer.
    """
    return Grid(rows, cols)
