"""
Maze format for Connexe.

Converts mazes to and from the serialized contract shared with external
collaborators: the grid dimensions plus the list of open-edge pairs.

JSON layout:
    {
        "version": 1,
        "rows": 2,
        "cols": 2,
        "edges": [[{"row": 0, "col": 0}, {"row": 0, "col": 1}], ...],
        "start": {"row": 0, "col": 0},
        "end": {"row": 1, "col": 1}
    }
"""

from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from connexe.schemas.maze import CellData, MazeData

from .errors import ConnexeError, MazeFormatError
from .grid import Cell
from .maze import Maze


def _cell_data(cell: Optional[Cell]) -> Optional[CellData]:
    return CellData(row=cell.row, col=cell.col) if cell is not None else None


def _cell(data: Optional[CellData]) -> Optional[Cell]:
    return Cell(data.row, data.col) if data is not None else None


def maze_to_data(maze: Maze) -> MazeData:
    """Convert a maze to its serializable schema."""
    return MazeData(
        rows=maze.rows,
        cols=maze.cols,
        edges=[(_cell_data(a), _cell_data(b)) for a, b in maze.sorted_edges()],
        start=_cell_data(maze.start),
        end=_cell_data(maze.end),
    )


def maze_from_data(data: MazeData) -> Maze:
    """
    Build a maze from its schema.

    Raises:
        MazeFormatError: If an edge is out of the grid or joins non-adjacent cells.
    """
    try:
        return Maze.from_edges(
            data.rows,
            data.cols,
            [(_cell(a), _cell(b)) for a, b in data.edges],
            start=_cell(data.start),
            end=_cell(data.end),
        )
    except (ConnexeError, ValueError) as e:
        raise MazeFormatError(f"Invalid maze data: {e}") from e


def dumps_maze(maze: Maze, indent: Optional[int] = None) -> str:
    """Serialize a maze to JSON text."""
    return maze_to_data(maze).model_dump_json(indent=indent)


def loads_maze(text: str) -> Maze:
    """
    Parse a maze from JSON text.

    Raises:
        MazeFormatError: If the text is empty, malformed, or describes an invalid maze.
    """
    if not text or not text.strip():
        raise MazeFormatError("Maze text is empty")

    try:
        data = MazeData.model_validate_json(text)
    except ValidationError as e:
        raise MazeFormatError(f"Malformed maze data: {e}") from e

    return maze_from_data(data)


def save_maze_file(maze: Maze, file_path: Path | str) -> Path:
    """Write a maze to a JSON file and return its path."""
    file_path = Path(file_path)
    file_path.write_text(dumps_maze(maze, indent=2), encoding="utf-8")
    return file_path


def load_maze_file(file_path: Path | str) -> Maze:
    """
    Load a maze from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        MazeFormatError: If the file cannot be read or decoded.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Maze file not found: {file_path}")

    if not file_path.is_file():
        raise MazeFormatError(f"Path is not a file: {file_path}")

    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise MazeFormatError(f"Failed to read maze file: {e}") from e

    return loads_maze(text)
