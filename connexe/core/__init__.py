# Core module
from .errors import (
    ConnexeError,
    InvalidCell,
    InvalidDimension,
    InvalidEdge,
    MazeFormatError,
    NoPathFound,
    SessionStateError,
)
from .grid import Cell, Direction, Grid, create_grid, is_adjacent
from .maze import Maze
from .maze_solver import (
    Path,
    SolverAlgorithm,
    SolveTrace,
    next_direction,
    solve,
    solve_with_trace,
)
from .maze_generator import (
    GenerationAlgorithm,
    GenerationLog,
    GenerationResult,
    generate,
    generate_with_log,
    introduce_chaos,
)
from .session import MoveResult, NavigationSession, SessionSnapshot, SessionState
from .input_mapper import InputCommandMapper
from .maze_format import dumps_maze, loads_maze, load_maze_file, save_maze_file

__all__ = [
    "ConnexeError",
    "InvalidCell",
    "InvalidDimension",
    "InvalidEdge",
    "MazeFormatError",
    "NoPathFound",
    "SessionStateError",
    "Cell",
    "Direction",
    "Grid",
    "create_grid",
    "is_adjacent",
    "Maze",
    "Path",
    "SolverAlgorithm",
    "next_direction",
    "solve",
    "SolveTrace",
    "solve_with_trace",
    "GenerationAlgorithm",
    "GenerationLog",
    "GenerationResult",
    "generate",
    "generate_with_log",
    "introduce_chaos",
    "MoveResult",
    "NavigationSession",
    "SessionSnapshot",
    "SessionState",
    "InputCommandMapper",
    "dumps_maze",
    "loads_maze",
    "load_maze_file",
    "save_maze_file",
]
