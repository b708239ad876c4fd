"""
Connexe Maze Engine

The single surface every front-end talks to (graphical, console,
controller). It owns the current maze and one navigation session:
- Generate a new maze (always a brand-new, immutable instance)
- Solve path queries on the current maze
- Start, move, restart and reset the session
- Read-only snapshots and ASCII rendering for text front-ends

Nothing here depends on a rendering or input library.
"""

import logging
import random
from typing import Optional

from connexe.core.errors import SessionStateError
from connexe.core.grid import Cell, Direction
from connexe.core.input_mapper import Command, InputCommandMapper
from connexe.core.maze import Maze
from connexe.core.maze_generator import (
    GenerationAlgorithm,
    GenerationResult,
    generate_with_log,
    introduce_chaos,
)
from connexe.core.maze_solver import Path, SolverAlgorithm, SolveTrace, solve, solve_with_trace
from connexe.core.session import MoveResult, NavigationSession, SessionSnapshot

logger = logging.getLogger(__name__)


class MazeEngine:
    """
    Engine shared by all Connexe front-ends.

    Example usage:
        engine = MazeEngine()
        engine.new_game(10, 10, seed=42)

        result = engine.command("right")   # or engine.move(Direction.RIGHT)
        print(engine.render())

        hint = engine.hint()
    """

    def __init__(self, session: Optional[NavigationSession] = None):
        self.session = session or NavigationSession()
        self.mapper = InputCommandMapper(self.session)
        self._generation: Optional[GenerationResult] = None
        self._maze: Optional[Maze] = None

    @property
    def maze(self) -> Optional[Maze]:
        return self._maze

    @property
    def generation(self) -> Optional[GenerationResult]:
        """Result of the last generation (maze + log), if the maze was generated here."""
        return self._generation

    def _require_maze(self) -> Maze:
        if self._maze is None:
            raise SessionStateError("No maze loaded - generate or load one first")
        return self._maze

    def generate(
        self,
        rows: int,
        cols: int,
        seed: Optional[int] = None,
        algorithm: GenerationAlgorithm = GenerationAlgorithm.KRUSKAL,
        chaos: float = 0.0,
    ) -> Maze:
        """
        Generate a new maze and make it the current one.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            seed: RNG seed. A random one is drawn (and logged) when omitted.
            algorithm: Generation algorithm.
            chaos: When > 0, probability used to make the maze imperfect.

        Raises:
            InvalidDimension: If rows or cols is not positive.
        """
        if seed is None:
            seed = random.randrange(2**32)

        result = generate_with_log(rows, cols, seed, algorithm)
        if chaos > 0:
            result = introduce_chaos(result, chaos, seed)

        self.session.reset()
        self._generation = result
        self._maze = result.maze
        logger.info(
            f"New {rows}x{cols} maze (algorithm={GenerationAlgorithm(algorithm).value}, "
            f"seed={seed}, chaos={chaos})"
        )
        return result.maze

    def load(self, maze: Maze) -> Maze:
        """Make an existing maze (e.g. deserialized) the current one."""
        self.session.reset()
        self._generation = None
        self._maze = maze
        return maze

    def new_game(
        self,
        rows: int,
        cols: int,
        seed: Optional[int] = None,
        algorithm: GenerationAlgorithm = GenerationAlgorithm.KRUSKAL,
        chaos: float = 0.0,
    ) -> SessionSnapshot:
        """Generate a new maze and start playing it from its start cell."""
        self.generate(rows, cols, seed, algorithm, chaos)
        return self.start_session()

    def start_session(
        self,
        start: Optional[Cell] = None,
        goal: Optional[Cell] = None,
    ) -> SessionSnapshot:
        """Start (or restart) the session on the current maze."""
        return self.session.start(self._require_maze(), start, goal)

    def _route_ends(
        self,
        source: Optional[Cell],
        destination: Optional[Cell],
    ) -> tuple[Maze, Cell, Cell]:
        maze = self._require_maze()
        snapshot = self.session.snapshot()
        source = source or snapshot.current_cell or maze.start
        destination = destination or snapshot.goal or maze.end
        if source is None or destination is None:
            raise SessionStateError("Source and destination are required for a maze without endpoints")
        return maze, source, destination

    def solve(
        self,
        source: Optional[Cell] = None,
        destination: Optional[Cell] = None,
        algorithm: SolverAlgorithm = SolverAlgorithm.BFS,
    ) -> Path:
        """
        Solve the current maze.

        Source defaults to the player's cell (or the maze start when idle),
        destination to the session goal (or the maze end).
        """
        return solve(*self._route_ends(source, destination), algorithm)

    def solve_with_trace(
        self,
        source: Optional[Cell] = None,
        destination: Optional[Cell] = None,
        algorithm: SolverAlgorithm = SolverAlgorithm.BFS,
    ) -> SolveTrace:
        """Solve the current maze step by step, with the same defaults as solve()."""
        return solve_with_trace(*self._route_ends(source, destination), algorithm)

    def move(self, direction: Direction) -> MoveResult:
        return self.session.move(direction)

    def command(self, command: Command) -> Optional[MoveResult]:
        """Forward an abstract input command; unknown commands are ignored."""
        return self.mapper.dispatch(command)

    def hint(self) -> Optional[Direction]:
        return self.session.hint()

    def restart(self) -> SessionSnapshot:
        return self.session.restart()

    def reset(self) -> SessionSnapshot:
        """Tear down the session and forget the current maze."""
        self._generation = None
        self._maze = None
        return self.session.reset()

    def snapshot(self) -> SessionSnapshot:
        return self.session.snapshot()

    def render(self, show_solution: bool = False) -> str:
        """
        ASCII view of the current maze and player.

        Args:
            show_solution: Overlay the shortest route from the player to the goal.
        """
        maze = self._require_maze()
        snapshot = self.session.snapshot()
        path = self.solve().cells if show_solution else None
        return maze.to_ascii(player=snapshot.current_cell, path=path)
