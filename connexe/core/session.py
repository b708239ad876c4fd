"""
Connexe Navigation Session

One interactive play-through of a maze:
- Current player cell and move counter
- Move history and replay
- Win detection when the goal cell is reached

State machine:
    IDLE --start()--> PLAYING --reach goal--> WON
    WON/PLAYING --start()/restart()--> PLAYING
    any --reset()--> IDLE

Bumping into a wall is not an error: the move is reported as "blocked" and
the session is left unchanged.

Threading:
    Mutations are serialized by a lock. After every transition an immutable
    SessionSnapshot is published with a single assignment, so renderers can
    read snapshot() from any thread without blocking the writer.
"""

import logging
import threading
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

from .errors import InvalidCell, SessionStateError
from .grid import Cell, Direction
from .maze import Maze
from .maze_solver import next_direction

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Lifecycle state of a navigation session."""
    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session, safe to share across threads."""
    state: SessionState
    current_cell: Optional[Cell] = None
    move_count: int = 0
    start: Optional[Cell] = None
    goal: Optional[Cell] = None

    @property
    def won(self) -> bool:
        return self.state is SessionState.WON

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "state": self.state.value,
            "current_cell": self.current_cell.to_dict() if self.current_cell else None,
            "move_count": self.move_count,
            "start": self.start.to_dict() if self.start else None,
            "goal": self.goal.to_dict() if self.goal else None,
        }


@dataclass
class MoveResult:
    """Result of a move action."""
    status: Literal["moved", "blocked", "completed"]
    cell: Cell
    moves: int
    message: Optional[str] = None

    @property
    def accepted(self) -> bool:
        """True when the player actually changed cell."""
        return self.status != "blocked"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        result = {
            "status": self.status,
            "cell": self.cell.to_dict(),
            "moves": self.moves,
        }
        if self.message:
            result["message"] = self.message
        return result


class NavigationSession:
    """
    Stateful navigation over a single maze.

    Example usage:
        session = NavigationSession()
        session.start(maze, Cell(0, 0), Cell(2, 2))

        result = session.move(Direction.RIGHT)
        if result.status == "completed":
            print(f"Escaped in {result.moves} moves!")
    """

    def __init__(self, session_id: Optional[str] = None):
        """
        Create an idle session.

        Args:
            session_id: Optional custom session ID. If not provided, generates one.
        """
        self.session_id = session_id or f"sess_{uuid.uuid4().hex[:12]}"
        self._lock = threading.RLock()

        self._maze: Optional[Maze] = None
        self._start: Optional[Cell] = None
        self._goal: Optional[Cell] = None
        self._current: Optional[Cell] = None
        self._move_count = 0
        self._history: list[Direction] = []
        self._state = SessionState.IDLE
        self._snapshot = SessionSnapshot(SessionState.IDLE)

    # --- State queries ---

    @property
    def maze(self) -> Optional[Maze]:
        return self._maze

    @property
    def state(self) -> SessionState:
        return self._snapshot.state

    @property
    def current_cell(self) -> Optional[Cell]:
        return self._snapshot.current_cell

    @property
    def move_count(self) -> int:
        return self._snapshot.move_count

    @property
    def won(self) -> bool:
        return self._snapshot.won

    @property
    def start_cell(self) -> Optional[Cell]:
        return self._snapshot.start

    @property
    def goal(self) -> Optional[Cell]:
        return self._snapshot.goal

    @property
    def history(self) -> tuple[Direction, ...]:
        """Directions of every accepted move, oldest first."""
        with self._lock:
            return tuple(self._history)

    def snapshot(self) -> SessionSnapshot:
        """Get the latest published state. Never blocks."""
        return self._snapshot

    def _publish(self) -> SessionSnapshot:
        snapshot = SessionSnapshot(
            state=self._state,
            current_cell=self._current,
            move_count=self._move_count,
            start=self._start,
            goal=self._goal,
        )
        self._snapshot = snapshot
        return snapshot

    # --- Transitions ---

    def start(
        self,
        maze: Maze,
        start: Optional[Cell] = None,
        goal: Optional[Cell] = None,
    ) -> SessionSnapshot:
        """
        Start playing a maze.

        Args:
            maze: The maze to navigate.
            start: Player start cell; defaults to the maze's start.
            goal: Cell to reach; defaults to the maze's end.

        Returns:
            Snapshot of the new session state.

        Raises:
            InvalidCell: If start or goal is missing or outside the maze.
        """
        start = start if start is not None else maze.start
        goal = goal if goal is not None else maze.end
        if start is None or goal is None:
            raise InvalidCell("Start and goal cells are required for a maze without endpoints")
        maze.grid.check_cell(start)
        maze.grid.check_cell(goal)

        with self._lock:
            self._maze = maze
            self._start = start
            self._goal = goal
            self._current = start
            self._move_count = 0
            self._history = []
            self._state = SessionState.WON if start == goal else SessionState.PLAYING
            snapshot = self._publish()

        logger.info(
            f"Session {self.session_id} started on {maze.rows}x{maze.cols} maze: "
            f"{start} -> {goal}"
        )
        return snapshot

    def restart(self) -> SessionSnapshot:
        """
        Play the current maze again from its start cell.

        Raises:
            SessionStateError: If no maze is loaded.
        """
        with self._lock:
            if self._maze is None:
                raise SessionStateError("No maze loaded - start a session first")
            return self.start(self._maze, self._start, self._goal)

    def move(self, direction: Direction) -> MoveResult:
        """
        Try to move the player one cell.

        Args:
            direction: Direction to move.

        Returns:
            MoveResult: "moved", "blocked" (wall, nothing changed) or
            "completed" (goal reached).

        Raises:
            SessionStateError: If the session is not playing.
        """
        direction = Direction(direction)
        with self._lock:
            if self._state is SessionState.IDLE:
                raise SessionStateError("No maze loaded - start a session first")
            if self._state is SessionState.WON:
                raise SessionStateError("Session already completed - reset to play again")

            candidate = self._current.move(direction)
            if not self._maze.grid.contains(candidate) or not self._maze.is_open(
                self._current, candidate
            ):
                return MoveResult(
                    status="blocked",
                    cell=self._current,
                    moves=self._move_count,
                    message=f"Cannot move {direction.value} - wall blocking",
                )

            self._current = candidate
            self._move_count += 1
            self._history.append(direction)

            if candidate == self._goal:
                self._state = SessionState.WON
                self._publish()
                logger.info(
                    f"Session {self.session_id} completed in {self._move_count} moves"
                )
                return MoveResult(
                    status="completed",
                    cell=candidate,
                    moves=self._move_count,
                    message="Congratulations! You escaped the maze!",
                )

            self._publish()
            return MoveResult(status="moved", cell=candidate, moves=self._move_count)

    def reset(self) -> SessionSnapshot:
        """Drop the maze and go back to IDLE. Allowed in any state."""
        with self._lock:
            self._maze = None
            self._start = None
            self._goal = None
            self._current = None
            self._move_count = 0
            self._history = []
            self._state = SessionState.IDLE
            snapshot = self._publish()

        logger.info(f"Session {self.session_id} reset")
        return snapshot

    # --- Helpers ---

    def hint(self) -> Optional[Direction]:
        """
        Get the next move on the shortest route to the goal.

        Returns:
            A direction, or None once the goal is reached.

        Raises:
            SessionStateError: If no maze is loaded.
            NoPathFound: If the goal is unreachable from the player's cell.
        """
        with self._lock:
            if self._maze is None:
                raise SessionStateError("No maze loaded - start a session first")
            return next_direction(self._maze, self._current, self._goal)

    def replay(self) -> list[Cell]:
        """Rebuild the sequence of cells visited so far, start cell included."""
        with self._lock:
            if self._start is None:
                return []
            cells = [self._start]
            for direction in self._history:
                cells.append(cells[-1].move(direction))
            return cells

    def visualize(self) -> str:
        """ASCII view of the maze with the player drawn as '@'."""
        snapshot = self._snapshot
        maze = self._maze
        if maze is None:
            return ""
        return maze.to_ascii(player=snapshot.current_cell)
