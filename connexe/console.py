"""
Connexe Console

Text front-end for the maze engine: reads one command per line from
standard input and redraws the maze after each accepted command.

Usage:
    connexe --rows 8 --cols 12 --seed 42
    connexe --load maze.json
"""

import argparse
import logging
import sys
from typing import Optional, TextIO

from connexe.config import Settings, get_settings
from connexe.core.errors import ConnexeError
from connexe.core.grid import Cell
from connexe.core.maze_format import load_maze_file, save_maze_file
from connexe.core.maze_generator import GenerationAlgorithm
from connexe.engine import MazeEngine

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  w a s d / up down left right   move the player (@)
  hint                           show the next move toward the exit
  solve                          show the route to the exit
  restart                        play this maze again
  new                            generate a new maze
  save FILE                      save the maze as JSON
  help                           show this help
  quit                           exit"""

QUIT_COMMANDS = {"quit", "exit", "q"}


def configure_logging(settings: Settings) -> None:
    """Configure root logging for the console application."""
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class ConsoleApp:
    """Line-oriented game loop over a MazeEngine."""

    def __init__(
        self,
        engine: MazeEngine,
        rows: int,
        cols: int,
        algorithm: GenerationAlgorithm = GenerationAlgorithm.KRUSKAL,
        chaos: float = 0.0,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.engine = engine
        self.rows = rows
        self.cols = cols
        self.algorithm = algorithm
        self.chaos = chaos
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def _show(self, show_solution: bool = False) -> None:
        snapshot = self.engine.snapshot()
        self._print(self.engine.render(show_solution=show_solution))
        self._print(f"Moves: {snapshot.move_count}")

    def handle(self, line: str) -> bool:
        """
        Execute one command line.

        Returns:
            False when the user asked to quit, True otherwise.
        """
        parts = line.strip().split()
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]

        if command in QUIT_COMMANDS:
            self._print("Goodbye!")
            return False

        try:
            if command == "help":
                self._print(HELP_TEXT)
            elif command == "hint":
                direction = self.engine.hint()
                self._print(f"Hint: go {direction.value}" if direction else "You are already there!")
            elif command == "solve":
                path = self.engine.solve()
                self._show(show_solution=True)
                self._print(f"Route to the exit: {path.steps} moves")
            elif command == "restart":
                self.engine.restart()
                self._show()
            elif command == "new":
                self.engine.new_game(self.rows, self.cols, algorithm=self.algorithm, chaos=self.chaos)
                self._print("New maze generated!")
                self._show()
            elif command == "save":
                if not args:
                    self._print("Usage: save FILE")
                else:
                    path = save_maze_file(self.engine.maze, args[0])
                    self._print(f"Maze saved to {path}")
            else:
                result = self.engine.command(command)
                if result is None:
                    self._print(f"Unknown command: {command} (type 'help')")
                elif result.status == "blocked":
                    self._print(result.message)
                else:
                    self._show()
                    if result.status == "completed":
                        self._print(f"{result.message} ({result.moves} moves)")
                        self._print("Type 'restart' or 'new' to play again, 'quit' to exit.")
        except (ConnexeError, OSError) as e:
            logger.warning(f"Command {command!r} failed: {e}")
            self._print(f"Error: {e}")

        return True

    def run(self) -> int:
        """Read commands until 'quit' or end of input."""
        self._print(HELP_TEXT)
        self._show()
        while True:
            self.stdout.write("> ")
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                self._print()
                return 0
            if not self.handle(line):
                return 0


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="connexe",
        description="Generate a maze and find your way out of it.",
    )
    parser.add_argument("--rows", type=int, default=settings.default_rows, help="Number of rows")
    parser.add_argument("--cols", type=int, default=settings.default_cols, help="Number of columns")
    parser.add_argument("--seed", type=int, default=settings.default_seed, help="Random seed")
    parser.add_argument(
        "--algorithm",
        choices=[a.value for a in GenerationAlgorithm],
        default=settings.default_algorithm.value,
        help="Generation algorithm",
    )
    parser.add_argument(
        "--chaos",
        type=float,
        default=settings.chaos_probability,
        help="Probability of toggling walls to make the maze imperfect",
    )
    parser.add_argument("--load", help="Play a maze loaded from a JSON file")
    parser.add_argument("--save", help="Save the maze to a JSON file before playing")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings)
    args = build_parser(settings).parse_args(argv)
    algorithm = GenerationAlgorithm(args.algorithm)

    engine = MazeEngine()
    try:
        if args.load:
            maze = load_maze_file(args.load)
            if maze.start is None:
                # Same corners the generator uses
                maze = maze.with_endpoints(Cell(0, 0), Cell(maze.rows - 1, maze.cols - 1))
            engine.load(maze)
            engine.start_session()
        else:
            engine.new_game(args.rows, args.cols, args.seed, algorithm, args.chaos)
        if args.save:
            save_maze_file(engine.maze, args.save)
    except (ConnexeError, OSError) as e:
        logger.error(f"Could not start the game: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    app = ConsoleApp(
        engine,
        rows=engine.maze.rows,
        cols=engine.maze.cols,
        algorithm=algorithm,
        chaos=args.chaos,
    )
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
