"""
Connexe Input Command Mapper

Thin adapter between already-decoded input commands (keyboard, controller,
console text) and NavigationSession.move(). Device decoding happens in the
front-ends; this module only knows about command names and Direction.

Unrecognized commands are ignored, never raised.
"""

import logging
from typing import Optional, Union

from .grid import Direction
from .session import MoveResult, NavigationSession

logger = logging.getLogger(__name__)

Command = Union[Direction, str]

DEFAULT_BINDINGS: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "north": Direction.UP,
    "south": Direction.DOWN,
    "west": Direction.LEFT,
    "east": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}


class InputCommandMapper:
    """Feeds abstract directional commands into a navigation session."""

    def __init__(
        self,
        session: NavigationSession,
        bindings: Optional[dict[str, Direction]] = None,
    ):
        """
        Args:
            session: The session receiving moves.
            bindings: Command name -> direction table. Defaults to
                DEFAULT_BINDINGS. Names are matched case-insensitively.
        """
        self.session = session
        source = bindings if bindings is not None else DEFAULT_BINDINGS
        self.bindings = {name.strip().lower(): direction for name, direction in source.items()}

    def translate(self, command: Command) -> Optional[Direction]:
        """Get the direction for a command, or None if it is not recognized."""
        if isinstance(command, Direction):
            return command
        if not isinstance(command, str):
            return None
        return self.bindings.get(command.strip().lower())

    def dispatch(self, command: Command) -> Optional[MoveResult]:
        """
        Translate a command and apply it to the session.

        Returns:
            The session's MoveResult, or None when the command was ignored.
        """
        direction = self.translate(command)
        if direction is None:
            logger.debug(f"Ignoring unrecognized command: {command!r}")
            return None
        return self.session.move(direction)
