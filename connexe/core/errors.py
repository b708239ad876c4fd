"""Exceptions raised by the Connexe maze engine."""


class ConnexeError(Exception):
    """Base exception for all engine errors."""

    pass


class InvalidDimension(ConnexeError, ValueError):
    """Raised when a grid is requested with a non-positive size."""

    pass


class InvalidCell(ConnexeError, ValueError):
    """Raised when a cell lies outside the grid bounds."""

    pass


class InvalidEdge(ConnexeError, ValueError):
    """Raised when an edge joins two cells that are not adjacent."""

    pass


class NoPathFound(ConnexeError):
    """Raised when the destination cannot be reached from the source."""

    pass


class SessionStateError(ConnexeError):
    """Raised when a session operation is not allowed in the current state."""

    pass


class MazeFormatError(ConnexeError, ValueError):
    """Raised when a serialized maze cannot be decoded."""

    pass
