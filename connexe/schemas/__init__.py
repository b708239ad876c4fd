# Schemas module
from .maze import CellData, MazeData

__all__ = [
    "CellData",
    "MazeData",
]
