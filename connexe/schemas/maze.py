"""Maze schemas for the serialized maze contract."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CellData(BaseModel):
    """Schema for a cell of the maze."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)


class MazeData(BaseModel):
    """
    Schema for a serialized maze: dimensions plus the list of open edges.

    Start and end are optional but must be given together.
    """

    version: int = 1
    rows: int = Field(..., gt=0)
    cols: int = Field(..., gt=0)
    edges: list[tuple[CellData, CellData]] = Field(default_factory=list)
    start: Optional[CellData] = None
    end: Optional[CellData] = None

    @model_validator(mode="after")
    def check_endpoints(self) -> "MazeData":
        """Validate that start and end are either both set or both empty."""
        if (self.start is None) != (self.end is None):
            raise ValueError("start and end must be provided together")
        return self
