"""Exploration schemas for request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field


class MazePosition(BaseModel):
    """Schema for a position in the maze."""

    row: int
    col: int


class ExploreRequest(BaseModel):
    """Schema for an exploration request.

    The maze uses the file format: a "rows cols" header line followed by
    the maze rows.
    """

    maze: str = Field(..., min_length=1)
    strategy: Optional[str] = Field(None, pattern="^(frontier|branching)$")
    worker_count: Optional[int] = Field(None, ge=1, le=64)
    branching_mode: Optional[str] = Field(None, pattern="^(bounded|unbounded)$")


class ExploreResponse(BaseModel):
    """Schema for an exploration outcome."""

    found: bool
    message: str
    strategy: str
    rows: int
    cols: int
    entrance: MazePosition
    exit: Optional[MazePosition] = None
    cells_visited: int
    tasks_started: int
    peak_concurrency: int
    elapsed_ms: float
    grid: str
