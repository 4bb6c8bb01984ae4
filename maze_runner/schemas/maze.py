"""Maze schemas for request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field


class MazeValidateRequest(BaseModel):
    """Schema for validating maze text."""

    maze: str = Field(..., min_length=1)


class MazeValidateResponse(BaseModel):
    """Schema for maze validation result."""

    valid: bool
    error: Optional[str] = None
    rows: Optional[int] = None
    cols: Optional[int] = None
