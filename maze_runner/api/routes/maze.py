"""Maze routes for checking maze definitions."""

from fastapi import APIRouter

from maze_runner.core.maze_parser import MazeLoadError, parse_maze_text
from maze_runner.schemas.maze import MazeValidateRequest, MazeValidateResponse

router = APIRouter(prefix="/maze", tags=["Mazes"])


@router.post(
    "/validate",
    response_model=MazeValidateResponse,
)
async def validate_maze(request: MazeValidateRequest) -> MazeValidateResponse:
    """Check that maze text parses and has exactly one entrance."""
    try:
        maze = parse_maze_text(request.maze)
    except MazeLoadError as e:
        return MazeValidateResponse(valid=False, error=str(e))

    return MazeValidateResponse(valid=True, rows=maze.rows, cols=maze.cols)
