"""Exploration routes for running a concurrent search over a maze."""

import asyncio
import logging

from fastapi import APIRouter, HTTPException, Response, status

from maze_runner.api.deps import AppSettings
from maze_runner.core.maze_parser import MazeLoadError, parse_maze_text
from maze_runner.core.runner import run_exploration
from maze_runner.schemas.explore import ExploreRequest, ExploreResponse, MazePosition

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/explore", tags=["Exploration"])

# Read back by RequestLoggingMiddleware
STRATEGY_HEADER = "X-Exploration-Strategy"
OUTCOME_HEADER = "X-Exploration-Found"
ELAPSED_HEADER = "X-Exploration-Elapsed-Ms"


@router.post(
    "",
    response_model=ExploreResponse,
)
async def explore(
    request: ExploreRequest,
    response: Response,
    settings: AppSettings,
) -> ExploreResponse:
    """Explore a maze and report whether its exit can be reached.

    The search runs on worker threads without visualization, so the
    configured step delay does not apply. Unbounded branching starts one
    thread per branch point and is refused unless the server enables it.
    """
    if request.branching_mode == "unbounded" and not settings.api_allow_unbounded:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unbounded branching is disabled for API requests",
        )

    try:
        maze = parse_maze_text(request.maze, name="Submitted")
    except MazeLoadError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        )

    result = await asyncio.to_thread(
        run_exploration,
        maze,
        settings,
        strategy=request.strategy,
        worker_count=request.worker_count,
        branching_mode=request.branching_mode,
    )
    logger.info(
        f"Explored {maze.rows}x{maze.cols} maze with {result.strategy}: "
        f"{result.message}"
    )

    response.headers[STRATEGY_HEADER] = result.strategy
    response.headers[OUTCOME_HEADER] = "true" if result.found else "false"
    response.headers[ELAPSED_HEADER] = f"{result.elapsed_seconds * 1000:.2f}"

    return ExploreResponse(
        **result.to_dict(),
        rows=maze.rows,
        cols=maze.cols,
        entrance=MazePosition(**maze.entrance.to_dict()),
        exit=MazePosition(**maze.exit.to_dict()) if maze.exit else None,
    )
