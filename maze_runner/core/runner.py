"""
Exploration orchestrator.

Builds the shared state for one run, hands it to the chosen explorer,
waits for every worker to finish and reads the outcome exactly once.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from maze_runner.config import Settings
from maze_runner.core.branching_explorer import (
    DEFAULT_MAX_BRANCH_WORKERS,
    BranchingExplorer,
)
from maze_runner.core.display import PresentationSink
from maze_runner.core.frontier_explorer import DEFAULT_WORKER_COUNT, FrontierExplorer
from maze_runner.core.grid import Grid, Position
from maze_runner.core.maze_parser import ParsedMaze
from maze_runner.core.state import SharedExplorationState

logger = logging.getLogger(__name__)

FOUND_MESSAGE = "Exit found!"
NOT_FOUND_MESSAGE = "No exit found."

STRATEGIES = ("frontier", "branching")


@dataclass
class ExplorationResult:
    """Final outcome of one exploration run."""

    found: bool
    strategy: str
    cells_visited: int
    tasks_started: int
    peak_concurrency: int
    elapsed_seconds: float
    grid: str
    claim_counts: dict[Position, int] = field(default_factory=dict, repr=False)

    @property
    def message(self) -> str:
        return FOUND_MESSAGE if self.found else NOT_FOUND_MESSAGE

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "found": self.found,
            "message": self.message,
            "strategy": self.strategy,
            "cells_visited": self.cells_visited,
            "tasks_started": self.tasks_started,
            "peak_concurrency": self.peak_concurrency,
            "elapsed_ms": round(self.elapsed_seconds * 1000, 3),
            "grid": self.grid,
        }


def explore_grid(
    grid: Grid,
    entrance: Position,
    exit_pos: Optional[Position] = None,
    strategy: str = "frontier",
    worker_count: int = DEFAULT_WORKER_COUNT,
    branching_mode: str = "bounded",
    max_branch_workers: int = DEFAULT_MAX_BRANCH_WORKERS,
    step_delay: float = 0.0,
    poll_interval: float = 0.001,
    sink: Optional[PresentationSink] = None,
) -> ExplorationResult:
    """
    Explore a grid from its entrance until the exit is found or nothing is left.

    Args:
        grid: Grid to explore. It is mutated in place.
        entrance: Starting position. An out-of-bounds entrance (such as
            INVALID_POSITION) is rejected before any worker starts.
        exit_pos: Exit position, if the maze has one.
        strategy: "frontier" (worker pool) or "branching" (fork per branch).
        worker_count: Frontier pool size.
        branching_mode: "bounded" or "unbounded" spawning for branching.
        max_branch_workers: Pool cap for bounded branching.
        step_delay: Seconds to sleep after each claim, for visualization.
        poll_interval: Seconds an idle frontier worker waits before polling.
        sink: Receives a grid snapshot after every claim.

    Returns:
        ExplorationResult with the outcome and run statistics.

    Raises:
        ValueError: If the entrance or strategy is invalid.
    """
    if strategy not in STRATEGIES:
        raise ValueError(
            f"Invalid strategy '{strategy}'. Must be one of: {', '.join(STRATEGIES)}"
        )

    state = SharedExplorationState(grid, entrance, exit_pos)

    if strategy == "frontier":
        explorer = FrontierExplorer(
            state,
            worker_count=worker_count,
            step_delay=step_delay,
            poll_interval=poll_interval,
            sink=sink,
        )
    else:
        explorer = BranchingExplorer(
            state,
            mode=branching_mode,
            max_workers=max_branch_workers,
            step_delay=step_delay,
            sink=sink,
        )

    logger.info(
        f"Exploring {grid.rows}x{grid.cols} maze from {entrance.to_dict()} "
        f"with {strategy} strategy"
    )
    start_time = time.perf_counter()
    explorer.run()
    elapsed = time.perf_counter() - start_time

    found = state.is_found()
    result = ExplorationResult(
        found=found,
        strategy=strategy,
        cells_visited=state.cells_visited(),
        tasks_started=explorer.tasks_started,
        peak_concurrency=explorer.peak_concurrency,
        elapsed_seconds=elapsed,
        grid=state.snapshot(),
        claim_counts=state.claim_counts(),
    )
    logger.info(
        f"{result.message} ({result.cells_visited} cells, "
        f"{result.tasks_started} tasks, {elapsed * 1000:.2f}ms)"
    )
    return result


def run_exploration(
    maze: ParsedMaze,
    settings: Settings,
    sink: Optional[PresentationSink] = None,
    strategy: Optional[str] = None,
    worker_count: Optional[int] = None,
    branching_mode: Optional[str] = None,
) -> ExplorationResult:
    """Explore a parsed maze using settings, with optional per-run overrides."""
    return explore_grid(
        maze.to_grid(),
        maze.entrance,
        maze.exit,
        strategy=strategy or settings.strategy,
        worker_count=worker_count or settings.worker_count,
        branching_mode=branching_mode or settings.branching_mode,
        max_branch_workers=settings.max_branch_workers,
        step_delay=settings.step_delay if sink is not None else 0.0,
        poll_interval=settings.poll_interval,
        sink=sink,
    )
