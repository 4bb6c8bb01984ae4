#!/usr/bin/env python3
"""
Command-line entry point for Maze Runner.

Usage:
    maze-runner <maze_file>

Prints exactly one line to stdout, the exploration outcome. Rendering and
diagnostics go to stderr. Tuning comes from MAZE_RUNNER_* environment
variables (see maze_runner.config.Settings).
"""

import logging
import sys
from typing import Optional

from pydantic import ValidationError

from maze_runner.config import Settings, get_settings
from maze_runner.core.display import TerminalRenderer
from maze_runner.core.maze_parser import MazeLoadError, load_maze_file
from maze_runner.core.runner import run_exploration

logger = logging.getLogger("maze_runner")

USAGE = "Usage: maze-runner <maze_file>"


class ConfigurationError(Exception):
    """Exception raised for bad command-line usage or invalid settings."""

    pass


def load_settings() -> Settings:
    """Load settings, turning validation failures into ConfigurationError."""
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = sys.argv[1:] if argv is None else argv

    try:
        if len(args) != 1:
            raise ConfigurationError(USAGE)
        settings = load_settings()
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        return 1

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    try:
        maze = load_maze_file(args[0])
    except MazeLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info(f"Loaded maze '{maze.name}' ({maze.rows}x{maze.cols})")

    if settings.display_enabled:
        with TerminalRenderer(sys.stderr) as renderer:
            result = run_exploration(maze, settings, sink=renderer)
    else:
        result = run_exploration(maze, settings)

    print(result.message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
