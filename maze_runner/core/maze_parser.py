"""
Maze Parser for Maze Runner.

Loads and validates maze files from the filesystem.

Maze Format:
    First line: two positive integers, row count and column count.
    Then one line per row, each at least column-count characters long.

    e = Entrance (exactly one)
    s = Exit (at most one)
    x = Open path
    any other character = Wall
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from maze_runner.core.grid import Grid, Position

logger = logging.getLogger(__name__)


class MazeLoadError(Exception):
    """Base exception for any failure while loading a maze."""

    pass


class MazeParseError(MazeLoadError):
    """Exception raised when maze parsing fails."""

    pass


class MazeValidationError(MazeLoadError):
    """Exception raised when maze validation fails."""

    pass


@dataclass
class ParsedMaze:
    """Parsed maze data ready for exploration."""

    name: str
    rows: int
    cols: int
    grid_data: str
    entrance: Position
    exit: Optional[Position] = None

    def to_grid(self) -> Grid:
        """Build a fresh Grid from the parsed body."""
        return Grid.from_rows(self.grid_data.split("\n"))

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "rows": self.rows,
            "cols": self.cols,
            "grid_data": self.grid_data,
            "entrance": self.entrance.to_dict(),
            "exit": self.exit.to_dict() if self.exit else None,
        }


def _parse_header(line: str) -> tuple[int, int]:
    parts = line.split()
    if len(parts) != 2:
        raise MazeParseError(
            f"Header must contain row and column counts, got '{line.strip()}'"
        )
    try:
        rows, cols = int(parts[0]), int(parts[1])
    except ValueError as e:
        raise MazeParseError(f"Header is not numeric: '{line.strip()}'") from e

    if rows <= 0 or cols <= 0:
        raise MazeParseError(
            f"Maze dimensions must be positive, got {rows}x{cols}"
        )
    return rows, cols


def parse_maze_text(maze_text: str, name: str = "Unnamed") -> ParsedMaze:
    """
    Parse maze text and extract metadata.

    Args:
        maze_text: Header line followed by the maze rows.
        name: Name of the maze.

    Returns:
        ParsedMaze with grid data and entrance/exit positions.

    Raises:
        MazeParseError: If the maze cannot be parsed.
        MazeValidationError: If the maze is invalid.
    """
    if not maze_text or not maze_text.strip():
        raise MazeParseError("Maze text is empty")

    # Only \n and \r\n end a row; other control characters are walls
    lines = [line.removesuffix("\r") for line in maze_text.split("\n")]
    rows, cols = _parse_header(lines[0])

    body = lines[1:rows + 1]
    if len(body) < rows:
        raise MazeParseError(
            f"Maze declares {rows} rows but only {len(body)} were found"
        )

    entrance: Optional[Position] = None
    exit_pos: Optional[Position] = None
    grid_lines = []

    for row, line in enumerate(body):
        if len(line) < cols:
            raise MazeParseError(
                f"Row {row} has {len(line)} characters, expected at least {cols}"
            )
        # Characters past the declared width are ignored
        line = line[:cols]
        grid_lines.append(line)

        for col, char in enumerate(line):
            if char == "e":
                if entrance is not None:
                    raise MazeValidationError(
                        f"Multiple entrances found: "
                        f"first at {entrance.to_dict()}, second at "
                        f"{Position(row, col).to_dict()}"
                    )
                entrance = Position(row, col)
            elif char == "s":
                if exit_pos is not None:
                    raise MazeValidationError(
                        f"Multiple exits found: "
                        f"first at {exit_pos.to_dict()}, second at "
                        f"{Position(row, col).to_dict()}"
                    )
                exit_pos = Position(row, col)

    if entrance is None:
        raise MazeValidationError("Maze must have an entrance (e)")

    return ParsedMaze(
        name=name,
        rows=rows,
        cols=cols,
        grid_data="\n".join(grid_lines),
        entrance=entrance,
        exit=exit_pos,
    )


def load_maze_file(
    file_path: Path | str,
    name: Optional[str] = None,
) -> ParsedMaze:
    """
    Load and parse a maze file from the filesystem.

    Args:
        file_path: Path to the maze file.
        name: Optional name override. If not provided, uses filename.

    Returns:
        ParsedMaze with grid data and entrance/exit positions.

    Raises:
        MazeParseError: If the file cannot be read or parsed.
        MazeValidationError: If the maze is invalid.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise MazeParseError(f"Maze file not found: {file_path}")

    if not file_path.is_file():
        raise MazeParseError(f"Path is not a file: {file_path}")

    try:
        maze_text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MazeParseError(f"Failed to read maze file: {e}") from e

    if name is None:
        name = file_path.stem.replace("_", " ").replace("-", " ").title()

    return parse_maze_text(maze_text, name=name)


def load_all_mazes(mazes_dir: Path | str) -> list[ParsedMaze]:
    """
    Load all maze files from a directory.

    Invalid files are logged and skipped.

    Raises:
        MazeParseError: If the path does not exist or is not a directory.
    """
    mazes_dir = Path(mazes_dir)

    if not mazes_dir.exists():
        raise MazeParseError(f"Mazes directory not found: {mazes_dir}")

    if not mazes_dir.is_dir():
        raise MazeParseError(f"Path is not a directory: {mazes_dir}")

    mazes = []
    for maze_file in sorted(mazes_dir.glob("*.txt")):
        try:
            mazes.append(load_maze_file(maze_file))
        except MazeLoadError as e:
            logger.warning(f"Failed to load {maze_file}: {e}")

    return mazes


def validate_maze_text(maze_text: str) -> tuple[bool, Optional[str]]:
    """
    Validate maze text without raising exceptions.

    Returns:
        Tuple of (is_valid, error_message).
        error_message is None if valid.
    """
    try:
        parse_maze_text(maze_text)
        return True, None
    except MazeLoadError as e:
        return False, str(e)
