# Core module
from .grid import CellState, Grid, Position, INVALID_POSITION
from .state import SharedExplorationState, DequeueStatus
from .frontier_explorer import FrontierExplorer
from .branching_explorer import BranchingExplorer
from .display import PresentationSink, NullSink, TerminalRenderer
from .maze_parser import (
    MazeLoadError,
    MazeParseError,
    MazeValidationError,
    ParsedMaze,
    parse_maze_text,
    load_maze_file,
    load_all_mazes,
    validate_maze_text,
)
from .runner import (
    ExplorationResult,
    FOUND_MESSAGE,
    NOT_FOUND_MESSAGE,
    explore_grid,
    run_exploration,
)

__all__ = [
    "CellState",
    "Grid",
    "Position",
    "INVALID_POSITION",
    "SharedExplorationState",
    "DequeueStatus",
    "FrontierExplorer",
    "BranchingExplorer",
    "PresentationSink",
    "NullSink",
    "TerminalRenderer",
    "MazeLoadError",
    "MazeParseError",
    "MazeValidationError",
    "ParsedMaze",
    "parse_maze_text",
    "load_maze_file",
    "load_all_mazes",
    "validate_maze_text",
    "ExplorationResult",
    "FOUND_MESSAGE",
    "NOT_FOUND_MESSAGE",
    "explore_grid",
    "run_exploration",
]
