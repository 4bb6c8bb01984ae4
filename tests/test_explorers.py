"""Tests for both exploration strategies."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from maze_runner.core.branching_explorer import BranchingExplorer
from maze_runner.core.frontier_explorer import FrontierExplorer
from maze_runner.core.grid import CellState, Grid, Position, INVALID_POSITION
from maze_runner.core.maze_parser import parse_maze_text
from maze_runner.core.runner import (
    FOUND_MESSAGE,
    NOT_FOUND_MESSAGE,
    explore_grid,
)
from maze_runner.core.state import SharedExplorationState


# Every (strategy, options) combination that must give the same outcome
CONFIGURATIONS = [
    pytest.param("frontier", {"worker_count": 5}, id="frontier-5"),
    pytest.param("frontier", {"worker_count": 1}, id="frontier-1"),
    pytest.param("branching", {"branching_mode": "bounded"}, id="branching-bounded"),
    pytest.param(
        "branching",
        {"branching_mode": "bounded", "max_branch_workers": 1},
        id="branching-bounded-1",
    ),
    pytest.param("branching", {"branching_mode": "unbounded"}, id="branching-unbounded"),
]


def explore_text(maze_text: str, strategy: str, **options):
    maze = parse_maze_text(maze_text)
    return explore_grid(maze.to_grid(), maze.entrance, maze.exit, strategy=strategy, **options)


def open_field(rows: int, cols: int, with_exit: bool = True) -> str:
    lines = [["x"] * cols for _ in range(rows)]
    lines[0][0] = "e"
    if with_exit:
        lines[rows - 1][cols - 1] = "s"
    return "\n".join([f"{rows} {cols}"] + ["".join(line) for line in lines])


COMB_MAZE = """7 9
exxxxxxxx
x#x#x#x#x
x#x#x#x#x
x#x#x#x#x
x#x#x#x#x
x#x#x#x#x
x#x#x#x#s"""


@pytest.mark.parametrize("strategy,options", CONFIGURATIONS)
class TestOutcomes:
    """Found / not-found outcomes for every strategy."""

    def test_connected_maze_found(self, strategy, options, connected_maze):
        """Test the 3x3 scenario with an open path reports found."""
        result = explore_text(connected_maze, strategy, **options)
        assert result.found is True
        assert result.message == FOUND_MESSAGE

    def test_wall_column_not_found(self, strategy, options, walled_maze):
        """Test that a wall column separating entrance and exit gives not found."""
        result = explore_text(walled_maze, strategy, **options)
        assert result.found is False
        assert result.message == NOT_FOUND_MESSAGE
        # Nothing right of the wall is ever touched
        assert result.grid.splitlines() == [".#x", ".#s", ".#x"]

    def test_entrance_without_neighbours(self, strategy, options):
        """Test that an entrance with no open neighbours gives not found."""
        result = explore_text("3 3\n###\n#e#\n##s", strategy, **options)
        assert result.found is False
        assert result.cells_visited == 1

    def test_single_cell_entrance_is_exit(self, strategy, options):
        """Test that a 1x1 maze whose entrance is the exit is found at once."""
        grid = Grid.from_rows(["e"])
        result = explore_grid(
            grid, Position(0, 0), Position(0, 0), strategy=strategy, **options
        )
        assert result.found is True
        assert result.cells_visited == 0

    def test_maze_without_exit_is_exhausted(self, strategy, options):
        """Test that every reachable cell is visited exactly once when there is no exit."""
        result = explore_text(open_field(8, 8, with_exit=False), strategy, **options)

        assert result.found is False
        assert result.cells_visited == 64
        assert set(result.grid.replace("\n", "")) == {"."}
        assert all(count == 1 for count in result.claim_counts.values())

    def test_branchy_maze_found(self, strategy, options):
        """Test a maze with many branch points."""
        result = explore_text(COMB_MAZE, strategy, **options)
        assert result.found is True

    def test_open_field_found(self, strategy, options):
        """Test a wide open field where many workers race."""
        result = explore_text(open_field(15, 15), strategy, **options)
        assert result.found is True
        assert all(count == 1 for count in result.claim_counts.values())

    def test_long_corridor(self, strategy, options):
        """Test a corridor far longer than the recursion limit."""
        maze = "1 2500\ne" + "x" * 2498 + "s"
        result = explore_text(maze, strategy, **options)
        assert result.found is True
        assert result.cells_visited == 2499

    def test_walls_never_change(self, strategy, options):
        """Test that wall cells survive exploration untouched."""
        result = explore_text(COMB_MAZE, strategy, **options)
        before = parse_maze_text(COMB_MAZE).to_grid()
        after = result.grid.splitlines()
        for pos in before.find(CellState.WALL):
            assert after[pos.row][pos.col] == "#"


class TestRepeatedRuns:
    """Outcome is deterministic even though traversal order is not."""

    @pytest.mark.parametrize("strategy,options", CONFIGURATIONS)
    def test_repeated_runs_agree(self, strategy, options):
        for _ in range(10):
            assert explore_text(COMB_MAZE, strategy, **options).found is True
            assert explore_text(
                open_field(6, 6, with_exit=False), strategy, **options
            ).found is False


class TestFrontierExplorer:
    """Worker pool specifics."""

    def test_pool_size_is_fixed(self):
        """Test that exactly N workers are started."""
        result = explore_text(open_field(10, 10), "frontier", worker_count=3)
        assert result.tasks_started == 3
        assert result.peak_concurrency == 3

    def test_invalid_worker_count(self):
        """Test that an empty pool is rejected."""
        state = SharedExplorationState(Grid.from_rows(["ex"]), Position(0, 0))
        with pytest.raises(ValueError, match="worker_count"):
            FrontierExplorer(state, worker_count=0)

    def test_sink_receives_snapshot_per_claim(self):
        """Test that one snapshot is published after each claim."""
        sink = RecordingSink()
        result = explore_text(open_field(5, 5, with_exit=False), "frontier", sink=sink)
        assert len(sink.snapshots) == result.cells_visited == 25


class TestBranchingExplorer:
    """Fork-per-branch specifics."""

    def test_bounded_mode_caps_concurrency(self):
        """Test that bounded mode never exceeds the pool size."""
        result = explore_text(
            open_field(12, 12, with_exit=False),
            "branching",
            branching_mode="bounded",
            max_branch_workers=3,
        )
        assert result.found is False
        assert result.peak_concurrency <= 3

    def test_unbounded_spawns_per_branch(self):
        """Test that unbounded mode forks one task per extra branch."""
        result = explore_text(COMB_MAZE, "branching", branching_mode="unbounded")
        # The top corridor has four side branches below it
        assert result.tasks_started >= 5

    def test_dead_end_corridor_uses_one_task(self):
        """Test that a corridor without branches never forks."""
        for mode in ("bounded", "unbounded"):
            result = explore_text("1 5\nexxxs", "branching", branching_mode=mode)
            assert result.found is True
            assert result.tasks_started == 1

    def test_invalid_mode(self):
        """Test that an unknown mode is rejected."""
        state = SharedExplorationState(Grid.from_rows(["ex"]), Position(0, 0))
        with pytest.raises(ValueError, match="Invalid branching mode"):
            BranchingExplorer(state, mode="forever")

    def test_sink_receives_snapshot_per_claim(self):
        """Test that one snapshot is published after each claim."""
        sink = RecordingSink()
        result = explore_text(
            open_field(5, 5, with_exit=False), "branching", sink=sink
        )
        assert len(sink.snapshots) == result.cells_visited == 25


class TestExplorerFailures:
    """A failing worker must surface as an error, never as an outcome."""

    @pytest.mark.parametrize("strategy,options", CONFIGURATIONS)
    def test_sink_failure_is_raised(self, strategy, options):
        """Test that an error inside a worker propagates out of the run."""
        sink = FailingSink()
        with pytest.raises(RuntimeError, match="display went away"):
            explore_text("1 5\nexxxs", strategy, sink=sink, **options)
        assert sink.calls >= 1

    def test_failure_stops_other_workers(self):
        """Test that a failed frontier worker makes the rest of the pool stop."""
        maze = parse_maze_text(open_field(20, 20, with_exit=False))
        state = SharedExplorationState(maze.to_grid(), maze.entrance, maze.exit)
        explorer = FrontierExplorer(state, worker_count=4, sink=FailingSink(fail_on=3))

        with pytest.raises(RuntimeError):
            explorer.run()

        assert state.should_stop() is True
        assert state.is_found() is False
        assert state.cells_visited() < 400

    def test_rejected_submit_does_not_hang(self, monkeypatch):
        """Test that a pool refusing new work ends the run with that error."""
        original_submit = ThreadPoolExecutor.submit
        submitted = []

        def submit_once(executor, fn, *args, **kwargs):
            if submitted:
                raise RuntimeError("cannot schedule new futures after shutdown")
            submitted.append(args)
            return original_submit(executor, fn, *args, **kwargs)

        monkeypatch.setattr(ThreadPoolExecutor, "submit", submit_once)

        maze = parse_maze_text(COMB_MAZE)
        state = SharedExplorationState(maze.to_grid(), maze.entrance, maze.exit)
        explorer = BranchingExplorer(state, mode="bounded")

        with pytest.raises(RuntimeError, match="cannot schedule"):
            explorer.run()
        assert explorer._outstanding == 0


class TestOrchestrator:
    """Tests for explore_grid preconditions and results."""

    def test_invalid_entrance_rejected(self):
        """Test that the sentinel entrance stops the run before it starts."""
        with pytest.raises(ValueError, match="not a valid position"):
            explore_grid(Grid.from_rows(["xs"]), INVALID_POSITION)

    def test_invalid_strategy_rejected(self):
        with pytest.raises(ValueError, match="Invalid strategy"):
            explore_grid(Grid.from_rows(["es"]), Position(0, 0), strategy="dfs")

    def test_result_to_dict(self, connected_maze):
        """Test the serialized result."""
        d = explore_text(connected_maze, "frontier").to_dict()
        assert d["found"] is True
        assert d["message"] == FOUND_MESSAGE
        assert d["strategy"] == "frontier"
        assert d["elapsed_ms"] >= 0
        assert len(d["grid"].splitlines()) == 3


class RecordingSink:
    """Sink that keeps every snapshot it receives."""

    def __init__(self):
        self.snapshots: list[str] = []
        self._lock = threading.Lock()

    def publish(self, snapshot: str) -> None:
        with self._lock:
            self.snapshots.append(snapshot)


class FailingSink:
    """Sink whose display breaks on the Nth snapshot."""

    def __init__(self, fail_on: int = 1):
        self.fail_on = fail_on
        self.calls = 0
        self._lock = threading.Lock()

    def publish(self, snapshot: str) -> None:
        with self._lock:
            self.calls += 1
            if self.calls >= self.fail_on:
                raise RuntimeError("display went away")
