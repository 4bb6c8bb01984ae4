"""
Shared exploration state.

One instance is created per run and handed by reference to every worker
or branch task. A single lock guards the grid, the found flag, the
frontier queue and the in-flight counter; every claim-or-skip decision
is made inside one critical section.
"""

import threading
from collections import Counter, deque
from enum import Enum
from typing import Iterable, Optional

from maze_runner.core.grid import CellState, Grid, Position

CLAIMABLE = (CellState.OPEN, CellState.ENTRANCE, CellState.FRONTIER)
ENQUEUEABLE = (CellState.OPEN, CellState.EXIT)


class DequeueStatus(Enum):
    """What a frontier worker should do after asking for work."""
    WORK = "work"
    WAIT = "wait"
    STOP = "stop"


class SharedExplorationState:
    """
    Single source of truth mutated by all workers.

    Example usage:
        state = SharedExplorationState(grid, entrance, exit_pos)
        if state.try_claim(pos):
            ...
        if state.is_exit(pos):
            state.mark_exit(pos)
    """

    def __init__(
        self,
        grid: Grid,
        entrance: Position,
        exit_pos: Optional[Position] = None,
    ):
        if not grid.in_bounds(entrance.row, entrance.col):
            raise ValueError(
                f"Entrance {entrance.to_dict()} is not a valid position in a "
                f"{grid.rows}x{grid.cols} maze"
            )
        self.grid = grid
        self.entrance = entrance
        self.exit = exit_pos

        self._lock = threading.Lock()
        self._found = False
        self._aborted = False
        self._frontier: deque[Position] = deque()
        self._in_flight = 0
        self._claims: Counter[Position] = Counter()

    # Claiming

    def try_claim(self, pos: Position) -> bool:
        """
        Claim a cell for the calling worker.

        Returns True and marks the cell VISITED only if it was OPEN,
        ENTRANCE or FRONTIER. Walls, exits, visited and out-of-bounds
        cells are never claimed.
        """
        with self._lock:
            if not self.grid.in_bounds(pos.row, pos.col):
                return False
            if self.grid.at(pos.row, pos.col) not in CLAIMABLE:
                return False
            self.grid.set(pos.row, pos.col, CellState.VISITED)
            self._claims[pos] += 1
            return True

    def reserve(self, pos: Position) -> bool:
        """
        Reserve a neighbour for a branch task.

        OPEN cells become FRONTIER so no sibling branch can take them. The
        exit cell is left untouched but still reported as reservable.
        """
        with self._lock:
            if not self.grid.in_bounds(pos.row, pos.col):
                return False
            cell = self.grid.at(pos.row, pos.col)
            if cell == CellState.OPEN:
                self.grid.set(pos.row, pos.col, CellState.FRONTIER)
                return True
            return cell == CellState.EXIT

    def mark_exit(self, pos: Position) -> None:
        """Mark the exit visited and raise the found flag. Idempotent."""
        with self._lock:
            if self.grid.in_bounds(pos.row, pos.col):
                self.grid.set(pos.row, pos.col, CellState.VISITED)
            self._found = True

    def is_found(self) -> bool:
        return self._found

    def abort(self) -> None:
        """Ask every worker to stop after a failure. Leaves found untouched."""
        with self._lock:
            self._aborted = True

    def should_stop(self) -> bool:
        return self._found or self._aborted

    def is_exit(self, pos: Position) -> bool:
        return self.exit is not None and pos == self.exit

    # Frontier queue

    def seed(self, pos: Position) -> None:
        with self._lock:
            self._frontier.append(pos)

    def push_frontier(self, positions: Iterable[Position]) -> int:
        """Enqueue every in-bounds OPEN or EXIT position. Returns how many."""
        pushed = 0
        with self._lock:
            for pos in positions:
                if not self.grid.in_bounds(pos.row, pos.col):
                    continue
                if self.grid.at(pos.row, pos.col) in ENQUEUEABLE:
                    self._frontier.append(pos)
                    pushed += 1
        return pushed

    def next_position(self) -> tuple[DequeueStatus, Optional[Position]]:
        """
        Pop the next frontier position.

        STOP once the exit is found, or once the queue is empty with no
        worker still processing. WAIT when the queue is empty but another
        worker may still refill it. A WORK result must be paired with
        task_done().
        """
        with self._lock:
            if self._found or self._aborted:
                return DequeueStatus.STOP, None
            if self._frontier:
                self._in_flight += 1
                return DequeueStatus.WORK, self._frontier.popleft()
            if self._in_flight == 0:
                return DequeueStatus.STOP, None
            return DequeueStatus.WAIT, None

    def task_done(self) -> None:
        with self._lock:
            self._in_flight -= 1

    def frontier_size(self) -> int:
        with self._lock:
            return len(self._frontier)

    # Inspection

    def snapshot(self) -> str:
        """Grid render taken under the lock, so only committed state shows."""
        with self._lock:
            return self.grid.render()

    def claim_counts(self) -> dict[Position, int]:
        with self._lock:
            return dict(self._claims)

    def cells_visited(self) -> int:
        with self._lock:
            return sum(self._claims.values())
