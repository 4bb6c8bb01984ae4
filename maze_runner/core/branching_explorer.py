"""
Branching explorer.

Walks the maze depth-first. At every branch point the walker keeps the
first reserved neighbour for itself and forks one concurrent task for
each of the others.

Modes:
    bounded   - forks go to a capped thread pool; the explorer waits for
                the outstanding task count to drain to zero.
    unbounded - every fork starts a new thread, and each task joins the
                tasks it forked before returning. Thread count grows with
                the number of branch points.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Literal, Optional

from maze_runner.core.display import PresentationSink
from maze_runner.core.grid import Position
from maze_runner.core.state import SharedExplorationState

logger = logging.getLogger(__name__)

BranchingMode = Literal["bounded", "unbounded"]
BRANCHING_MODES = ("bounded", "unbounded")
DEFAULT_MAX_BRANCH_WORKERS = 8


class BranchingExplorer:
    """Fork-per-branch walker over the shared maze."""

    strategy = "branching"

    def __init__(
        self,
        state: SharedExplorationState,
        mode: BranchingMode = "bounded",
        max_workers: int = DEFAULT_MAX_BRANCH_WORKERS,
        step_delay: float = 0.0,
        sink: Optional[PresentationSink] = None,
    ):
        if mode not in BRANCHING_MODES:
            raise ValueError(
                f"Invalid branching mode '{mode}'. "
                f"Must be one of: {', '.join(BRANCHING_MODES)}"
            )
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.state = state
        self.mode = mode
        self.max_workers = max_workers
        self.step_delay = step_delay
        self.sink = sink

        self.tasks_started = 0
        self.peak_concurrency = 0

        self._stats_lock = threading.Lock()
        self._running = 0
        self._outstanding = 0
        self._idle = threading.Condition(self._stats_lock)
        self._errors: list[BaseException] = []
        self._executor: Optional[ThreadPoolExecutor] = None

    def run(self) -> None:
        """Explore from the entrance and block until every task has finished."""
        if self.mode == "unbounded":
            with self._stats_lock:
                self._outstanding += 1
            self._task(self.state.entrance)
        else:
            with ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix="branch-worker",
            ) as executor:
                self._executor = executor
                self._fork(self.state.entrance)
                with self._idle:
                    while self._outstanding:
                        self._idle.wait()
            self._executor = None

        logger.debug(
            f"Branching ({self.mode}) finished: {self.tasks_started} tasks, "
            f"peak concurrency {self.peak_concurrency}"
        )
        if self._errors:
            raise self._errors[0]

    def _fork(self, pos: Position) -> Optional[threading.Thread]:
        """Start a concurrent task at pos. Returns a thread to join in unbounded mode."""
        with self._stats_lock:
            self._outstanding += 1

        try:
            if self.mode == "unbounded":
                thread = threading.Thread(
                    target=self._task, args=(pos,), name=f"branch-{pos.row}-{pos.col}"
                )
                thread.start()
                return thread
            self._executor.submit(self._task, pos)
        except RuntimeError:
            # Task never started; give back its slot so run() can finish
            with self._idle:
                self._outstanding -= 1
                self._idle.notify_all()
            raise
        return None

    def _task(self, pos: Position) -> None:
        with self._stats_lock:
            self.tasks_started += 1
            self._running += 1
            self.peak_concurrency = max(self.peak_concurrency, self._running)
        try:
            self._walk(pos)
        except Exception as e:
            logger.exception(f"Branch task at {pos.to_dict()} failed")
            with self._stats_lock:
                self._errors.append(e)
            self.state.abort()
        finally:
            with self._idle:
                self._running -= 1
                self._outstanding -= 1
                self._idle.notify_all()

    def _walk(self, pos: Position) -> None:
        children: list[threading.Thread] = []
        current: Optional[Position] = pos

        try:
            while current is not None:
                if self.state.should_stop():
                    break

                if self.state.is_exit(current):
                    self.state.mark_exit(current)
                    logger.info(f"Branch task reached the exit at {current.to_dict()}")
                    break

                if not self.state.try_claim(current):
                    break

                if self.sink is not None:
                    self.sink.publish(self.state.snapshot())
                if self.step_delay:
                    time.sleep(self.step_delay)

                reserved = [n for n in current.neighbors() if self.state.reserve(n)]
                if not reserved:
                    # Dead end
                    break

                for branch in reserved[1:]:
                    child = self._fork(branch)
                    if child is not None:
                        children.append(child)
                current = reserved[0]
        finally:
            for child in children:
                child.join()
