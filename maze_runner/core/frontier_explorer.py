"""
Frontier queue explorer.

A fixed pool of worker threads drains a shared FIFO queue of positions,
breadth-first. Each worker:

    Idle -> Dequeue -> (ExitCheck | ProcessCell) -> EnqueueNeighbors -> Idle

and stops once the exit is found or the queue is empty with no worker
still processing a cell.
"""

import logging
import threading
import time
from typing import Optional

from maze_runner.core.display import PresentationSink
from maze_runner.core.state import DequeueStatus, SharedExplorationState

logger = logging.getLogger(__name__)

DEFAULT_WORKER_COUNT = 5


class FrontierExplorer:
    """Bounded worker pool over a shared frontier queue."""

    strategy = "frontier"

    def __init__(
        self,
        state: SharedExplorationState,
        worker_count: int = DEFAULT_WORKER_COUNT,
        step_delay: float = 0.0,
        poll_interval: float = 0.001,
        sink: Optional[PresentationSink] = None,
    ):
        if worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {worker_count}")
        self.state = state
        self.worker_count = worker_count
        self.step_delay = step_delay
        self.poll_interval = poll_interval
        self.sink = sink

        self.tasks_started = 0
        self.peak_concurrency = 0

        self._errors: list[BaseException] = []
        self._errors_lock = threading.Lock()

    def run(self) -> None:
        """Seed the queue with the entrance and block until all workers stop."""
        self.state.seed(self.state.entrance)

        threads = [
            threading.Thread(
                target=self._work,
                args=(worker_id,),
                name=f"frontier-worker-{worker_id}",
            )
            for worker_id in range(self.worker_count)
        ]
        for thread in threads:
            thread.start()
        self.tasks_started = len(threads)
        self.peak_concurrency = len(threads)

        for thread in threads:
            thread.join()

        if self._errors:
            raise self._errors[0]

    def _work(self, worker_id: int) -> None:
        try:
            self._drain(worker_id)
        except Exception as e:
            logger.exception(f"Worker {worker_id} failed")
            with self._errors_lock:
                self._errors.append(e)
            self.state.abort()

    def _drain(self, worker_id: int) -> None:
        processed = 0
        while True:
            status, pos = self.state.next_position()
            if status is DequeueStatus.STOP:
                break
            if status is DequeueStatus.WAIT:
                time.sleep(self.poll_interval)
                continue

            try:
                if self.state.is_exit(pos):
                    self.state.mark_exit(pos)
                    logger.info(f"Worker {worker_id} reached the exit at {pos.to_dict()}")
                    break

                if not self.state.try_claim(pos):
                    # Already claimed by another worker
                    continue
                processed += 1

                if self.sink is not None:
                    self.sink.publish(self.state.snapshot())
                if self.step_delay:
                    time.sleep(self.step_delay)

                self.state.push_frontier(pos.neighbors())
            finally:
                self.state.task_done()

        logger.debug(f"Worker {worker_id} stopped after claiming {processed} cells")
