"""Presentation sinks that receive grid snapshots during exploration."""

import logging
import queue
import sys
import threading
from typing import Optional, Protocol, TextIO

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\033[2J\033[1;1H"


class PresentationSink(Protocol):
    """Anything that accepts full grid snapshots for display."""

    def publish(self, snapshot: str) -> None:
        ...


class NullSink:
    """Sink that discards every snapshot."""

    def publish(self, snapshot: str) -> None:
        pass


class TerminalRenderer:
    """
    Draws grid snapshots to a terminal from its own thread.

    Workers only enqueue snapshots, so display latency never holds up
    traversal. When snapshots arrive faster than they can be drawn, only
    the newest one is rendered.

    Example usage:
        with TerminalRenderer(sys.stderr) as renderer:
            run_exploration(maze, sink=renderer)
    """

    _STOP = object()

    def __init__(self, stream: Optional[TextIO] = None, clear: bool = True):
        self.stream = stream or sys.stderr
        self.clear = clear
        self.frames_drawn = 0
        self._queue: queue.Queue = queue.Queue()
        self._thread: Optional[threading.Thread] = None

    def publish(self, snapshot: str) -> None:
        self._queue.put_nowait(snapshot)

    def start(self) -> "TerminalRenderer":
        if self._thread is None:
            self._thread = threading.Thread(
                target=self._run, name="maze-renderer", daemon=True
            )
            self._thread.start()
        return self

    def stop(self) -> None:
        """Draw whatever is still pending and stop the render thread."""
        if self._thread is None:
            return
        self._queue.put(self._STOP)
        self._thread.join()
        self._thread = None
        logger.debug(f"Renderer stopped after {self.frames_drawn} frames")

    def __enter__(self) -> "TerminalRenderer":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            stopping = item is self._STOP
            latest = None if stopping else item

            # Coalesce backlog down to the newest snapshot
            while True:
                try:
                    pending = self._queue.get_nowait()
                except queue.Empty:
                    break
                if pending is self._STOP:
                    stopping = True
                else:
                    latest = pending

            if latest is not None:
                self._draw(latest)
            if stopping:
                return

    def _draw(self, snapshot: str) -> None:
        if self.clear:
            self.stream.write(CLEAR_SCREEN)
        self.stream.write(snapshot + "\n")
        self.stream.flush()
        self.frames_drawn += 1
