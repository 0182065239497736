# ♥♥─── Debounced Saver ─────────────────────────────────────────────────────────
from __future__ import annotations

from typing import TYPE_CHECKING
import threading

from studly.custom_logger import log


if TYPE_CHECKING:
    from collections.abc import Callable


class DebouncedSaver:
    """Collapse bursts of save requests into one write after a quiet period.

    Every ``schedule()`` cancels the timer that has not fired yet and re-arms it.
    Writes run on the timer thread and never overlap.
    """

    def __init__(self, delay: float = 0.2, name: str = "saver") -> None:
        """Initialize the saver.

        :param delay: Seconds to wait after the last request before writing.
        :param name: Name used in log messages and for the timer thread.
        """
        self.delay = max(0.0, float(delay))
        self.name = name
        self._timer: threading.Timer | None = None
        self._pending: Callable[[], object] | None = None
        self._state_lock = threading.Lock()
        self._write_lock = threading.Lock()
        self.write_count = 0

    @property
    def has_pending(self) -> bool:
        with self._state_lock:
            return self._pending is not None

    def schedule(self, write: Callable[[], object]) -> None:
        """Request ``write`` to run once ``delay`` seconds have passed without another request."""
        with self._state_lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = write
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.name = f"{self.name}-timer"
            self._timer.daemon = True
            self._timer.start()
        log.debug("{}: save scheduled in {:.2f}s", self.name, self.delay)

    def flush(self) -> bool:
        """Run the pending write now, on the calling thread.

        :returns: True if a write was pending and executed.
        """
        with self._state_lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            write, self._pending = self._pending, None
        if write is None:
            return False
        self._run(write)
        return True

    def cancel(self) -> None:
        """Drop the pending write without running it."""
        with self._state_lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            dropped = self._pending is not None
            self._pending = None
        if dropped:
            log.debug("{}: pending save dropped", self.name)

    def _fire(self) -> None:
        with self._state_lock:
            if threading.current_thread() is not self._timer:
                return
            self._timer = None
            write, self._pending = self._pending, None
        if write is not None:
            self._run(write)

    def _run(self, write: Callable[[], object]) -> None:
        with self._write_lock:
            try:
                write()
            except Exception as e:
                log.error("{}: save failed: {}", self.name, e)
                return
            self.write_count += 1
