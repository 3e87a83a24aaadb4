"""
Dev watch loop adapter.

Polls file modification times and rebuilds from scratch when anything
changes. Rebuilds run one at a time on the loop's thread.

Key behaviors:
- No rebuild while the snapshot is unchanged
- A failed rebuild is reported and the loop keeps watching
- Configurable poll interval for background mode
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

Snapshot = dict[str, float]


class PollingWatcher:
    """Rebuild-on-change loop."""

    def __init__(
        self,
        snapshot: Callable[[], Snapshot],
        rebuild: Callable[[], object],
        on_rebuild: Callable[[BaseException | None], None],
        poll_interval_seconds: float = 0.5,
    ) -> None:
        """
        Initialize watcher.

        Args:
            snapshot: Returns {path: mtime} for every watched file
            rebuild: Runs one full build; raises on failure
            on_rebuild: Notified after each rebuild with the error or None
            poll_interval_seconds: Interval between polls
        """
        self._snapshot = snapshot
        self._rebuild = rebuild
        self._on_rebuild = on_rebuild
        self._poll_interval = poll_interval_seconds
        self._last: Snapshot | None = None
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._running = False
        self.rebuilds = 0

    def prime(self) -> None:
        """Record the current state without rebuilding."""
        self._last = self._snapshot()

    def check_once(self) -> bool:
        """Rebuild if anything changed since the last check. Returns True if rebuilt."""
        current = self._snapshot()
        if current == self._last:
            return False
        self._last = current

        self.rebuilds += 1
        try:
            self._rebuild()
        except Exception as e:
            logger.warning("Rebuild failed: %s", e)
            self._on_rebuild(e)
        else:
            self._on_rebuild(None)
        return True

    def start(self) -> None:
        """Start polling on a background thread."""
        if self._running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._poll_loop, daemon=True)
        self._thread.start()
        self._running = True
        logger.info("Watching for changes (poll interval: %.1fs)", self._poll_interval)

    def stop(self) -> None:
        """Stop the watcher gracefully."""
        if not self._running:
            return

        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=5.0)
        self._running = False
        logger.info("Watcher stopped")

    def run_forever(self) -> None:
        """Poll on the calling thread until stop() is called."""
        self._running = True
        try:
            self._poll_loop()
        finally:
            self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def _poll_loop(self) -> None:
        while not self._stop_event.wait(timeout=self._poll_interval):
            try:
                self.check_once()
            except Exception:
                logger.exception("Error in watch poll loop")
