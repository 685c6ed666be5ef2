"""Background thread that refreshes the clock of a ClientView."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .view import ClientView

logger = logging.getLogger(__name__)


class TimePoller:
    """
    Calls ``view.refresh_time()`` right away and then every *interval*
    seconds until stopped.  A slow fetch delays the next one; overlapping
    manual actions are not guarded against.
    """

    def __init__(self, view: ClientView, interval: float = 8.0):
        self.view = view
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.view.refresh_time()
            except Exception:
                logger.error("Error in time poller", exc_info=True)
            self._stop.wait(self.interval)

    def start(self) -> threading.Thread:
        """Spawn the polling daemon thread and return it."""
        t = threading.Thread(target=self._run, name="time-poller", daemon=True)
        self._thread = t
        t.start()
        return t

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
