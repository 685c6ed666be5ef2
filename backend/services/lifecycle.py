"""Service lifecycle: Starting -> Connecting -> (Ready | Failed)."""

from __future__ import annotations

import enum
import logging
import threading
from typing import Callable, Optional

from backend.core.errors import StartupFailure
from backend.database.connection import connect_with_retry
from backend.database.storage import TaskStore

logger = logging.getLogger(__name__)


class ServiceState(enum.Enum):
    STARTING = "starting"
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"


_TRANSITIONS = {
    ServiceState.STARTING: {ServiceState.CONNECTING, ServiceState.READY},
    ServiceState.CONNECTING: {ServiceState.READY, ServiceState.FAILED},
    ServiceState.READY: set(),
    ServiceState.FAILED: set(),
}


class ServiceLifecycle:
    """
    Tracks the startup state of the service and owns the connected store.

    ``on_ready`` callbacks run exactly once, with the store, when the
    service enters ``READY``; this is where request handlers get registered.
    """

    def __init__(self) -> None:
        self._state = ServiceState.STARTING
        self._lock = threading.Lock()
        self._on_ready: list[Callable[[TaskStore], None]] = []
        self.store: Optional[TaskStore] = None
        self.error: Optional[StartupFailure] = None

    @property
    def state(self) -> ServiceState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ServiceState.READY

    def on_ready(self, callback: Callable[[TaskStore], None]) -> None:
        self._on_ready.append(callback)

    def _transition(self, new_state: ServiceState) -> None:
        with self._lock:
            if new_state not in _TRANSITIONS[self._state]:
                raise RuntimeError(f"Invalid lifecycle transition: {self._state.value} -> {new_state.value}")
            logger.info("Service state: %s -> %s", self._state.value, new_state.value)
            self._state = new_state

    def attach(self, store: TaskStore) -> TaskStore:
        """Enter READY with an already connected store whose schema exists."""
        self._transition(ServiceState.READY)
        self.store = store
        for callback in self._on_ready:
            callback(store)
        return store

    def connect(
        self,
        url: str,
        max_attempts: int = 10,
        delay: float = 5.0,
        **retry_kwargs,
    ) -> TaskStore:
        """
        Connect with retries and enter READY, or enter FAILED and re-raise
        the :class:`StartupFailure`.

        Creating the tasks table is part of each attempt, so a database that
        accepts connections but is not usable yet is retried too.
        """
        self._transition(ServiceState.CONNECTING)
        try:
            engine = connect_with_retry(
                url,
                max_attempts,
                delay,
                prepare=lambda eng: TaskStore(eng).create_schema(),
                **retry_kwargs,
            )
        except StartupFailure as exc:
            self.error = exc
            self._transition(ServiceState.FAILED)
            raise
        return self.attach(TaskStore(engine))
