"""
View state of the client: the database clock and the task list.

Every handler catches its own :class:`ApiError` and records the message;
a failed call never clears what was loaded before.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List

from .api import ApiError, TasksApiClient

logger = logging.getLogger(__name__)

TIME_ERROR_TEXT = "Couldn't connect to server"


class ClientView:
    def __init__(self, api: TasksApiClient):
        self.api = api
        self.time_text = "Loading..."
        self.time_loading = True
        self.time_error = False
        self.tasks: List[Dict[str, Any]] = []
        self.tasks_loading = False
        self.tasks_error = ""
        # The poller thread refreshes the clock while the user edits tasks.
        self._lock = threading.RLock()

    def mount(self) -> None:
        """Initial load: clock and task list."""
        self.refresh_time()
        self.load_tasks()

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------

    def refresh_time(self) -> None:
        with self._lock:
            self.time_loading = True
        try:
            value = self.api.fetch_time()
        except ApiError as exc:
            logger.warning("Error fetching time: %s", exc.message)
            with self._lock:
                self.time_error = True
                self.time_loading = False
            return
        with self._lock:
            self.time_text = value
            self.time_error = False
            self.time_loading = False

    @property
    def clock_text(self) -> str:
        return TIME_ERROR_TEXT if self.time_error else self.time_text

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def load_tasks(self) -> None:
        with self._lock:
            self.tasks_loading = True
            self.tasks_error = ""
        try:
            tasks = self.api.list_tasks()
        except ApiError as exc:
            logger.warning("Error fetching tasks: %s", exc.message)
            with self._lock:
                self.tasks_error = exc.message
            return
        finally:
            with self._lock:
                self.tasks_loading = False
        with self._lock:
            self.tasks = list(tasks)

    def add_task(self, title: str) -> bool:
        """Create a task; returns True when it was added to the list."""
        trimmed = (title or "").strip()
        if not trimmed:
            return False
        with self._lock:
            self.tasks_error = ""
        try:
            created = self.api.create_task(trimmed)
        except ApiError as exc:
            logger.warning("Error creating task: %s", exc.message)
            with self._lock:
                self.tasks_error = exc.message
            return False
        with self._lock:
            self.tasks = [created, *self.tasks]
        return True

    def toggle_task(self, task_id: int) -> bool:
        with self._lock:
            self.tasks_error = ""
        try:
            updated = self.api.toggle_task(task_id)
        except ApiError as exc:
            logger.warning("Error toggling task: %s", exc.message)
            with self._lock:
                self.tasks_error = exc.message
            return False
        with self._lock:
            self.tasks = [updated if task["id"] == updated["id"] else task for task in self.tasks]
        return True

    def delete_task(self, task_id: int) -> bool:
        with self._lock:
            self.tasks_error = ""
        try:
            self.api.delete_task(task_id)
        except ApiError as exc:
            logger.warning("Error deleting task: %s", exc.message)
            with self._lock:
                self.tasks_error = exc.message
            return False
        with self._lock:
            self.tasks = [task for task in self.tasks if task["id"] != task_id]
        return True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> str:
        with self._lock:
            lines = [f"Database time: {self.clock_text}", "", "Tasks"]
            if self.tasks_error:
                lines.append(f"Error: {self.tasks_error}")
            if self.tasks_loading:
                lines.append("Loading tasks...")
            elif not self.tasks:
                lines.append("No tasks yet. Add one above.")
            else:
                for task in self.tasks:
                    mark = "x" if task["is_done"] else " "
                    status = "done" if task["is_done"] else "not done"
                    lines.append(f"  [{mark}] {task['id']:>4}  {task['title']} ({status})")
            return "\n".join(lines)
