"""
Structured event log for task mutations.
Emits one JSON line per create/toggle/delete so the history of the list can
be reconstructed from the service output.
"""

import logging
import sys
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

# Dedicated logger for task events
event_logger = logging.getLogger("fullstack_tasks.events")
event_logger.setLevel(logging.INFO)

# Keep events out of the root logger (avoids duplicated lines)
event_logger.propagate = False

log_handler = logging.StreamHandler(sys.stdout)
formatter = jsonlogger.JsonFormatter(
    fmt="%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%S%z"
)
log_handler.setFormatter(formatter)
event_logger.addHandler(log_handler)


def log_task_event(
    action: str,
    task_id: Optional[int] = None,
    details: Optional[Dict[str, Any]] = None,
    status: str = "success",
) -> None:
    """
    Log a structured task event.

    :param action: What happened ("create_task", "toggle_task", "delete_task")
    :param task_id: The affected task, if known
    :param details: Extra context (e.g. the new ``is_done`` value)
    :param status: "success" or "failure"
    """
    event_data = {
        "event_type": "task",
        "action": action,
        "task_id": task_id,
        "status": status,
        "details": details or {},
    }

    message = f"{action} task {task_id if task_id is not None else ''}".rstrip()
    event_logger.info(message, extra=event_data)
