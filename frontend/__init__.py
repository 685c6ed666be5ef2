"""Polling client for the task service."""

from .api import ApiError, TasksApiClient
from .config import ClientConfig
from .poller import TimePoller
from .view import TIME_ERROR_TEXT, ClientView

__all__ = [
    "ApiError",
    "ClientConfig",
    "ClientView",
    "TIME_ERROR_TEXT",
    "TasksApiClient",
    "TimePoller",
]
