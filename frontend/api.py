"""HTTP client for the task service."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A request failed; ``message`` is what the view shows."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TasksApiClient:
    """
    Talks to the task service.

    The time probe walks ``base_urls`` in order and stops at the first one
    that answers.  Task calls always go to the first base URL.
    """

    def __init__(self, base_urls: Sequence[str], timeout: float = 5.0, http: Optional[httpx.Client] = None):
        if not base_urls:
            raise ValueError("at least one base URL is required")
        self.base_urls = [url.rstrip("/") for url in base_urls]
        self._http = http or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "TasksApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    def fetch_time(self) -> str:
        for base_url in self.base_urls:
            url = f"{base_url}/api"
            logger.debug("Trying URL: %s", url)
            try:
                response = self._http.get(url, headers={"Content-Type": "application/json"})
                if response.is_success:
                    data = response.json()
                    if isinstance(data, dict) and "time" in data:
                        logger.debug("Success with URL: %s", url)
                        return str(data["time"])
                logger.debug("Failed with URL %s: HTTP %s", url, response.status_code)
            except (httpx.HTTPError, ValueError) as exc:
                logger.debug("Failed with URL %s: %s", url, exc)
        raise ApiError("All connection attempts failed")

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def list_tasks(self) -> List[Dict[str, Any]]:
        return _decode(self._request("GET", "/api/tasks", "Failed to fetch tasks"), "Failed to fetch tasks")

    def create_task(self, title: str) -> Dict[str, Any]:
        response = self._request("POST", "/api/tasks", "Failed to create task", json={"title": title})
        return _decode(response, "Failed to create task")

    def toggle_task(self, task_id: int) -> Dict[str, Any]:
        response = self._request("PATCH", f"/api/tasks/{task_id}/toggle", "Failed to update task")
        return _decode(response, "Failed to update task")

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/api/tasks/{task_id}", "Failed to delete task")

    def _request(self, method: str, path: str, fallback: str, **kwargs) -> httpx.Response:
        try:
            response = self._http.request(method, f"{self.base_urls[0]}{path}", **kwargs)
        except httpx.HTTPError as exc:
            raise ApiError(fallback) from exc

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("error") if isinstance(body, dict) else None
            raise ApiError(message or fallback, response.status_code)
        return response


def _decode(response: httpx.Response, fallback: str) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise ApiError(fallback, response.status_code) from exc
