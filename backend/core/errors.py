"""Error types raised by the task service.

Request-scoped errors derive from :class:`TaskServiceError` and carry the
HTTP status and the message that is safe to show to the client.
:class:`StartupFailure` is separate: it is never rendered as a response and
ends the process.
"""


class TaskServiceError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(TaskServiceError):
    status_code = 400
    message = "Invalid request"


class NotFound(TaskServiceError):
    status_code = 404
    message = "Task not found"


class StoreUnavailable(TaskServiceError):
    status_code = 500
    message = "Database error"


class StartupFailure(Exception):
    """Raised when the store could not be reached within the retry budget."""

    def __init__(self, attempts: int, last_error: BaseException | None = None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Could not connect to the database after {attempts} attempt(s): {last_error}")
