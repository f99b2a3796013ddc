"""Status classification shared by the executor, facade and invoker."""

from __future__ import annotations

from enum import Enum


class StatusClass(str, Enum):
    """Outcome class of an HTTP status code."""

    SUCCESS = "success"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    UNEXPECTED = "unexpected"

    @classmethod
    def of(cls, status: int) -> StatusClass:
        if 200 <= status < 300:
            return cls.SUCCESS
        if 400 <= status < 500:
            return cls.CLIENT_ERROR
        if 500 <= status < 600:
            return cls.SERVER_ERROR
        return cls.UNEXPECTED

    @property
    def is_terminal_response(self) -> bool:
        """Whether the facade hands the response to the caller (2xx or 4xx)."""
        return self in (StatusClass.SUCCESS, StatusClass.CLIENT_ERROR)


def exit_status_for(status: int) -> int:
    """Map an HTTP status to a process exit status.

    2xx maps to 0, 4xx/5xx to ``status - 400`` (404 -> 4, 500 -> 100),
    anything else to 1.

    Examples:
        >>> exit_status_for(204)
        0
        >>> exit_status_for(404)
        4
        >>> exit_status_for(503)
        103
        >>> exit_status_for(302)
        1
    """
    status_class = StatusClass.of(status)
    if status_class == StatusClass.SUCCESS:
        return 0
    if status_class in (StatusClass.CLIENT_ERROR, StatusClass.SERVER_ERROR):
        return status - 400
    return 1
