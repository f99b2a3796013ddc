"""Custom exception hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..models.request import RequestDescriptor


class PagingError(Exception):
    """Base exception for all library errors."""

    pass


class TransportError(PagingError):
    """The physical call mechanism failed (connectivity, TLS, timeout).

    Always fatal to the batch in progress. ``exit_code`` follows curl's
    numbering so callers can branch on it the same way.
    """

    def __init__(self, message: str, exit_code: int = 1, url: str | None = None) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.url = url


class ProtocolError(PagingError):
    """A response could not be parsed or correlated to its request."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class StatusError(PagingError):
    """A response arrived with a status the caller cannot accept."""

    def __init__(
        self,
        message: str,
        status_code: int,
        url: str | None = None,
        request: RequestDescriptor | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url
        self.request = request
        self.body = body

    @property
    def exit_status(self) -> int:
        """Compact process exit status: ``status - 400`` for 4xx/5xx, else 1."""
        from .enums import exit_status_for

        return exit_status_for(self.status_code)


class ClientError(StatusError):
    """4xx response where full success was required."""

    pass


class ServerError(StatusError):
    """5xx response."""

    pass


class UnexpectedStatusError(StatusError):
    """1xx, unfollowed 3xx or otherwise unclassifiable status."""

    pass


class PaginationError(PagingError):
    """One or more resources aborted during pagination.

    Sibling resources are allowed to finish before this is raised, so
    output already emitted for them stays valid.
    """

    exit_code = 1

    def __init__(self, message: str, failures: list[tuple[Any, BaseException]] | None = None) -> None:
        super().__init__(message)
        self.failures = failures or []
