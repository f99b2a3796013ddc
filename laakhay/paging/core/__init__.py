"""Core components."""

from .enums import StatusClass, exit_status_for
from .exceptions import (
    ClientError,
    PagingError,
    PaginationError,
    ProtocolError,
    ServerError,
    StatusError,
    TransportError,
    UnexpectedStatusError,
)

__all__ = [
    "StatusClass",
    "exit_status_for",
    "PagingError",
    "TransportError",
    "ProtocolError",
    "StatusError",
    "ClientError",
    "ServerError",
    "UnexpectedStatusError",
    "PaginationError",
]
