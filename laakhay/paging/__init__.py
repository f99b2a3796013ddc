"""Laakhay Paging - batched retrieval of paginated REST resources."""

from .config import TransportConfig
from .core import (
    ClientError,
    PagingError,
    PaginationError,
    ProtocolError,
    ServerError,
    StatusClass,
    StatusError,
    TransportError,
    UnexpectedStatusError,
    exit_status_for,
)
from .models import FetchResult, RequestDescriptor, ResponseRecord
from .runtime import (
    BatchExecutor,
    BoundedRangePaginator,
    HeuristicPaginator,
    HTTPClient,
    IndexPolicy,
    LoggingTraceSink,
    MethodInvoker,
    NullTraceSink,
    PagePolicy,
    RequestFacade,
    TraceSink,
)

__version__ = "0.1.0"

__all__ = [
    "TransportConfig",
    "RequestDescriptor",
    "ResponseRecord",
    "FetchResult",
    "HTTPClient",
    "BatchExecutor",
    "RequestFacade",
    "MethodInvoker",
    "HeuristicPaginator",
    "BoundedRangePaginator",
    "PagePolicy",
    "IndexPolicy",
    "TraceSink",
    "LoggingTraceSink",
    "NullTraceSink",
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
