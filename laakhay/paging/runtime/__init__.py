"""Runtime layer: REST batch transport, pagination and tracing."""

from .pagination import (
    BoundedRangePaginator,
    HeuristicPaginator,
    IndexPolicy,
    PagePolicy,
)
from .rest import BatchExecutor, HTTPClient, MethodInvoker, RequestFacade
from .telemetry import LoggingTraceSink, NullTraceSink, TraceSink

__all__ = [
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
]
