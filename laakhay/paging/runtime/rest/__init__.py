"""REST runtime: batch executor, status facade and method invoker."""

from .builder import PreparedRequest, build_request, join_url
from .executor import BatchExecutor, decode_body
from .facade import RequestFacade, classify
from .http_client import HTTPClient, RawResponse, transport_exit_code
from .invoker import Invocation, MethodInvoker

__all__ = [
    "HTTPClient",
    "RawResponse",
    "PreparedRequest",
    "BatchExecutor",
    "RequestFacade",
    "MethodInvoker",
    "Invocation",
    "build_request",
    "join_url",
    "decode_body",
    "classify",
    "transport_exit_code",
]
