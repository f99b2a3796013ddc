"""Response records produced by the executor and the facade."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.enums import StatusClass
from .request import RequestDescriptor


@dataclass(frozen=True)
class ResponseRecord:
    """A physical response correlated back to its descriptor.

    Attributes:
        request: Descriptor that produced this response
        token: Per-batch correlation ordinal
        response_code: HTTP status code
        body: Decoded JSON body, text for non-JSON error bodies, or None when empty
        size: Byte count of the raw body
        elapsed_ms: Time from dispatch to full body receipt
    """

    request: RequestDescriptor
    token: int
    response_code: int
    body: Any = None
    size: int = 0
    elapsed_ms: float | None = None

    @property
    def url(self) -> str:
        return self.request.url

    @property
    def status_class(self) -> StatusClass:
        return StatusClass.of(self.response_code)

    def to_dict(self) -> dict[str, Any]:
        data = self.request.to_dict()
        data["response_code"] = str(self.response_code)
        data["body"] = self.body
        return data


@dataclass(frozen=True)
class FetchResult:
    """A classified response: status stripped, body under ``output``."""

    request: RequestDescriptor
    output: Any = None

    @property
    def url(self) -> str:
        return self.request.url

    @property
    def context(self) -> dict[str, Any]:
        return self.request.context

    def to_dict(self) -> dict[str, Any]:
        data = self.request.to_dict()
        data["output"] = self.output
        return data
