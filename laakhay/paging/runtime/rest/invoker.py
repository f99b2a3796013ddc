"""Single-call helper that reports outcomes as process exit statuses."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ...core.enums import StatusClass, exit_status_for
from ...core.exceptions import (
    ClientError,
    ProtocolError,
    ServerError,
    StatusError,
    TransportError,
    UnexpectedStatusError,
)
from ..telemetry import LoggingTraceSink, TraceSink, emit, redact_headers
from .builder import join_url
from .executor import decode_body
from .http_client import HTTPClient

_STATUS_ERRORS: dict[StatusClass, type[StatusError]] = {
    StatusClass.CLIENT_ERROR: ClientError,
    StatusClass.SERVER_ERROR: ServerError,
    StatusClass.UNEXPECTED: UnexpectedStatusError,
}


@dataclass(frozen=True)
class Invocation:
    """Outcome of one call.

    Attributes:
        method: HTTP method
        url: Requested URL
        exit_status: 0 on 2xx, ``status - 400`` on 4xx/5xx, 1 for other statuses,
            or the transport failure code when no response arrived
        status: HTTP status, None on transport failure
        body: Decoded body; only populated on 2xx
    """

    method: str
    url: str
    exit_status: int
    status: int | None = None
    body: Any = None

    @property
    def ok(self) -> bool:
        """2xx response. Not the same as ``exit_status == 0``: a 400 also maps to 0."""
        if self.status is None or self.exit_status != 0:
            return False
        return StatusClass.of(self.status) == StatusClass.SUCCESS

    def raise_for_status(self) -> Invocation:
        """Raise the error matching this outcome, or return self on success."""
        if self.ok:
            return self
        if self.status is None:
            raise TransportError(
                f"{self.method} {self.url} failed", exit_code=self.exit_status, url=self.url
            )
        status_class = StatusClass.of(self.status)
        if status_class == StatusClass.SUCCESS:
            raise ProtocolError(f"{self.method} {self.url} returned a malformed body", url=self.url)
        error_cls = _STATUS_ERRORS[status_class]
        raise error_cls(
            f"{self.method} {self.url} returned {self.status}",
            status_code=self.status,
            url=self.url,
        )


class MethodInvoker:
    """Make one arbitrary-method request and map the outcome to an exit status.

    Per-call ``headers`` carry method specific and sensitive material
    (tokens, content types); they reach the transport and nothing else.
    """

    def __init__(self, client: HTTPClient, sink: TraceSink | None = None) -> None:
        self._client = client
        self._sink = sink or LoggingTraceSink()

    async def invoke(
        self,
        method: str,
        url: str,
        *,
        params: Sequence[str] = (),
        json_body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Invocation:
        method = method.upper()
        url = join_url(self._client.base_url, url)
        query = [(p.partition("=")[0], p.partition("=")[2]) for p in params]

        emit(
            self._sink,
            "request_started",
            method=method,
            url=url,
            params=list(params),
            headers=redact_headers(headers),
        )
        try:
            raw = await self._client.request(
                method, url, params=query, json_body=json_body, headers=headers
            )
        except TransportError as e:
            emit(
                self._sink,
                "request_failed",
                logging.ERROR,
                method=method,
                url=url,
                exit_code=e.exit_code,
                error_message=str(e),
            )
            return Invocation(method=method, url=url, exit_status=e.exit_code)

        exit_status = exit_status_for(raw.status)
        body = None
        if StatusClass.of(raw.status) == StatusClass.SUCCESS:
            try:
                body = decode_body(raw, url)
            except ProtocolError:
                emit(self._sink, "malformed_body", logging.ERROR, method=method, url=url)
                exit_status = 1
        emit(
            self._sink,
            "invocation_completed",
            method=method,
            url=url,
            response_code=raw.status,
            exit_status=exit_status,
            size=len(raw.content),
        )
        return Invocation(method=method, url=url, exit_status=exit_status, status=raw.status, body=body)

    async def get(self, url: str, *params: str, headers: Mapping[str, str] | None = None) -> Invocation:
        return await self.invoke("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        json_body: Any = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Invocation:
        return await self.invoke("POST", url, json_body=json_body, headers=headers)
