"""Batch execution of request descriptors over one pooled session.

This module provides the BatchExecutor class. A batch is dispatched as a
whole over the shared HTTP session; responses are consumed in completion
order and matched back to their descriptors by a correlation token that
travels with each physical request. Descriptors themselves (and any context
they carry) never go over the wire.

Invariants:
    - Every descriptor yields exactly one ResponseRecord, or the batch fails.
    - Records come back in completion order, not submission order.
    - An empty batch makes no physical call.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Iterable
from typing import Any

from ...config import TransportConfig
from ...core.enums import StatusClass
from ...core.exceptions import ProtocolError, TransportError
from ...models.records import ResponseRecord
from ...models.request import RequestDescriptor
from ..telemetry import LoggingTraceSink, TraceSink, emit
from .builder import PreparedRequest, build_request
from .http_client import HTTPClient, RawResponse


def decode_body(raw: RawResponse, url: str | None = None) -> Any:
    """Decode a response body.

    Empty bodies decode to None. A 2xx body must be JSON; other bodies that
    are not JSON are kept as text.

    Raises:
        ProtocolError: A 2xx body is not valid JSON
    """
    if not raw.content:
        return None
    try:
        return json.loads(raw.content)
    except ValueError as e:
        if StatusClass.of(raw.status) == StatusClass.SUCCESS:
            raise ProtocolError(
                f"Response from {url} is not valid JSON: {e}", url=url
            ) from e
        return raw.content.decode("utf-8", errors="replace")


class BatchExecutor:
    """Executes batches of descriptors as one multiplexed session."""

    def __init__(
        self,
        client: HTTPClient | None = None,
        *,
        config: TransportConfig | None = None,
        method: str = "GET",
        sink: TraceSink | None = None,
    ) -> None:
        """Initialize batch executor.

        Args:
            client: HTTP client to share; one is created from ``config`` if omitted
            config: Transport configuration for a client created here
            method: HTTP method used for every request of a batch
            sink: Trace sink for progress events
        """
        self._owns_client = client is None
        self._client = client or HTTPClient(config)
        self._method = method.upper()
        self._sink = sink or LoggingTraceSink()

    @property
    def client(self) -> HTTPClient:
        return self._client

    @property
    def sink(self) -> TraceSink:
        return self._sink

    async def stream(self, descriptors: Iterable[RequestDescriptor]) -> AsyncIterator[ResponseRecord]:
        """Dispatch a batch and yield records as responses arrive.

        Raises:
            TransportError: Any request of the batch failed to complete
            ProtocolError: A response could not be decoded or correlated
        """
        batch = list(descriptors)
        if not batch:
            return

        pending: dict[int, RequestDescriptor] = {}
        prepared: list[PreparedRequest] = []
        for token, descriptor in enumerate(batch, start=1):
            pending[token] = descriptor
            request = build_request(
                descriptor, token=token, method=self._method, base_url=self._client.base_url
            )
            prepared.append(request)
            emit(self._sink, "request_sent", request=request.describe(), token=token)

        tasks = [asyncio.ensure_future(self._dispatch(request)) for request in prepared]
        try:
            for next_done in asyncio.as_completed(tasks):
                token, raw = await next_done
                descriptor = pending.pop(token, None)
                if descriptor is None:
                    raise ProtocolError(f"Response carried unknown or repeated token {token}")
                record = ResponseRecord(
                    request=descriptor,
                    token=token,
                    response_code=raw.status,
                    body=decode_body(raw, descriptor.url),
                    size=len(raw.content),
                    elapsed_ms=raw.elapsed_ms,
                )
                emit(
                    self._sink,
                    "response_received",
                    url=descriptor.url,
                    token=token,
                    response_code=raw.status,
                    size=record.size,
                    latency_ms=raw.elapsed_ms,
                )
                yield record
        except TransportError as e:
            emit(
                self._sink,
                "batch_failed",
                logging.ERROR,
                url=e.url,
                exit_code=e.exit_code,
                error_message=str(e),
                batch_size=len(batch),
            )
            raise
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        if pending:
            raise ProtocolError(f"No response for request tokens {sorted(pending)}")
        emit(self._sink, "batch_completed", batch_size=len(batch))

    async def execute(self, descriptors: Iterable[RequestDescriptor]) -> list[ResponseRecord]:
        """Run a batch to completion and return all of its records."""
        return [record async for record in self.stream(descriptors)]

    async def _dispatch(self, request: PreparedRequest) -> tuple[int, RawResponse]:
        raw = await self._client.send(request)
        return request.token, raw

    async def close(self) -> None:
        if self._owns_client:
            await self._client.close()

    async def __aenter__(self) -> BatchExecutor:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
