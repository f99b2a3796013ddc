"""Status gate over the batch executor.

A record with a 2xx or 4xx status is handed to the caller as a FetchResult
(status stripped, body under ``output``); a 4xx is valid application data
such as "not found". Anything else stops the stream with a StatusError.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import aclosing

from ...core.enums import StatusClass
from ...core.exceptions import ServerError, StatusError, UnexpectedStatusError
from ...models.records import FetchResult, ResponseRecord
from ...models.request import RequestDescriptor
from ..telemetry import TraceSink, emit
from .executor import BatchExecutor


def classify(record: ResponseRecord) -> FetchResult:
    """Turn a 2xx/4xx record into a FetchResult.

    Raises:
        ServerError: 5xx status
        UnexpectedStatusError: any other status outside 2xx/4xx
    """
    status_class = record.status_class
    if status_class.is_terminal_response:
        return FetchResult(request=record.request, output=record.body)

    error_cls: type[StatusError] = (
        ServerError if status_class == StatusClass.SERVER_ERROR else UnexpectedStatusError
    )
    raise error_cls(
        f"Request to {record.url} returned {record.response_code}",
        status_code=record.response_code,
        url=record.url,
        request=record.request,
        body=record.body,
    )


class RequestFacade:
    """Fetch descriptors and classify each response."""

    def __init__(self, executor: BatchExecutor) -> None:
        self._executor = executor

    @property
    def executor(self) -> BatchExecutor:
        return self._executor

    @property
    def sink(self) -> TraceSink:
        return self._executor.sink

    async def stream(self, descriptors: Iterable[RequestDescriptor]) -> AsyncIterator[FetchResult]:
        """Yield classified results as responses arrive; stop at the first failure."""
        async with aclosing(self._executor.stream(descriptors)) as records:
            async for record in records:
                yield self._classify(record)

    async def fetch_wave(self, descriptors: Iterable[RequestDescriptor]) -> list[FetchResult]:
        """Fetch a whole wave; a failure discards the partial wave."""
        records = await self._executor.execute(descriptors)
        return [self._classify(record) for record in records]

    async def fetch(self, descriptor: RequestDescriptor) -> FetchResult:
        """Fetch exactly one descriptor."""
        results = await self.fetch_wave([descriptor])
        return results[0]

    def _classify(self, record: ResponseRecord) -> FetchResult:
        try:
            return classify(record)
        except StatusError:
            emit(
                self.sink,
                "unexpected_status",
                logging.ERROR,
                url=record.url,
                response_code=record.response_code,
                descriptor=record.request.to_dict(),
            )
            raise
