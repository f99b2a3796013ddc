"""Fan-out of independent pagination pipelines.

Each input descriptor is paginated by its own pipeline. Pipelines share the
executor (and so the pooled session) but not their state: a resource that
fails stops its own waves while its siblings run to completion. Failures are
collected and raised together once every pipeline has finished, so output
already emitted for healthy resources stays valid.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from typing import Any

from ...core.exceptions import PaginationError
from ...models.records import FetchResult
from ...models.request import RequestDescriptor
from ..rest.facade import RequestFacade
from ..telemetry import TraceSink, emit

Emit = Callable[[FetchResult], Awaitable[None]]

_DONE = object()


class PipelinePaginator(ABC):
    """Runs one pagination pipeline per input descriptor."""

    def __init__(self, facade: RequestFacade, sink: TraceSink | None = None) -> None:
        self._facade = facade
        self._sink = sink or facade.sink

    @property
    def facade(self) -> RequestFacade:
        return self._facade

    @abstractmethod
    async def paginate_one(self, descriptor: RequestDescriptor, emit_result: Emit) -> int:
        """Paginate a single resource, passing each page to ``emit_result``.

        Returns:
            Number of waves issued
        """

    async def paginate(self, descriptors: Iterable[RequestDescriptor]) -> AsyncIterator[FetchResult]:
        """Yield every page of every resource.

        Pages of one resource arrive wave by wave in order; pages of different
        resources interleave.

        Raises:
            PaginationError: After all pipelines finish, if any of them failed
        """
        roots = list(descriptors)
        if not roots:
            return

        queue: asyncio.Queue[Any] = asyncio.Queue()
        failures: list[tuple[RequestDescriptor, BaseException]] = []

        async def run(descriptor: RequestDescriptor) -> None:
            try:
                await self.paginate_one(descriptor, queue.put)
            except Exception as e:  # noqa: BLE001
                failures.append((descriptor, e))
                emit(
                    self._sink,
                    "pipeline_failed",
                    logging.ERROR,
                    url=descriptor.url,
                    descriptor=descriptor.to_dict(),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
            finally:
                await queue.put(_DONE)

        tasks = [asyncio.ensure_future(run(descriptor)) for descriptor in roots]
        try:
            running = len(tasks)
            while running:
                item = await queue.get()
                if item is _DONE:
                    running -= 1
                    continue
                yield item
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        if failures:
            urls = ", ".join(descriptor.url for descriptor, _ in failures)
            raise PaginationError(
                f"Pagination aborted for {len(failures)} of {len(roots)} resources: {urls}",
                failures=failures,
            ) from failures[0][1]

    async def collect(self, descriptors: Iterable[RequestDescriptor]) -> list[FetchResult]:
        return [result async for result in self.paginate(descriptors)]
