"""Index/size pagination for APIs that report their total.

The first call fetches offset 0. Its body declares the maximum index, so
every remaining offset is known at once and fetched in a single further
wave; no continuation heuristic is involved. This relies on the upstream
total being accurate.
"""

from __future__ import annotations

import logging

from ...models.request import RequestDescriptor
from ..rest.facade import RequestFacade
from ..telemetry import TraceSink, emit
from .base import Emit, PipelinePaginator
from .definitions import IndexPolicy, element_count, int_field, remaining_offsets


class BoundedRangePaginator(PipelinePaginator):
    """Fetch offset 0, then every remaining offset in one wave."""

    def __init__(
        self,
        facade: RequestFacade,
        policy: IndexPolicy | None = None,
        sink: TraceSink | None = None,
    ) -> None:
        super().__init__(facade, sink)
        self._policy = policy or IndexPolicy()

    @property
    def policy(self) -> IndexPolicy:
        return self._policy

    def index_request(self, descriptor: RequestDescriptor, index: int) -> RequestDescriptor:
        policy = self._policy
        return descriptor.replace_params(
            (policy.index_param, policy.size_param),
            (policy.index_param, index),
            (policy.size_param, policy.page_size),
        )

    async def paginate_one(self, descriptor: RequestDescriptor, emit_result: Emit) -> int:
        policy = self._policy
        if descriptor.array_name is None:
            raise ValueError(f"Index pagination of {descriptor.url} requires an array name")

        first = await self._facade.fetch(self.index_request(descriptor, 0))
        await emit_result(first)

        max_index = int_field(first.output, policy.total_field)
        if max_index is None:
            emit(
                self._sink,
                "total_missing",
                logging.WARNING,
                url=descriptor.url,
                total_field=policy.total_field,
            )
            return 1

        count = element_count(first)
        if count == 0:
            emit(self._sink, "first_page_empty", url=descriptor.url, max_index=max_index)
            return 1

        start = int_field(first.output, policy.index_field) or 0
        offsets = remaining_offsets(start + count, max_index, policy.page_size)
        emit(
            self._sink,
            "wave_planned",
            url=descriptor.url,
            first_index=offsets.start,
            max_index=max_index,
            page_count=len(offsets),
        )
        if not offsets:
            return 1

        results = await self._facade.fetch_wave(
            [self.index_request(descriptor, offset) for offset in offsets]
        )
        for result in results:
            await emit_result(result)
        emit(
            self._sink,
            "pagination_complete",
            logging.INFO,
            url=descriptor.url,
            waves=2,
            pages=len(results) + 1,
        )
        return 2
