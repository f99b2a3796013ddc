"""Page-number pagination with no known upper bound.

A resource keeps paginating while every page of its last wave came back
full. The first wave requests ``batch_size`` pages; once a full wave shows
the resource has more data, every later wave requests ``lookahead_size``
pages, trading one extra round trip for fewer round trips on long
resources. Only the last page of a well-behaved resource may be partial, so
a partial or empty page ends it. When the data ends exactly on a page
boundary one extra wave comes back empty; that empty terminal page is part
of the output.
"""

from __future__ import annotations

import logging

from ...models.request import RequestDescriptor
from ..rest.facade import RequestFacade
from ..telemetry import TraceSink, emit
from .base import Emit, PipelinePaginator
from .definitions import PagePolicy, continuing_groups, element_count


class HeuristicPaginator(PipelinePaginator):
    """Paginates page-number resources until a page comes back short."""

    def __init__(
        self,
        facade: RequestFacade,
        policy: PagePolicy | None = None,
        sink: TraceSink | None = None,
    ) -> None:
        super().__init__(facade, sink)
        self._policy = policy or PagePolicy()

    @property
    def policy(self) -> PagePolicy:
        return self._policy

    def page_request(self, descriptor: RequestDescriptor, page: int) -> RequestDescriptor:
        policy = self._policy
        return descriptor.replace_params(
            (policy.page_param, policy.size_param),
            (policy.page_param, page),
            (policy.size_param, policy.page_size),
        )

    async def paginate_one(self, descriptor: RequestDescriptor, emit_result: Emit) -> int:
        page_size = self._policy.page_size
        state = self._policy.initial_state()
        waves = 0

        while True:
            pages = state.pages()
            wave = [self.page_request(descriptor, page) for page in pages]
            emit(
                self._sink,
                "wave_planned",
                url=descriptor.url,
                first_page=pages.start,
                page_count=len(pages),
            )

            results = await self._facade.fetch_wave(wave)
            waves += 1
            for result in results:
                await emit_result(result)

            counts = [element_count(result) for result in results]
            more = bool(continuing_groups(results, page_size))
            emit(
                self._sink,
                "wave_completed",
                url=descriptor.url,
                wave=waves,
                element_counts=counts,
                more=more,
            )
            if not more:
                break
            state = state.advance()

        emit(
            self._sink,
            "pagination_complete",
            logging.INFO,
            url=descriptor.url,
            waves=waves,
            last_page=state.page_offset + state.batch_size,
        )
        return waves
