"""Pagination policies, wave state and page classification helpers."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ...models.records import FetchResult

# Page count requested per wave once a resource has shown it has more
# than one wave of data.
DEFAULT_LOOKAHEAD_SIZE = 5


@dataclass(frozen=True)
class PagePolicy:
    """Page-number pagination settings.

    Attributes:
        page_size: Elements per page; a page with fewer elements ends the resource
        batch_size: Pages requested in the first wave
        lookahead_size: Pages requested per wave after the first full wave
        start_page: Pages already consumed; the first wave starts at ``start_page + 1``
        page_param: Query parameter carrying the 1-based page number
        size_param: Query parameter carrying the page size
    """

    page_size: int = 50
    batch_size: int = 1
    lookahead_size: int = DEFAULT_LOOKAHEAD_SIZE
    start_page: int = 0
    page_param: str = "page"
    size_param: str = "per_page"

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("page_size must be positive")
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.lookahead_size <= 0:
            raise ValueError("lookahead_size must be positive")
        if self.start_page < 0:
            raise ValueError("start_page cannot be negative")

    def initial_state(self) -> PageState:
        return PageState(
            page_offset=self.start_page,
            batch_size=self.batch_size,
            lookahead_size=self.lookahead_size,
        )


@dataclass(frozen=True)
class PageState:
    """Position of one resource's pagination between waves.

    Attributes:
        page_offset: Last page number already requested
        batch_size: Pages to request in the next wave
        lookahead_size: Pages per wave once continuation is confirmed
    """

    page_offset: int
    batch_size: int
    lookahead_size: int

    def pages(self) -> range:
        """1-based page numbers of the next wave."""
        return range(self.page_offset + 1, self.page_offset + self.batch_size + 1)

    def advance(self) -> PageState:
        """State for the wave after this one; switches to the look-ahead size."""
        return PageState(
            page_offset=self.page_offset + self.batch_size,
            batch_size=self.lookahead_size,
            lookahead_size=self.lookahead_size,
        )


@dataclass(frozen=True)
class IndexPolicy:
    """Index/size pagination settings for APIs that report their total.

    Attributes:
        page_size: Elements requested per call
        index_param: Query parameter carrying the start offset
        size_param: Query parameter carrying the page size
        index_field: Body field echoing the start offset of the returned page
        total_field: Body field declaring the maximum index
    """

    page_size: int = 8
    index_param: str = "index"
    size_param: str = "size"
    index_field: str = "index"
    total_field: str = "max_line"

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("page_size must be positive")


def page_elements(output: Any, array_name: str | None) -> Any:
    """The element list of a page body."""
    if array_name is None:
        return output
    if isinstance(output, dict):
        return output.get(array_name)
    return None


def element_count(result: FetchResult) -> int:
    """Number of elements on the page held by ``result``.

    Bodies whose element list is not a JSON array count as empty.
    """
    elements = page_elements(result.output, result.request.array_name)
    if isinstance(elements, list):
        return len(elements)
    return 0


def continuing_groups(results: Iterable[FetchResult], page_size: int) -> list[str]:
    """URLs whose every page in the wave is full.

    A single partial or empty page marks its URL as exhausted.
    """
    groups: dict[str, list[int]] = defaultdict(list)
    for result in results:
        groups[result.url].append(element_count(result))
    return [url for url, counts in groups.items() if all(c == page_size for c in counts)]


def remaining_offsets(next_index: int, max_index: int, page_size: int) -> range:
    """Start offsets still to fetch once the total is known.

    Examples:
        >>> list(remaining_offsets(8, 30, 8))
        [8, 16, 24]
        >>> list(remaining_offsets(5, 5, 8))
        []
    """
    return range(next_index, max_index, page_size)


def int_field(body: Any, name: str) -> int | None:
    """Integer value of ``body[name]``, or None if absent or not an integer."""
    if not isinstance(body, dict):
        return None
    value = body.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value
