"""Pagination over the batch executor.

Architecture:
    - definitions.py: policies, wave state and page classification helpers
    - base.py: one pipeline per resource, with failure isolation
    - heuristic.py: page-number pagination ended by a short page
    - bounded.py: index/size pagination driven by a reported total
"""

from __future__ import annotations

from .base import PipelinePaginator
from .bounded import BoundedRangePaginator
from .definitions import (
    IndexPolicy,
    PagePolicy,
    PageState,
    continuing_groups,
    element_count,
    page_elements,
    remaining_offsets,
)
from .heuristic import HeuristicPaginator

__all__ = [
    "PagePolicy",
    "PageState",
    "IndexPolicy",
    "PipelinePaginator",
    "HeuristicPaginator",
    "BoundedRangePaginator",
    "continuing_groups",
    "element_count",
    "page_elements",
    "remaining_offsets",
]
