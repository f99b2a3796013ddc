"""Shared fakes for unit tests.

The fake client stands in for HTTPClient at the ``send`` seam, so the
executor, facade and paginators run unmodified on top of it.
"""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from collections.abc import Callable
from typing import Any

import pytest

from laakhay.paging.runtime.rest.builder import PreparedRequest
from laakhay.paging.runtime.rest.http_client import RawResponse


def json_response(status: int, body: Any = None) -> RawResponse:
    content = b"" if body is None else json.dumps(body).encode()
    return RawResponse(status=status, content=content, content_type="application/json")


class FakeHTTPClient:
    """Records prepared requests and answers them with ``handler``."""

    def __init__(self, handler: Callable[[PreparedRequest], Any], base_url: str | None = None):
        self.handler = handler
        self.base_url = base_url
        self.sent: list[PreparedRequest] = []
        self.closed = False

    async def send(self, request: PreparedRequest) -> RawResponse:
        self.sent.append(request)
        result = self.handler(request)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def close(self) -> None:
        self.closed = True

    def sent_params(self, key: str) -> list[str]:
        return [dict(r.query).get(key, "") for r in self.sent]


class RecordingSink:
    """Trace sink that keeps every event."""

    def __init__(self) -> None:
        self.events: list[tuple[str, int, dict[str, Any]]] = []

    def event(self, msg: str, level: int = logging.DEBUG, **fields: Any) -> None:
        self.events.append((msg, level, fields))

    def named(self, msg: str) -> list[dict[str, Any]]:
        return [fields for name, _, fields in self.events if name == msg]


class PagedAPI:
    """In-memory page-number API.

    ``resources`` maps URL to its full element list. Pages are sliced with
    the ``page``/``per_page`` query params; ``array_name`` wraps the slice in
    an object. ``failures`` maps ``(url, page)`` to a status to return.
    """

    def __init__(
        self,
        resources: dict[str, list[Any]],
        array_name: str | None = None,
        failures: dict[tuple[str, int], int] | None = None,
        page_param: str = "page",
        size_param: str = "per_page",
    ) -> None:
        self.resources = resources
        self.array_name = array_name
        self.failures = failures or {}
        self.page_param = page_param
        self.size_param = size_param

    async def __call__(self, request: PreparedRequest) -> RawResponse:
        # Yield so responses of one wave complete in scheduler order.
        await asyncio.sleep(0)
        query = dict(request.query)
        page = int(query[self.page_param])
        size = int(query[self.size_param])
        if (request.url, page) in self.failures:
            return json_response(self.failures[(request.url, page)], {"message": "failure"})
        if request.url not in self.resources:
            return json_response(404, {"message": "Not Found"})
        elements = self.resources[request.url][(page - 1) * size : page * size]
        if self.array_name:
            return json_response(200, {self.array_name: elements, "page": page})
        return json_response(200, elements)


class IndexedAPI:
    """In-memory index/size API reporting ``max_line``."""

    def __init__(self, resources: dict[str, list[Any]], array_name: str = "list_info") -> None:
        self.resources = resources
        self.array_name = array_name

    def __call__(self, request: PreparedRequest) -> RawResponse:
        query = dict(request.query)
        index = int(query["index"])
        size = int(query["size"])
        elements = self.resources[request.url]
        return json_response(
            200,
            {
                "index": index,
                "max_line": len(elements),
                self.array_name: elements[index : index + size],
            },
        )


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def make_client() -> Callable[..., FakeHTTPClient]:
    return FakeHTTPClient


@pytest.fixture
def make_paged_api() -> Callable[..., PagedAPI]:
    return PagedAPI


@pytest.fixture
def make_indexed_api() -> Callable[..., IndexedAPI]:
    return IndexedAPI


@pytest.fixture
def respond() -> Callable[..., RawResponse]:
    return json_response
