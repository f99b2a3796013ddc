"""Typed request building for batch transport calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ...models.request import RequestDescriptor

# Methods whose params travel in the query string; the rest send them as
# url-encoded form fields.
QUERY_METHODS = frozenset({"GET", "HEAD", "DELETE", "OPTIONS"})


@dataclass(frozen=True)
class PreparedRequest:
    """Physical request derived from a descriptor.

    Only ``url``, ``method`` and the params reach the transport; context
    fields stay on the descriptor and are reattached by token.
    """

    token: int
    method: str
    url: str
    query: list[tuple[str, str]] = field(default_factory=list)
    form: list[tuple[str, str]] | None = None
    json_body: Any = None

    def describe(self) -> str:
        """``METHOD url?query`` for tracing."""
        if not self.query:
            return f"{self.method} {self.url}"
        query = "&".join(f"{k}={v}" if v else k for k, v in self.query)
        return f"{self.method} {self.url}?{query}"


def join_url(base_url: str | None, url: str) -> str:
    """Prefix relative ``url`` with ``base_url``.

    Examples:
        >>> join_url("https://api.example.com", "/items")
        'https://api.example.com/items'
        >>> join_url("https://api.example.com/", "https://other.example.com/x")
        'https://other.example.com/x'
    """
    if not base_url or url.startswith(("http://", "https://")):
        return url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"


def build_request(
    descriptor: RequestDescriptor,
    *,
    token: int,
    method: str = "GET",
    base_url: str | None = None,
) -> PreparedRequest:
    method = method.upper()
    items = descriptor.param_items()
    url = join_url(base_url, descriptor.url)
    if method in QUERY_METHODS:
        return PreparedRequest(token=token, method=method, url=url, query=items)
    return PreparedRequest(token=token, method=method, url=url, form=items)
