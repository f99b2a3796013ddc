"""HTTP client helper."""

from __future__ import annotations

import asyncio
import socket
import ssl
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from time import perf_counter
from typing import Any

import aiohttp

from ...config import TransportConfig
from ...core.exceptions import TransportError
from .builder import PreparedRequest

# curl exit codes, so a caller can branch on a transport failure the same way
# regardless of which client made the call.
EXIT_MALFORMED_URL = 3
EXIT_RESOLVE_HOST = 6
EXIT_CONNECT = 7
EXIT_TIMEOUT = 28
EXIT_TLS_HANDSHAKE = 35
EXIT_TOO_MANY_REDIRECTS = 47
EXIT_EMPTY_REPLY = 52
EXIT_RECV_ERROR = 56
EXIT_CERTIFICATE = 60


def transport_exit_code(exc: BaseException) -> int:
    """Map a client-side failure to a curl style exit code."""
    if isinstance(exc, aiohttp.ClientConnectorCertificateError):
        return EXIT_CERTIFICATE
    if isinstance(exc, (aiohttp.ClientSSLError, ssl.SSLError)):
        return EXIT_TLS_HANDSHAKE
    if isinstance(exc, aiohttp.ClientConnectorError):
        if isinstance(exc.os_error, socket.gaierror):
            return EXIT_RESOLVE_HOST
        return EXIT_CONNECT
    if isinstance(exc, asyncio.TimeoutError):
        return EXIT_TIMEOUT
    if isinstance(exc, aiohttp.TooManyRedirects):
        return EXIT_TOO_MANY_REDIRECTS
    if isinstance(exc, aiohttp.InvalidURL):
        return EXIT_MALFORMED_URL
    if isinstance(exc, aiohttp.ServerDisconnectedError):
        return EXIT_EMPTY_REPLY
    return EXIT_RECV_ERROR


@dataclass(frozen=True)
class RawResponse:
    """Status and undecoded body of one physical response."""

    status: int
    content: bytes
    content_type: str = ""
    elapsed_ms: float = 0.0


class HTTPClient:
    """Async HTTP client wrapper owning one pooled session.

    All requests of a batch go through the same ``aiohttp.ClientSession``
    so keep-alive connections are reused across the batch and across waves.
    """

    def __init__(self, config: TransportConfig | None = None) -> None:
        self.config = config or TransportConfig()
        self.timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def base_url(self) -> str | None:
        return self.config.base_url

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.config.max_connections,
                ssl=self.config.verify_ssl,
            )
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                connector=connector,
                headers=self.config.default_headers(),
            )
        return self._session

    async def send(self, request: PreparedRequest) -> RawResponse:
        """Send a prepared request and read its full body."""
        data = aiohttp.FormData(request.form) if request.form is not None else None
        return await self.request(
            request.method,
            request.url,
            params=request.query,
            data=data,
            json_body=request.json_body,
        )

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Sequence[tuple[str, str]] | None = None,
        data: Any = None,
        json_body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> RawResponse:
        """Issue one request.

        Raises:
            TransportError: The request never produced an HTTP response
        """
        start = perf_counter()
        try:
            async with self.session.request(
                method,
                url,
                params=list(params) if params else None,
                data=data,
                json=json_body,
                headers=dict(headers) if headers else None,
                allow_redirects=self.config.follow_redirects,
            ) as response:
                content = await response.read()
                return RawResponse(
                    status=response.status,
                    content=content,
                    content_type=response.headers.get("Content-Type", ""),
                    elapsed_ms=(perf_counter() - start) * 1000.0,
                )
        except (aiohttp.ClientError, asyncio.TimeoutError, ssl.SSLError) as e:
            raise TransportError(
                f"{method} {url} failed: {type(e).__name__}: {e}",
                exit_code=transport_exit_code(e),
                url=url,
            ) from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
