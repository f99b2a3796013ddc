"""Transport configuration.

Headers given here feed the transport only. They are never copied onto
records and are redacted before they reach a trace sink, so credentials
such as bearer tokens belong here rather than in request params.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

DEFAULT_ENV_PREFIX = "LAAKHAY_PAGING_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class TransportConfig:
    """Settings for the shared HTTP session.

    Attributes:
        base_url: Prefix joined to descriptor URLs that are not absolute
        timeout: Total per-request timeout in seconds
        max_connections: Connection pool size shared by all requests of a wave
        headers: Extra request headers (sensitive, never logged)
        verify_ssl: Verify TLS certificates
        follow_redirects: Follow 3xx responses
        accept: Value of the Accept header
    """

    base_url: str | None = None
    timeout: float = 30.0
    max_connections: int = 8
    headers: Mapping[str, str] = field(default_factory=dict)
    verify_ssl: bool = True
    follow_redirects: bool = True
    accept: str = "application/json"

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_connections <= 0:
            raise ValueError("max_connections must be positive")

    def default_headers(self) -> dict[str, str]:
        headers = {"Accept": self.accept}
        headers.update(self.headers)
        return headers

    def with_bearer_token(self, token: str) -> TransportConfig:
        headers = dict(self.headers)
        headers["Authorization"] = f"Bearer {token}"
        return replace(self, headers=headers)

    @classmethod
    def from_env(
        cls, prefix: str = DEFAULT_ENV_PREFIX, environ: Mapping[str, str] | None = None
    ) -> TransportConfig:
        """Build a config from ``{prefix}BASE_URL``, ``TIMEOUT``, ``MAX_CONNECTIONS``,
        ``VERIFY_SSL`` and ``TOKEN`` environment variables."""
        env = os.environ if environ is None else environ
        config = cls(
            base_url=env.get(f"{prefix}BASE_URL") or None,
            timeout=float(env.get(f"{prefix}TIMEOUT", cls.timeout)),
            max_connections=int(env.get(f"{prefix}MAX_CONNECTIONS", cls.max_connections)),
            verify_ssl=env.get(f"{prefix}VERIFY_SSL", "1").strip().lower() in _TRUE_VALUES,
        )
        token = env.get(f"{prefix}TOKEN")
        if token:
            config = config.with_bearer_token(token)
        return config
