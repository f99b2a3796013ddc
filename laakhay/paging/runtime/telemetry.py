"""Structured tracing for batch and pagination operations.

This module provides the trace sink that the executor, facade and
paginators report progress to. Sinks are injected at construction; the
default forwards events to the standard ``logging`` module with the fields
attached as ``extra``.

Tracing is best-effort: a sink that raises is reported at debug level and
never interrupts a pipeline.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = frozenset(
    {"authorization", "proxy-authorization", "cookie", "set-cookie", "x-api-key"}
)
REDACTED = "XXX"


class TraceSink(Protocol):
    """Receives structured progress events keyed by a message string."""

    def event(self, msg: str, level: int = logging.DEBUG, **fields: Any) -> None: ...


class LoggingTraceSink:
    """Forward events to a ``logging.Logger``."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def event(self, msg: str, level: int = logging.DEBUG, **fields: Any) -> None:
        self._log.log(level, msg, extra=fields)


class NullTraceSink:
    """Discard every event."""

    def event(self, msg: str, level: int = logging.DEBUG, **fields: Any) -> None:
        return None


def emit(sink: TraceSink, msg: str, level: int = logging.DEBUG, **fields: Any) -> None:
    """Send an event to ``sink`` without letting sink failures escape."""
    try:
        sink.event(msg, level, **fields)
    except Exception as e:  # noqa: BLE001
        logger.debug(
            "trace_sink_failed",
            extra={"trace_msg": msg, "error_type": type(e).__name__, "error_message": str(e)},
        )


def redact_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Copy of ``headers`` with credential-bearing values masked.

    Bearer and basic schemes keep their scheme name so traces stay readable.

    Examples:
        >>> redact_headers({"Authorization": "Bearer abc", "Accept": "application/json"})
        {'Authorization': 'Bearer XXX', 'Accept': 'application/json'}
    """
    redacted: dict[str, str] = {}
    for name, value in (headers or {}).items():
        if name.lower() in SENSITIVE_HEADERS:
            scheme, sep, _ = value.partition(" ")
            redacted[name] = f"{scheme} {REDACTED}" if sep else REDACTED
        else:
            redacted[name] = value
    return redacted
