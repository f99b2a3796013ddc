"""Data models."""

from .records import FetchResult, ResponseRecord
from .request import RequestDescriptor

__all__ = ["RequestDescriptor", "ResponseRecord", "FetchResult"]
