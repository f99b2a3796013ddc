"""Request descriptor model."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RequestDescriptor(BaseModel):
    """One logical request.

    ``params`` is an ordered list of ``key=value`` strings. Any field other
    than ``url``, ``params`` and ``arrayName`` is caller context: it is never
    interpreted and is echoed back unchanged on every record produced for
    this request.
    """

    url: str = Field(..., min_length=1)
    params: tuple[str, ...] = ()
    array_name: str | None = Field(default=None, alias="arrayName")

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    @field_validator("params", mode="before")
    @classmethod
    def validate_params(cls, v: Any) -> Any:
        """Accept ``None`` and lists from JSON input."""
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return v

    @field_validator("array_name")
    @classmethod
    def validate_array_name(cls, v: str | None) -> str | None:
        # An empty arrayName means "the whole body is the element list".
        return v or None

    @property
    def context(self) -> dict[str, Any]:
        """Caller supplied passthrough fields."""
        return dict(self.model_extra or {})

    def param_items(self) -> list[tuple[str, str]]:
        """Split params into ``(key, value)`` pairs, preserving order."""
        items = []
        for param in self.params:
            key, _, value = param.partition("=")
            items.append((key, value))
        return items

    def without_params(self, *keys: str) -> RequestDescriptor:
        """Copy with every param whose key is in ``keys`` removed."""
        drop = set(keys)
        kept = tuple(p for p in self.params if p.partition("=")[0] not in drop)
        return self.model_copy(update={"params": kept})

    def with_params(self, *pairs: tuple[str, Any]) -> RequestDescriptor:
        """Copy with ``key=value`` params appended."""
        extra = tuple(f"{key}={value}" for key, value in pairs)
        return self.model_copy(update={"params": self.params + extra})

    def replace_params(self, keys: Iterable[str], *pairs: tuple[str, Any]) -> RequestDescriptor:
        """Strip ``keys`` then append ``pairs``."""
        return self.without_params(*keys).with_params(*pairs)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"url": self.url, "params": list(self.params)}
        if self.array_name is not None:
            data["arrayName"] = self.array_name
        data.update(self.context)
        return data

    @classmethod
    def from_json(cls, text: str) -> RequestDescriptor:
        return cls.model_validate_json(text)
