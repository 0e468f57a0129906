"""
Typed outcome for best-effort lookups.

Store queries and outbound HTTP calls return a LookupResult instead of a bare
empty value so callers can tell "nothing matched" from "the lookup failed".
UI code still degrades both to a safe default with `value_or()`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

OK = "ok"
EMPTY = "empty"
FAILED = "failed"


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    status: str
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "LookupResult[T]":
        return cls(OK, value=value)

    @classmethod
    def empty(cls) -> "LookupResult[T]":
        return cls(EMPTY)

    @classmethod
    def failed(cls, error: str) -> "LookupResult[T]":
        return cls(FAILED, error=error)

    @property
    def is_ok(self) -> bool:
        return self.status == OK

    @property
    def is_empty(self) -> bool:
        return self.status == EMPTY

    @property
    def is_failed(self) -> bool:
        return self.status == FAILED

    def value_or(self, default: Any) -> Any:
        """Return the value on success, otherwise ``default``."""
        return self.value if self.is_ok else default
