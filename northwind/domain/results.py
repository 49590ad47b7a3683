"""
Explicit outcome of a read against the store.

Reads never raise on store failure; they return a failed result that still
carries a usable empty value. Callers decide whether "failed" means 200 with
nothing, or an error response.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    STORE_UNAVAILABLE = "store-unavailable"
    MALFORMED_ROW = "malformed-row"


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    value: T
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ReadResult[T]":
        return cls(value)

    @classmethod
    def failure(cls, error: ErrorKind, empty: T) -> "ReadResult[T]":
        return cls(empty, error)
