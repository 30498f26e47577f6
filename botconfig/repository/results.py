"""
Result type returned by repository and service operations.

Routine outcomes (missing id, id collision, mismatched request) are values,
not exceptions. Callers branch on ``status`` or ``found``.
"""

import enum
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ResultStatus(str, enum.Enum):
    """Outcome of a repository or service call."""
    OK = "ok"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID = "invalid"


@dataclass(frozen=True)
class ConfigResult(Generic[T]):
    """An entity, or the reason there isn't one."""

    status: ResultStatus
    entity: Optional[T] = None

    @property
    def found(self) -> bool:
        return self.status is ResultStatus.OK

    def __bool__(self) -> bool:
        return self.found

    @classmethod
    def ok(cls, entity: T) -> "ConfigResult[T]":
        return cls(ResultStatus.OK, entity)

    @classmethod
    def not_found(cls) -> "ConfigResult[T]":
        return cls(ResultStatus.NOT_FOUND)

    @classmethod
    def conflict(cls) -> "ConfigResult[T]":
        return cls(ResultStatus.CONFLICT)

    @classmethod
    def invalid(cls) -> "ConfigResult[T]":
        return cls(ResultStatus.INVALID)
