"""
Result contract shared by every service.

Anticipated failures (missing rows, bad input, stale tokens, illegal
transitions) are returned as a failed Result carrying a message and a kind.
Only genuinely unexpected errors are raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ResultErrorType(Enum):
    NONE = "none"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"                        # Uniqueness / referential clash
    CONCURRENCY_CONFLICT = "concurrency_conflict"  # Stale concurrency token
    BUSINESS_RULE = "business_rule"              # Illegal state transition
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class Result(Generic[T]):
    is_success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_type: ResultErrorType = ResultErrorType.NONE

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(is_success=True, value=value)

    @classmethod
    def failure(cls, error: str, error_type: ResultErrorType) -> "Result[T]":
        if error_type is ResultErrorType.NONE:
            raise ValueError("A failed result needs an error type")
        return cls(is_success=False, error=error, error_type=error_type)
