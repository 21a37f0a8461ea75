from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCode(str, Enum):
    DUPLICATE_EMAIL = "duplicate_email"
    INVALID_INPUT = "invalid_input"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    EXTERNAL_SERVICE_FAILURE = "external_service_failure"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a core operation.

    Core operations never raise for expected failures (unknown id, blank
    input, policy denial); they hand back a Result and leave state untouched.
    `changed` is False when the call was accepted but had nothing to apply,
    e.g. a status change to the current status.
    """
    value: T | None = None
    error: ErrorCode | None = None
    message: str | None = None
    changed: bool = True

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None, changed: bool = True) -> "Result[T]":
        return cls(value=value, changed=changed)

    @classmethod
    def fail(cls, error: ErrorCode, message: str) -> "Result[T]":
        return cls(error=error, message=message, changed=False)
