# File: common/results/result.py
"""
Outcome values passed between handlers and their callers.

A `Result` is exactly one of five frozen variants. Callers branch on the variant
type instead of catching exceptions or inspecting message strings:

    Success             the operation completed; carries an optional value
    ValidationFailed    caller input is malformed; carries field-level errors
    PreconditionFailed  the state the operation needs is not there
    DependencyFailed    a store or external service broke
    Unauthorized        the caller is not allowed to do this
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Generic, Iterable, Optional, Tuple, TypeVar, Union

T = TypeVar("T")

SUCCESS_MESSAGE = "The operation was successful."


class DependencyFailedReason(str, Enum):
    TIMEOUT = "Timeout"
    UNAVAILABLE = "Unavailable"
    NOT_CONFIGURED = "NotConfigured"
    BAD_RESPONSE = "BadResponse"


class PreconditionFailedReason(str, Enum):
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    NOT_SUPPORTED = "NotSupported"

    def to_message(self) -> str:
        return _PRECONDITION_MESSAGES[self]


_PRECONDITION_MESSAGES = {
    PreconditionFailedReason.NOT_FOUND: "The requested resource was not found.",
    PreconditionFailedReason.CONFLICT: "The resource is in a conflicting state.",
    PreconditionFailedReason.NOT_SUPPORTED: "The operation is not supported.",
}


@dataclass(frozen=True)
class ValidationError:
    """A single `{field, message}` pair. Field names need not be unique."""

    key: str
    message: str


@dataclass(frozen=True)
class Success(Generic[T]):
    value: Optional[T] = None

    is_success: ClassVar[bool] = True

    @property
    def message(self) -> str:
        return SUCCESS_MESSAGE

    def map(self) -> "Success[None]":
        return Success()


@dataclass(frozen=True)
class ValidationFailed:
    errors: Tuple[ValidationError, ...] = field(default_factory=tuple)

    is_success: ClassVar[bool] = False

    @property
    def message(self) -> str:
        if not self.errors:
            return "Validation failed."
        return "; ".join(f"{e.key}: {e.message}" for e in self.errors)

    def map(self) -> "ValidationFailed":
        return self


@dataclass(frozen=True)
class PreconditionFailed:
    reason: PreconditionFailedReason
    detail: Optional[str] = None

    is_success: ClassVar[bool] = False

    @property
    def message(self) -> str:
        return self.detail or self.reason.to_message()

    def map(self) -> "PreconditionFailed":
        return self


@dataclass(frozen=True)
class DependencyFailed:
    reason: DependencyFailedReason
    detail: Optional[str] = None

    is_success: ClassVar[bool] = False

    @property
    def message(self) -> str:
        return self.detail or self.reason.value

    def map(self) -> "DependencyFailed":
        return self


@dataclass(frozen=True)
class Unauthorized:
    detail: str

    is_success: ClassVar[bool] = False

    @property
    def message(self) -> str:
        return self.detail

    def map(self) -> "Unauthorized":
        return self


Result = Union[Success[T], ValidationFailed, PreconditionFailed, DependencyFailed, Unauthorized]


# === Named constructors ===
def success(value: Optional[T] = None) -> Success[T]:
    return Success(value)


def validation_failed(errors: Iterable[ValidationError]) -> ValidationFailed:
    return ValidationFailed(tuple(errors))


def precondition_failed(reason: PreconditionFailedReason, message: Optional[str] = None) -> PreconditionFailed:
    return PreconditionFailed(reason, message)


def dependency_failed(reason: DependencyFailedReason, message: Optional[str] = None) -> DependencyFailed:
    return DependencyFailed(reason, message)


def unauthorized(message: str) -> Unauthorized:
    return Unauthorized(message)
