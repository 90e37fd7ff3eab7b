# File: common/results/validation.py

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Dict, Generic, Iterable, List, TypeVar, Union

from otp_portal.common.results.result import ValidationError, ValidationFailed

C = TypeVar("C")


@dataclass(frozen=True)
class ValidationPassed:
    is_success: ClassVar[bool] = True

    @property
    def message(self) -> str:
        return "Validation passed"

    def map(self) -> "ValidationPassed":
        return self


ValidationResult = Union[ValidationPassed, ValidationFailed]


def validation_passed() -> ValidationPassed:
    return ValidationPassed()


class Validator(ABC, Generic[C]):
    """Checks a command and reports field errors as a value, never by raising."""

    @abstractmethod
    async def validate(self, command: C) -> ValidationResult:
        ...


def errors_to_dict(errors: Iterable[ValidationError]) -> Dict[str, List[str]]:
    """Group messages by field name, keeping the order they were reported in."""
    grouped: Dict[str, List[str]] = {}
    for error in errors:
        grouped.setdefault(error.key, []).append(error.message)
    return grouped
