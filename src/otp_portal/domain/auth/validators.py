# File: domain/auth/validators.py
"""
Field checks for the OTP commands.

Each field validator returns the list of errors it found for one value; the
command validators concatenate them in field order.
"""

from typing import List, Optional

from pydantic.networks import validate_email as parse_email
from pydantic_core import PydanticCustomError

from otp_portal.common.results.result import ValidationError, validation_failed
from otp_portal.common.results.validation import ValidationResult, Validator, validation_passed
from otp_portal.domain.auth.entities.commands import RequestOtpCommand, ValidateOtpCommand

EMAIL_FIELD = "Email"
OTP_FIELD = "Otp"
OTP_LENGTH = 6


def is_valid_email(email: str) -> bool:
    """RFC 5322 address check through email-validator; display-name forms are refused."""
    if "<" in email:
        return False
    try:
        parse_email(email.strip())
    except PydanticCustomError:
        return False
    return True


def validate_email(value: Optional[str], key: str = EMAIL_FIELD) -> List[ValidationError]:
    if value is None or not value.strip():
        return [ValidationError(key, "Email address is required.")]
    if not is_valid_email(value):
        return [ValidationError(key, "Invalid email format.")]
    return []


def validate_otp(value: Optional[str], key: str = OTP_FIELD) -> List[ValidationError]:
    if not value:
        return [ValidationError(key, "One time password is required.")]
    if len(value) != OTP_LENGTH:
        return [ValidationError(key, "One time password must be exactly six characters.")]
    return []


def _result(errors: List[ValidationError]) -> ValidationResult:
    return validation_failed(errors) if errors else validation_passed()


class RequestOtpCommandValidator(Validator[RequestOtpCommand]):
    async def validate(self, command: RequestOtpCommand) -> ValidationResult:
        if not isinstance(command, RequestOtpCommand):
            raise TypeError(f"Expected RequestOtpCommand, got {type(command).__name__}")
        return _result(validate_email(command.email))


class ValidateOtpCommandValidator(Validator[ValidateOtpCommand]):
    async def validate(self, command: ValidateOtpCommand) -> ValidationResult:
        if not isinstance(command, ValidateOtpCommand):
            raise TypeError(f"Expected ValidateOtpCommand, got {type(command).__name__}")
        return _result(validate_email(command.email) + validate_otp(command.otp))
