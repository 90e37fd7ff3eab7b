# File: domain/auth/services/validate_otp_service.py

from datetime import datetime
from typing import Callable, Optional

from otp_portal.common.base_service.base_service import BaseService
from otp_portal.common.logging.logger import log_info, log_warning
from otp_portal.common.results.result import (
    Result,
    ValidationError,
    ValidationFailed,
    success,
    validation_failed,
)
from otp_portal.common.results.validation import Validator
from otp_portal.common.utils.date_utils import utc_now
from otp_portal.domain.auth.entities.commands import ValidateOtpCommand
from otp_portal.domain.auth.ports import OtpRepository
from otp_portal.domain.auth.validators import OTP_FIELD, ValidateOtpCommandValidator

INVALID_OTP_MESSAGE = "The provided OTP is invalid or has expired."


class ValidateOtpHandler(BaseService):
    """
    Check a submitted OTP. A missing, mismatched or expired code all produce the
    same ValidationFailed so callers cannot tell whether an address ever asked
    for one.
    """

    def __init__(
        self,
        repository: OtpRepository,
        validator: Optional[Validator[ValidateOtpCommand]] = None,
        consume_on_success: bool = False,
        clock: Callable[[], datetime] = utc_now
    ):
        self.repository = repository
        self.validator = validator or ValidateOtpCommandValidator()
        self.consume_on_success = consume_on_success
        self._clock = clock

    async def handle(self, command: ValidateOtpCommand) -> Result[None]:
        validation = await self.validator.validate(command)
        if isinstance(validation, ValidationFailed):
            log_warning("OTP validation failed", extra={"email": command.email, "errors": validation.message})
            return validation

        email = command.email
        context = {"entity_type": "otp", "entity_id": email, "action": "OTP validation"}

        fetched = await self.guard(lambda: self.repository.fetch(email), context)
        if not fetched.is_success:
            return fetched.map()

        otp = fetched.value
        if otp is None or not otp.is_code_valid(command.otp, now=self._clock()):
            log_warning("Invalid or expired OTP attempt", extra=context)
            return validation_failed([ValidationError(OTP_FIELD, INVALID_OTP_MESSAGE)])

        if self.consume_on_success:
            consumed = await self.guard(lambda: self.repository.delete(email), context)
            if not consumed.is_success:
                return consumed.map()

        log_info("OTP validated successfully", extra=context)
        return success()
