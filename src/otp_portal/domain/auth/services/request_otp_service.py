# File: domain/auth/services/request_otp_service.py

from datetime import datetime
from typing import Callable, Optional

from otp_portal.common.base_service.base_service import GENERIC_DEPENDENCY_MESSAGE, BaseService
from otp_portal.common.config.settings import settings
from otp_portal.common.logging.logger import log_error, log_info, log_warning
from otp_portal.common.results.result import (
    DependencyFailedReason,
    Result,
    ValidationFailed,
    dependency_failed,
    success,
)
from otp_portal.common.results.validation import Validator
from otp_portal.common.utils.date_utils import utc_now
from otp_portal.domain.auth.entities.commands import RequestOtpCommand, RequestOtpResult
from otp_portal.domain.auth.entities.otp_entity import DEFAULT_VALIDITY_MINUTES, OtpCode
from otp_portal.domain.auth.ports import OtpGenerator, OtpRepository, OtpSender
from otp_portal.domain.auth.validators import RequestOtpCommandValidator


class RequestOtpHandler(BaseService):
    """
    Issue an OTP for an email address: validate, generate, persist, dispatch.

    When a live code already exists for the address the store keeps it, and that
    stored code is what gets emailed, so a resend never delivers a code that
    cannot validate.
    """

    def __init__(
        self,
        generator: OtpGenerator,
        repository: OtpRepository,
        sender: OtpSender,
        validator: Optional[Validator[RequestOtpCommand]] = None,
        validity_minutes: int = DEFAULT_VALIDITY_MINUTES,
        clock: Callable[[], datetime] = utc_now
    ):
        self.generator = generator
        self.repository = repository
        self.sender = sender
        self.validator = validator or RequestOtpCommandValidator()
        self.validity_minutes = validity_minutes
        self._clock = clock

    async def handle(self, command: RequestOtpCommand) -> Result[RequestOtpResult]:
        validation = await self.validator.validate(command)
        if isinstance(validation, ValidationFailed):
            log_warning("OTP request rejected", extra={"email": command.email, "errors": validation.message})
            return validation

        email = command.email
        context = {"entity_type": "otp", "entity_id": email, "action": "OTP request"}

        otp = OtpCode.issue(self.generator.generate(), email, self.validity_minutes, now=self._clock())

        async def persist() -> OtpCode:
            await self.repository.save(otp)
            return await self.repository.fetch(email) or otp

        persisted = await self.guard(persist, context)
        if not persisted.is_success:
            return persisted.map()
        active = persisted.value

        sent = await self.guard(lambda: self.sender.send_otp(email, active.code), context)
        if not sent.is_success:
            return sent.map()
        if not sent.value.is_success:
            log_error("OTP email was not delivered", extra={**context, "error": sent.value.message})
            return dependency_failed(DependencyFailedReason.TIMEOUT, GENERIC_DEPENDENCY_MESSAGE)

        log_info("OTP issued", extra={
            **context,
            "expires_at": active.expires_at.isoformat(),
            "reused": active != otp,
            "otp": active.code if settings.ENVIRONMENT == "development" else None
        })
        return success(RequestOtpResult(email=email, expires_at=active.expires_at))
