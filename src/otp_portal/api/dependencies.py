# File: api/dependencies.py

from functools import lru_cache

from otp_portal.common.config.settings import settings
from otp_portal.domain.auth.ports import OtpRepository, OtpSender
from otp_portal.domain.auth.services.request_otp_service import RequestOtpHandler
from otp_portal.domain.auth.services.validate_otp_service import ValidateOtpHandler
from otp_portal.infrastructure.database.memory.otp_repository import InMemoryOtpRepository
from otp_portal.infrastructure.database.redis.repositories.otp_repository import RedisOtpRepository
from otp_portal.infrastructure.external.email.email_otp_sender import EmailOtpSender
from otp_portal.infrastructure.external.email.smtp_client import SmtpClient
from otp_portal.infrastructure.services.otp_generator import SecretsOtpGenerator


@lru_cache
def get_otp_repository() -> OtpRepository:
    if settings.OTP_STORE_BACKEND == "redis":
        return RedisOtpRepository(key_prefix=settings.REDIS_KEY_PREFIX)
    return InMemoryOtpRepository()


@lru_cache
def get_otp_sender() -> OtpSender:
    smtp_client = SmtpClient(
        host=settings.SMTP_SERVER,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USERNAME,
        password=settings.SMTP_PASSWORD,
        use_tls=settings.SMTP_USE_TLS,
        timeout=settings.SMTP_TIMEOUT
    )
    return EmailOtpSender(
        smtp_client,
        sender_email=settings.OTP_SENDER_EMAIL,
        subject=settings.OTP_EMAIL_SUBJECT,
        html_pre_otp=settings.OTP_HTML_PRE_OTP,
        html_post_otp=settings.OTP_HTML_POST_OTP
    )


def get_request_otp_handler() -> RequestOtpHandler:
    return RequestOtpHandler(
        generator=SecretsOtpGenerator(),
        repository=get_otp_repository(),
        sender=get_otp_sender(),
        validity_minutes=settings.OTP_VALIDITY_MINUTES
    )


def get_validate_otp_handler() -> ValidateOtpHandler:
    return ValidateOtpHandler(
        repository=get_otp_repository(),
        consume_on_success=settings.OTP_CONSUME_ON_SUCCESS
    )
