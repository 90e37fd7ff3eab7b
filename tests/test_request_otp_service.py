"""
Unit tests for `RequestOtpHandler`.

Tests cover:
    - Successful issue: one store entry, one email, Success with the expiry.
    - Malformed email: ValidationFailed, nothing generated, stored or sent.
    - Store and sender faults turning into DependencyFailed(TIMEOUT).
    - Resend during a live window emailing the code that is actually stored.
"""

from datetime import timedelta

import pytest

from otp_portal.common.base_service.base_service import GENERIC_DEPENDENCY_MESSAGE
from otp_portal.common.results.result import (
    DependencyFailed,
    DependencyFailedReason,
    Success,
    ValidationFailed,
    dependency_failed,
)
from otp_portal.domain.auth.entities.commands import RequestOtpCommand, RequestOtpResult, ValidateOtpCommand
from otp_portal.domain.auth.services.request_otp_service import RequestOtpHandler
from otp_portal.domain.auth.services.validate_otp_service import ValidateOtpHandler
from otp_portal.infrastructure.services.otp_generator import SecretsOtpGenerator


@pytest.fixture
def handler(generator, repository, sender, clock):
    return RequestOtpHandler(generator=generator, repository=repository, sender=sender, clock=clock)


class TestRequestOtpHandler:

    async def test_success_stores_and_sends_one_code(self, handler, repository, sender, clock):
        result = await handler.handle(RequestOtpCommand(email="user@example.com"))

        assert isinstance(result, Success)
        assert result.value == RequestOtpResult(email="user@example.com", expires_at=clock() + timedelta(minutes=10))
        assert len(repository) == 1
        assert (await repository.fetch("user@example.com")).code == "123456"
        sender.send_otp.assert_awaited_once_with("user@example.com", "123456")

    async def test_malformed_email_is_rejected_without_side_effects(self, handler, generator, repository, sender):
        result = await handler.handle(RequestOtpCommand(email="user@"))

        assert isinstance(result, ValidationFailed)
        assert "Invalid email format." in [e.message for e in result.errors]
        assert generator.calls == 0
        assert len(repository) == 0
        sender.send_otp.assert_not_awaited()

    async def test_missing_email_is_rejected(self, handler):
        result = await handler.handle(RequestOtpCommand())

        assert isinstance(result, ValidationFailed)
        assert result.errors[0].message == "Email address is required."

    async def test_store_failure_returns_dependency_failed(self, handler, repository, sender, mocker):
        mocker.patch.object(repository, "save", side_effect=RuntimeError("cache down"))
        capture = mocker.patch("otp_portal.common.base_service.base_service.sentry_sdk.capture_exception")

        result = await handler.handle(RequestOtpCommand(email="user@example.com"))

        assert isinstance(result, DependencyFailed)
        assert result.reason is DependencyFailedReason.TIMEOUT
        assert result.message == GENERIC_DEPENDENCY_MESSAGE
        assert "cache down" not in result.message
        capture.assert_called_once()
        sender.send_otp.assert_not_awaited()

    async def test_sender_exception_returns_dependency_failed(self, handler, sender):
        sender.send_otp.side_effect = ConnectionError("smtp down")

        result = await handler.handle(RequestOtpCommand(email="user@example.com"))

        assert result == DependencyFailed(DependencyFailedReason.TIMEOUT, GENERIC_DEPENDENCY_MESSAGE)

    async def test_sender_failure_outcome_returns_dependency_failed(self, handler, sender):
        sender.send_otp.return_value = dependency_failed(DependencyFailedReason.UNAVAILABLE, "relay refused")

        result = await handler.handle(RequestOtpCommand(email="user@example.com"))

        assert isinstance(result, DependencyFailed)
        assert result.reason is DependencyFailedReason.TIMEOUT
        assert result.message == GENERIC_DEPENDENCY_MESSAGE

    async def test_resend_while_live_emails_the_stored_code(self, handler, repository, sender, clock):
        await handler.handle(RequestOtpCommand(email="user@example.com"))
        clock.now += timedelta(minutes=2)

        result = await handler.handle(RequestOtpCommand(email="user@example.com"))

        assert isinstance(result, Success)
        # The generator produced 654321 the second time, but 123456 is still live
        assert sender.send_otp.await_args_list[-1].args == ("user@example.com", "123456")
        assert (await repository.fetch("user@example.com")).code == "123456"
        assert result.value.expires_at == clock() - timedelta(minutes=2) + timedelta(minutes=10)

        validator = ValidateOtpHandler(repository=repository, clock=clock)
        assert (await validator.handle(ValidateOtpCommand(email="user@example.com", otp="123456"))).is_success

    async def test_request_after_expiry_issues_new_code(self, handler, repository, sender, clock):
        await handler.handle(RequestOtpCommand(email="user@example.com"))
        clock.now += timedelta(minutes=11)

        await handler.handle(RequestOtpCommand(email="user@example.com"))

        assert (await repository.fetch("user@example.com")).code == "654321"
        assert sender.send_otp.await_args_list[-1].args == ("user@example.com", "654321")

    @pytest.mark.parametrize("email", [
        "user@example.com", "first.last+x@mail.example.org", "UPPER@Example.COM", "o'neil@example.com", "a&b@example.com",
    ])
    async def test_request_then_validate_succeeds(self, repository, sender, clock, email):
        request = RequestOtpHandler(SecretsOtpGenerator(), repository, sender, clock=clock)
        validate = ValidateOtpHandler(repository, clock=clock)

        assert (await request.handle(RequestOtpCommand(email=email))).is_success
        sent_code = sender.send_otp.await_args.args[1]

        assert (await validate.handle(ValidateOtpCommand(email=email, otp=sent_code))).is_success
