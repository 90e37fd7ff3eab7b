"""
Unit tests for the email delivery path: `SmtpClient` and `EmailOtpSender`.

`smtplib.SMTP` is mocked; no network traffic is made.
"""

import smtplib

import pytest

from otp_portal.common.exceptions.base_exception import EmailDeliveryException
from otp_portal.common.results.result import DependencyFailed, DependencyFailedReason, Success
from otp_portal.infrastructure.external.email.email_otp_sender import EmailOtpSender
from otp_portal.infrastructure.external.email.smtp_client import SmtpClient


@pytest.fixture
def smtp_server(mocker):
    smtp_cls = mocker.patch("otp_portal.infrastructure.external.email.smtp_client.smtplib.SMTP")
    return smtp_cls.return_value.__enter__.return_value


@pytest.fixture
def otp_sender():
    client = SmtpClient(host="smtp.example.com", port=587, username="bot", password="secret")
    return EmailOtpSender(
        client,
        sender_email="no-reply@example.com",
        subject="Your code",
        html_pre_otp="<b>",
        html_post_otp="</b>"
    )


class TestSmtpClient:

    async def test_send_uses_starttls_and_login(self, smtp_server, otp_sender):
        await otp_sender._smtp.send_email(otp_sender.build_message("user@example.com", "123456"))

        smtp_server.starttls.assert_called_once()
        smtp_server.login.assert_called_once_with("bot", "secret")
        smtp_server.send_message.assert_called_once()

    async def test_smtp_errors_raise_delivery_exception(self, smtp_server, otp_sender):
        smtp_server.send_message.side_effect = smtplib.SMTPRecipientsRefused({})

        with pytest.raises(EmailDeliveryException) as exc_info:
            await otp_sender._smtp.send_email(otp_sender.build_message("user@example.com", "123456"))

        assert exc_info.value.recipient == "user@example.com"


class TestEmailOtpSender:

    def test_message_layout(self, otp_sender):
        message = otp_sender.build_message("user@example.com", "123456")

        assert message["From"] == "no-reply@example.com"
        assert message["To"] == "user@example.com"
        assert message["Subject"] == "Your code"
        assert message.get_body(preferencelist=("html",)).get_content().strip() == "<b>123456</b>"

    async def test_send_otp_success(self, smtp_server, otp_sender):
        result = await otp_sender.send_otp("user@example.com", "123456")

        assert isinstance(result, Success)
        sent = smtp_server.send_message.call_args.args[0]
        assert sent["To"] == "user@example.com"

    async def test_send_otp_failure_is_reported(self, smtp_server, otp_sender):
        smtp_server.send_message.side_effect = OSError("connection reset")

        result = await otp_sender.send_otp("user@example.com", "123456")

        assert isinstance(result, DependencyFailed)
        assert result.reason is DependencyFailedReason.UNAVAILABLE
