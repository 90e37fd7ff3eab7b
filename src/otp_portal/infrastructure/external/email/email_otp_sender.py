# File: infrastructure/external/email/email_otp_sender.py

from email.message import EmailMessage

from otp_portal.common.exceptions.base_exception import EmailDeliveryException
from otp_portal.common.logging.logger import log_error, log_info
from otp_portal.common.results.result import DependencyFailedReason, Result, dependency_failed, success
from otp_portal.domain.auth.ports import OtpSender
from otp_portal.infrastructure.external.email.smtp_client import SmtpClient


class EmailOtpSender(OtpSender):
    def __init__(
        self,
        smtp_client: SmtpClient,
        *,
        sender_email: str,
        subject: str,
        html_pre_otp: str = "",
        html_post_otp: str = ""
    ) -> None:
        self._smtp = smtp_client
        self.sender_email = sender_email
        self.subject = subject
        self.html_pre_otp = html_pre_otp
        self.html_post_otp = html_post_otp

    def build_message(self, address: str, code: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender_email
        message["To"] = address
        message["Subject"] = self.subject
        message.set_content(f"Your one-time password is {code}.")
        message.add_alternative(f"{self.html_pre_otp}{code}{self.html_post_otp}", subtype="html")
        return message

    async def send_otp(self, address: str, code: str) -> Result[None]:
        try:
            await self._smtp.send_email(self.build_message(address, code))
        except EmailDeliveryException as e:
            log_error("Failed to send OTP email", extra={"to": address, "error": e.detail})
            return dependency_failed(DependencyFailedReason.UNAVAILABLE, "The OTP email could not be delivered.")
        log_info("OTP email sent", extra={"to": address})
        return success()
