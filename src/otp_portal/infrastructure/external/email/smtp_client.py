# File: infrastructure/external/email/smtp_client.py

import asyncio
import smtplib
from email.message import EmailMessage

from otp_portal.common.exceptions.base_exception import EmailDeliveryException
from otp_portal.common.logging.logger import log_error, log_info


class SmtpClient:
    def __init__(
        self,
        *,
        host: str,
        port: int,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        timeout: float = 10.0
    ) -> None:
        self._host = host
        self._port = int(port)
        self._username = username
        self._password = password
        self._use_tls = bool(use_tls)
        self._timeout = timeout

    def _send_blocking(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
            if self._use_tls:
                server.starttls()
            if self._username and self._password:
                server.login(self._username, self._password)
            server.send_message(message)

    async def send_email(self, message: EmailMessage) -> None:
        """Send `message` without blocking the event loop. Raises EmailDeliveryException."""
        try:
            await asyncio.to_thread(self._send_blocking, message)
            log_info("Email sent", extra={"to": message["To"], "host": self._host})
        except (smtplib.SMTPException, OSError) as e:
            log_error("Email sending failed", extra={"to": message["To"], "error": str(e)})
            raise EmailDeliveryException(message["To"], str(e)) from e
