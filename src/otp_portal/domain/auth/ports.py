# File: domain/auth/ports.py

from abc import ABC, abstractmethod
from typing import Optional

from otp_portal.common.results.result import Result
from otp_portal.domain.auth.entities.otp_entity import OtpCode


class OtpRepository(ABC):
    """Keeps at most one live OtpCode per email address."""

    @abstractmethod
    async def save(self, otp: OtpCode) -> None:
        """Store `otp` unless a live code already exists for its email; then do nothing."""

    @abstractmethod
    async def fetch(self, email: str) -> Optional[OtpCode]:
        """Return the live code for `email`, or None when absent or expired."""

    @abstractmethod
    async def delete(self, email: str) -> None:
        """Remove any code for `email`. Removing a missing code is not an error."""


class OtpGenerator(ABC):
    @abstractmethod
    def generate(self) -> str:
        """Return a fresh six-digit code."""


class OtpSender(ABC):
    @abstractmethod
    async def send_otp(self, address: str, code: str) -> Result[None]:
        """Deliver `code` to `address`; report failure as a DependencyFailed result."""
