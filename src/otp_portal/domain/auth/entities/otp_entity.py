# File: domain/auth/entities/otp_entity.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from otp_portal.common.utils.date_utils import add_minutes, utc_now

DEFAULT_VALIDITY_MINUTES = 10


class OtpCode(BaseModel):
    """A generated one-time password bound to one email address."""

    code: str = Field(..., pattern=r"^[0-9]{6}$", description="Six ASCII digits")
    email: str = Field(..., min_length=1, description="Identity the code was issued to")
    expires_at: datetime = Field(..., description="Instant after which the code is rejected")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def issue(
        cls,
        code: str,
        email: str,
        validity_minutes: int = DEFAULT_VALIDITY_MINUTES,
        now: Optional[datetime] = None
    ) -> "OtpCode":
        return cls(code=code, email=email, expires_at=add_minutes(now or utc_now(), validity_minutes))

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utc_now()) > self.expires_at

    def is_code_valid(self, candidate: Optional[str], now: Optional[datetime] = None) -> bool:
        """
        True when `candidate` equals the stored code, ignoring case, and the code
        has not expired. The expiry instant itself is still valid.
        """
        if candidate is None:
            return False
        return candidate.casefold() == self.code.casefold() and not self.is_expired(now)
