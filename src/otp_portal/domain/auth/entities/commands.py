# File: domain/auth/entities/commands.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestOtpCommand(BaseModel):
    """Ask for a one-time password to be emailed to `email`."""

    email: Optional[str] = Field(default=None, description="Address the OTP is sent to")

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)


class ValidateOtpCommand(BaseModel):
    """Check a submitted one-time password for `email`."""

    email: Optional[str] = Field(default=None, description="Address the OTP was sent to")
    otp: Optional[str] = Field(default=None, description="The submitted code")

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)


class RequestOtpResult(BaseModel):
    email: str
    expires_at: datetime
