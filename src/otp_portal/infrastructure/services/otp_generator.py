# File: infrastructure/services/otp_generator.py

import secrets

from otp_portal.domain.auth.ports import OtpGenerator

OTP_MIN = 100000
OTP_MAX = 999999


class SecretsOtpGenerator(OtpGenerator):
    """Six-digit codes drawn uniformly from [100000, 999999] using the OS CSPRNG."""

    def generate(self) -> str:
        return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))
