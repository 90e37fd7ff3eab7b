"""
Unit tests for `OtpCode`.

Checks the six-digit rule, expiry assignment at issue time and the
`is_code_valid` rule (case-insensitive match and not past `expires_at`).
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from otp_portal.domain.auth.entities.otp_entity import OtpCode

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestOtpCode:

    def test_issue_sets_expiry_to_now_plus_default_window(self):
        otp = OtpCode.issue("123456", "user@example.com", now=NOW)

        assert otp.expires_at == NOW + timedelta(minutes=10)

    def test_issue_uses_custom_window(self):
        otp = OtpCode.issue("123456", "user@example.com", validity_minutes=3, now=NOW)

        assert otp.expires_at == NOW + timedelta(minutes=3)

    @pytest.mark.parametrize("code", ["12345", "1234567", "12345a", "", "１２３４５６"])
    def test_code_must_be_six_ascii_digits(self, code):
        with pytest.raises(ValidationError):
            OtpCode(code=code, email="user@example.com", expires_at=NOW)

    def test_expiry_is_immutable(self):
        otp = OtpCode.issue("123456", "user@example.com", now=NOW)

        with pytest.raises(ValidationError):
            otp.expires_at = NOW + timedelta(days=1)

    def test_valid_before_and_at_expiry(self):
        otp = OtpCode.issue("123456", "user@example.com", now=NOW)

        assert otp.is_code_valid("123456", now=NOW)
        assert otp.is_code_valid("123456", now=otp.expires_at)

    def test_invalid_one_microsecond_after_expiry(self):
        otp = OtpCode.issue("123456", "user@example.com", now=NOW)

        assert not otp.is_code_valid("123456", now=otp.expires_at + timedelta(microseconds=1))

    def test_invalid_on_mismatch(self):
        otp = OtpCode.issue("123456", "user@example.com", now=NOW)

        assert not otp.is_code_valid("654321", now=NOW)
        assert not otp.is_code_valid(None, now=NOW)
