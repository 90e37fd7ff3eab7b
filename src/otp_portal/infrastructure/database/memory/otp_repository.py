# File: infrastructure/database/memory/otp_repository.py

import asyncio
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from otp_portal.common.logging.logger import log_debug, log_info
from otp_portal.common.utils.date_utils import utc_now
from otp_portal.domain.auth.entities.otp_entity import OtpCode
from otp_portal.domain.auth.ports import OtpRepository

SWEEP_INTERVAL = timedelta(minutes=1)


class InMemoryOtpRepository(OtpRepository):
    """
    Process-local OTP store. Entries carry their own expiry instant and are
    evicted when touched after it has passed; a save also sweeps every expired
    entry at most once per `sweep_interval`. Saves are serialized by one lock.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now, sweep_interval: timedelta = SWEEP_INTERVAL):
        self._clock = clock
        self._entries: Dict[str, OtpCode] = {}
        self._lock = asyncio.Lock()
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval

    def _live(self, email: str) -> Optional[OtpCode]:
        entry = self._entries.get(email)
        if entry is not None and entry.is_expired(self._clock()):
            del self._entries[email]
            log_debug("Expired OTP evicted", extra={"email": email})
            return None
        return entry

    def _sweep(self) -> None:
        now = self._clock()
        if now < self._next_sweep:
            return
        expired = [email for email, entry in self._entries.items() if entry.is_expired(now)]
        for email in expired:
            del self._entries[email]
        self._next_sweep = now + self._sweep_interval
        if expired:
            log_debug("Expired OTPs swept", extra={"count": len(expired)})

    async def save(self, otp: OtpCode) -> None:
        async with self._lock:
            self._sweep()
            if self._live(otp.email) is not None:
                log_info("Live OTP already stored, new code discarded", extra={"email": otp.email})
                return
            if otp.is_expired(self._clock()):
                log_info("OTP already expired, not stored", extra={"email": otp.email})
                return
            self._entries[otp.email] = otp
            log_info("OTP stored", extra={"email": otp.email, "expires_at": otp.expires_at.isoformat()})

    async def fetch(self, email: str) -> Optional[OtpCode]:
        return self._live(email)

    async def delete(self, email: str) -> None:
        removed = self._entries.pop(email, None)
        log_info("OTP deleted", extra={"email": email, "existed": removed is not None})

    def __len__(self) -> int:
        return sum(1 for email in list(self._entries) if self._live(email) is not None)
