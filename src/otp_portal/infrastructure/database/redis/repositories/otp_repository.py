# File: infrastructure/database/redis/repositories/otp_repository.py

from typing import Optional

from pydantic import ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from otp_portal.common.exceptions.base_exception import StoreUnavailableException
from otp_portal.common.logging.logger import log_error, log_info, log_warning
from otp_portal.common.utils.date_utils import seconds_until
from otp_portal.domain.auth.entities.otp_entity import OtpCode
from otp_portal.domain.auth.ports import OtpRepository
from otp_portal.infrastructure.database.redis.redis_client import get_redis_client


class RedisOtpRepository(OtpRepository):
    """OTP store on Redis. Expiry is enforced by the key TTL; saves use SET NX."""

    def __init__(self, redis: Optional[Redis] = None, key_prefix: str = "otp"):
        self._redis = redis
        self.key_prefix = key_prefix

    def _key(self, email: str) -> str:
        return f"{self.key_prefix}:{email}"

    async def _client(self) -> Redis:
        if self._redis is None:
            self._redis = await get_redis_client()
        return self._redis

    async def save(self, otp: OtpCode) -> None:
        key = self._key(otp.email)
        ttl_ms = int(seconds_until(otp.expires_at) * 1000)
        if ttl_ms <= 0:
            log_info("OTP already expired, not stored", extra={"key": key})
            return
        try:
            redis = await self._client()
            stored = await redis.set(key, otp.model_dump_json(), nx=True, px=ttl_ms)
        except RedisError as e:
            log_error("Redis set failed", extra={"key": key, "error": str(e)})
            raise StoreUnavailableException() from e
        if stored:
            log_info("Redis set", extra={"key": key, "ttl_ms": ttl_ms})
        else:
            log_info("Live OTP already stored, new code discarded", extra={"key": key})

    async def fetch(self, email: str) -> Optional[OtpCode]:
        key = self._key(email)
        try:
            redis = await self._client()
            raw = await redis.get(key)
        except RedisError as e:
            log_error("Redis get failed", extra={"key": key, "error": str(e)})
            raise StoreUnavailableException() from e
        if raw is None:
            return None
        try:
            otp = OtpCode.model_validate_json(raw)
        except ValidationError as e:
            log_warning("Unreadable OTP entry ignored", extra={"key": key, "error": str(e)})
            return None
        # TTL eviction can lag behind the logical expiry by a few milliseconds
        if otp.is_expired():
            return None
        return otp

    async def delete(self, email: str) -> None:
        key = self._key(email)
        try:
            redis = await self._client()
            deleted = await redis.delete(key)
            log_info("Redis delete", extra={"key": key, "deleted": deleted})
        except RedisError as e:
            log_error("Redis delete failed", extra={"key": key, "error": str(e)})
            raise StoreUnavailableException() from e
