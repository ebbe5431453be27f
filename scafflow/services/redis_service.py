"""Redis-held session state: revoked bearer tokens and failed login counters"""

import hashlib
import logging
import time
import redis.asyncio as redis
from typing import Optional
from scafflow.config import settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "scafflow"


def revoked_token_key(token: str) -> str:
    # Tokens are long; key on their digest
    digest = hashlib.sha256(token.encode("utf-8")).hexdigest()
    return f"{KEY_PREFIX}:revoked:{digest}"


def failed_login_key(ip_address: str) -> str:
    return f"{KEY_PREFIX}:failed_logins:{ip_address}"


class RedisService:
    """
    Shared Redis client plus the state the auth flow keeps in it.

    A revoked token stays listed only until its own expiry. Failed logins
    are counted per client IP in a window of settings.login_lockout_seconds
    opened by the first failure.
    """

    _client: Optional[redis.Redis] = None

    @classmethod
    async def get_client(cls) -> redis.Redis:
        if cls._client is None:
            cls._client = redis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=True
            )
        return cls._client

    @classmethod
    async def close(cls):
        if cls._client:
            await cls._client.aclose()
            cls._client = None

    async def revoke_token(self, token: str, expires_at: float) -> bool:
        """
        Reject a token until it expires.

        Args:
            token: Bearer token being logged out
            expires_at: The token's exp claim (epoch seconds)

        Returns:
            False when the token had already expired and nothing was stored
        """
        ttl = int(expires_at - time.time())
        if ttl <= 0:
            return False
        client = await self.get_client()
        await client.set(revoked_token_key(token), "1", ex=ttl)
        return True

    async def is_token_revoked(self, token: str) -> bool:
        client = await self.get_client()
        return bool(await client.exists(revoked_token_key(token)))

    async def is_login_throttled(self, ip_address: str) -> bool:
        """True once the IP has used up settings.login_attempt_limit failures"""
        client = await self.get_client()
        failures = await client.get(failed_login_key(ip_address))
        return int(failures or 0) >= settings.login_attempt_limit

    async def record_failed_login(self, ip_address: str) -> int:
        client = await self.get_client()
        key = failed_login_key(ip_address)
        failures = await client.incr(key)
        if failures == 1:
            await client.expire(key, settings.login_lockout_seconds)
        if failures >= settings.login_attempt_limit:
            logger.warning(f"Login locked for {ip_address} after {failures} failures")
        return failures

    async def clear_failed_logins(self, ip_address: str):
        client = await self.get_client()
        await client.delete(failed_login_key(ip_address))
