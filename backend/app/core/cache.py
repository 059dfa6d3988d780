"""
Redis-backed revoked token list
"""
from typing import Optional

import redis

from app.core.config import settings
from app.core.logging import logger


class TokenBlacklist:
    """Stores revoked JWT ids until the token would have expired anyway"""

    prefix = "revoked_jti:"

    def __init__(self, client: Optional[redis.Redis] = None):
        self.client = client if client is not None else redis.from_url(
            settings.REDIS_URL, decode_responses=True
        )

    def revoke(self, jti: str, ttl_seconds: int) -> None:
        """Revoke a token id; Redis errors propagate and surface as 503"""
        if ttl_seconds <= 0:
            return
        self.client.setex(f"{self.prefix}{jti}", ttl_seconds, "1")

    def is_revoked(self, jti: str) -> bool:
        """Check a token id (fails open if Redis is unreachable)"""
        try:
            return bool(self.client.exists(f"{self.prefix}{jti}"))
        except redis.RedisError as e:
            logger.warning(f"Token blacklist lookup failed: {e}")
            return False


_blacklist: Optional[TokenBlacklist] = None


def get_token_blacklist() -> TokenBlacklist:
    """Shared blacklist instance (FastAPI dependency)"""
    global _blacklist
    if _blacklist is None:
        _blacklist = TokenBlacklist()
    return _blacklist
