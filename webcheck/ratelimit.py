# ratelimit.py
import logging
from typing import Optional

import redis.asyncio as aioredis
from fastapi import Request
from fastapi.responses import JSONResponse

log = logging.getLogger("webcheck")


class RateLimitExceeded(Exception):
    def __init__(self, retry_after: int):
        super().__init__("Too many requests")
        self.retry_after = retry_after


class RateLimiter:
    """Fixed-window request counter per client and route, kept in Redis.

    When Redis is not configured or unreachable every request is allowed.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        limit: int = 6,
        window: int = 60,
        client: Optional[aioredis.Redis] = None,
        prefix: str = "ratelimit",
    ):
        self.redis_url = redis_url
        self.limit = limit
        self.window = window
        self.prefix = prefix
        self.redis = client

    @property
    def enabled(self) -> bool:
        return self.redis is not None

    async def connect(self):
        if self.redis is None:
            if not self.redis_url:
                log.info("Rate limiting disabled (no REDIS_URL)")
                return
            self.redis = aioredis.Redis.from_url(self.redis_url, decode_responses=True)
        try:
            await self.redis.ping()
            log.info("Rate limiter connected to Redis")
        except Exception as e:
            log.error("Failed to connect to Redis, rate limiting disabled: %s", e)
            await self.redis.aclose()
            self.redis = None

    async def close(self):
        if self.redis:
            await self.redis.aclose()
            self.redis = None

    async def hit(self, key: str) -> int:
        """Count one request for ``key``; return the count in the current window."""
        k = f"{self.prefix}:{key}"
        current = await self.redis.incr(k)
        if current == 1:
            await self.redis.expire(k, self.window)
        return current

    async def check(self, request: Request):
        """FastAPI dependency guarding a route."""
        if not self.enabled:
            return
        client = request.client.host if request.client else "unknown"
        try:
            current = await self.hit(f"{request.url.path}:{client}")
        except Exception as e:
            log.warning("Rate limiter unavailable: %s", e)
            return
        if current > self.limit:
            raise RateLimitExceeded(self.window)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"error": "Too many requests"},
        headers={"Retry-After": str(exc.retry_after)},
    )
