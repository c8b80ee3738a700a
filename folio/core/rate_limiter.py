"""Rate limiting middleware using a Redis sliding window."""

import hashlib
import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from folio.config import settings
from folio.db.redis import get_redis

logger = logging.getLogger(__name__)

UNLIMITED_PATHS = {"/health", "/metrics"}


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client request limit over a sliding window."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in UNLIMITED_PATHS:
            return await call_next(request)

        client_id = self._get_client_id(request)
        is_allowed, remaining, reset_time = await self._check_rate_limit(client_id)

        headers = {
            "X-RateLimit-Limit": str(settings.RATE_LIMIT_REQUESTS),
            "X-RateLimit-Remaining": str(remaining),
            "X-RateLimit-Reset": str(reset_time),
        }

        if not is_allowed:
            return JSONResponse(
                status_code=429,
                content={"detail": "Rate limit exceeded", "retry_after": reset_time},
                headers={**headers, "Retry-After": str(reset_time)},
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response

    def _get_client_id(self, request: Request) -> str:
        """Bearer token digest when authenticated, client IP otherwise."""
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            digest = hashlib.sha256(auth_header.encode()).hexdigest()[:32]
            return f"user:{digest}"

        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            client_ip = forwarded.split(",")[0].strip()
        else:
            client_ip = request.client.host if request.client else "unknown"

        return f"ip:{client_ip}"

    async def _check_rate_limit(self, client_id: str) -> tuple[bool, int, int]:
        """Record this request and report whether it fits the window.

        Returns:
            Tuple of (is_allowed, remaining_requests, reset_time_seconds)
        """
        limit = settings.RATE_LIMIT_REQUESTS
        window = settings.RATE_LIMIT_WINDOW

        try:
            redis = get_redis()
            key = f"ratelimit:{client_id}"
            now = time.time()
            member = str(time.time_ns())

            pipe = redis.pipeline()
            pipe.zremrangebyscore(key, 0, now - window)
            pipe.zcard(key)
            pipe.zadd(key, {member: now})
            pipe.expire(key, window)
            results = await pipe.execute()
            request_count = results[1]

            if request_count >= limit:
                await redis.zrem(key, member)
                return False, 0, window

            return True, max(0, limit - request_count - 1), window

        except Exception as e:
            # Redis being unavailable must not take the API down
            logger.warning(f"Rate limiter unavailable, allowing request: {e}")
            return True, limit, window
