"""Request metrics middleware backed by Redis hashes."""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from folio.db.redis import get_redis

logger = logging.getLogger(__name__)

REQUEST_COUNTS_KEY = "metrics:request_counts"
LATENCIES_KEY = "metrics:latencies"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Count requests per path and status, and keep the latest latency per path."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start_time

        path = request.url.path
        try:
            redis = get_redis()
            await redis.hincrby(REQUEST_COUNTS_KEY, f"{path}:{response.status_code}", 1)
            await redis.hset(LATENCIES_KEY, path, f"{elapsed:.4f}")
        except Exception as e:
            logger.debug(f"Skipping metrics for {path}: {e}")

        return response


async def read_metrics() -> dict:
    """Snapshot of request counts and latest latencies in milliseconds."""
    redis = get_redis()
    counts = await redis.hgetall(REQUEST_COUNTS_KEY)
    latencies = await redis.hgetall(LATENCIES_KEY)
    return {
        "request_counts": {key: int(value) for key, value in counts.items()},
        "latencies_ms": {key: float(value) * 1000 for key, value in latencies.items()},
    }
