"""Rate limiting middleware for the validation endpoint.

Counts requests per client over a fixed window. Counters live in an
injected store: in-memory by default, or Redis when
RATE_LIMIT_STORAGE_URL is configured for multi-worker deployments.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Protocol

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from youthwork.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class RateLimitConfig:
    """Configuration for a rate limit rule."""

    requests: int  # Number of allowed requests
    window_seconds: int  # Time window in seconds


class CounterStore(Protocol):
    """Key-value counter with expiry."""

    def increment(self, key: str, ttl_seconds: int) -> tuple[int, int]:
        """Increment a counter, starting a new window if it has expired.

        Returns:
            Tuple of (count_in_window, seconds_until_reset)
        """
        ...


@dataclass
class _Counter:
    count: int
    expires_at: float


class InMemoryCounterStore:
    """In-memory counter store.

    For single-worker deployments, development and tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._counters: dict[str, _Counter] = {}
        self._last_cleanup = clock()
        self._cleanup_interval = 300  # 5 minutes

    def _cleanup_expired(self, now: float) -> None:
        """Remove expired counters to prevent memory growth."""
        if now - self._last_cleanup < self._cleanup_interval:
            return

        expired = [key for key, c in self._counters.items() if c.expires_at <= now]
        for key in expired:
            del self._counters[key]

        self._last_cleanup = now

    def increment(self, key: str, ttl_seconds: int) -> tuple[int, int]:
        now = self._clock()
        self._cleanup_expired(now)

        counter = self._counters.get(key)
        if counter is None or counter.expires_at <= now:
            counter = _Counter(count=0, expires_at=now + ttl_seconds)
            self._counters[key] = counter

        counter.count += 1
        return counter.count, max(1, int(counter.expires_at - now))


class RedisCounterStore:
    """Redis-backed counter store for multi-worker deployments.

    Requires the redis package (``pip install youthwork-compliance[redis]``).
    """

    def __init__(self, redis_url: str) -> None:
        try:
            import redis
        except ImportError as exc:
            raise ImportError(
                "redis package required for Redis rate limit storage. "
                "Install with: pip install redis"
            ) from exc

        self.redis = redis.from_url(redis_url)

    def increment(self, key: str, ttl_seconds: int) -> tuple[int, int]:
        now = int(time.time())
        window_key = f"ratelimit:{key}:{now // ttl_seconds}"

        pipe = self.redis.pipeline()
        pipe.incr(window_key)
        pipe.expire(window_key, ttl_seconds)
        count, _ = pipe.execute()

        return int(count), ttl_seconds - (now % ttl_seconds)


def create_counter_store(storage_url: str | None) -> CounterStore:
    """Pick the counter store for the configured storage URL."""
    if storage_url:
        logger.info("Using Redis rate limit storage")
        return RedisCounterStore(storage_url)
    return InMemoryCounterStore()


def rate_limits_from_settings(settings: Settings) -> dict[tuple[str, str], RateLimitConfig]:
    """Rate limit rules keyed by (method, path)."""
    return {
        ("POST", "/api/v1/compliance/validate"): RateLimitConfig(
            requests=settings.validate_rate_limit_requests,
            window_seconds=settings.validate_rate_limit_window_seconds,
        ),
    }


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request.

    Handles X-Forwarded-For header for reverse proxy scenarios.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain (original client)
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limiting middleware for FastAPI.

    Applies rate limits to configured endpoints based on client IP.
    Returns 429 Too Many Requests when limits are exceeded.
    """

    def __init__(
        self,
        app,
        rate_limits: dict[tuple[str, str], RateLimitConfig],
        store: CounterStore,
        enabled: bool = True,
    ) -> None:
        super().__init__(app)
        self.rate_limits = rate_limits
        self.store = store
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request and apply rate limiting."""
        if not self.enabled:
            return await call_next(request)

        method = request.method
        path = request.url.path.rstrip("/") or "/"

        config = self.rate_limits.get((method, path))
        if not config:
            return await call_next(request)

        client_ip = get_client_ip(request)
        count, reset = self.store.increment(
            f"{method}:{path}:{client_ip}", config.window_seconds
        )

        if count > config.requests:
            logger.warning(
                f"Rate limit exceeded: {method} {path} from {client_ip}",
                extra={"client": client_ip},
            )

            return JSONResponse(
                status_code=429,
                content={
                    "detail": "Too many requests. Please try again later.",
                    "retry_after": reset,
                },
                headers={
                    "Retry-After": str(reset),
                    "X-RateLimit-Limit": str(config.requests),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(reset),
                },
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(config.requests)
        response.headers["X-RateLimit-Remaining"] = str(config.requests - count)
        response.headers["X-RateLimit-Reset"] = str(reset)

        return response
