"""
Fixed-window, in-memory rate limiting exposed as FastAPI dependencies.
"""

import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional

from fastapi import Request, status

from config import ApplicationConfig
from src.api.error import ClientError
from src.libs.result import Error

logger = logging.getLogger(__name__)


@dataclass
class RateLimit:
    """Rate limit configuration."""

    requests: int  # Number of requests allowed
    window: int  # Time window in seconds


@dataclass
class RateLimitStatus:
    """Current rate limit status."""

    limit: int
    remaining: int
    reset_time: int
    retry_after: Optional[int] = None

    @property
    def exceeded(self) -> bool:
        return self.retry_after is not None

    def to_headers(self) -> Dict[str, str]:
        """Convert to HTTP headers."""
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_time),
        }
        if self.retry_after is not None:
            headers["Retry-After"] = str(self.retry_after)
        return headers


RATE_LIMITS = {
    "auth": RateLimit(requests=5, window=60),
    "password_validate": RateLimit(requests=10, window=60),
    "token_validation": RateLimit(requests=60, window=60),
}


class InMemoryRateLimiter:
    """Counters live in process memory; each worker limits independently."""

    def __init__(self):
        self.requests: Dict[str, int] = {}
        self.reset_times: Dict[str, int] = {}

    def is_allowed(self, key: str, rate_limit: RateLimit) -> RateLimitStatus:
        current_time = int(time.time())
        window_start = current_time - (current_time % rate_limit.window)

        self._sweep(current_time)

        if key not in self.requests:
            self.requests[key] = 0
            self.reset_times[key] = window_start + rate_limit.window

        current_count = self.requests[key]
        reset_time = self.reset_times[key]

        if current_count >= rate_limit.requests:
            return RateLimitStatus(
                limit=rate_limit.requests,
                remaining=0,
                reset_time=reset_time,
                retry_after=max(1, reset_time - current_time),
            )

        self.requests[key] += 1

        return RateLimitStatus(
            limit=rate_limit.requests,
            remaining=rate_limit.requests - (current_count + 1),
            reset_time=reset_time,
        )

    def _sweep(self, current_time: int) -> None:
        expired = [key for key, reset_time in self.reset_times.items() if reset_time <= current_time]
        for key in expired:
            self.requests.pop(key, None)
            self.reset_times.pop(key, None)

    def reset(self) -> None:
        self.requests.clear()
        self.reset_times.clear()


limiter = InMemoryRateLimiter()


def client_key(request: Request) -> str:
    # Socket peer only; forwarding headers are client-controlled
    return request.client.host if request.client else "unknown"


def rate_limit(limit_name: str):
    """
    Build a dependency enforcing RATE_LIMITS[limit_name] per client and path.

    Usage:
        @router.post("/login", dependencies=[Depends(rate_limit("auth"))])
    """
    config = RATE_LIMITS[limit_name]

    async def dependency(request: Request) -> None:
        if not ApplicationConfig.RATE_LIMIT_ENABLED:
            return

        key = f"{limit_name}:{client_key(request)}:{request.url.path}"
        result = limiter.is_allowed(key, config)

        if result.exceeded:
            logger.warning(f"Rate limit exceeded for {key}")
            raise ClientError(
                Error("RATE_LIMITED", "Too many requests. Please try again later."),
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers=result.to_headers(),
            )

    return dependency
