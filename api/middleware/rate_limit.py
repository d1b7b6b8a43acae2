"""
HSR Tools - Rate Limiting.

Sliding-window, in-memory rate limiter exposed as a FastAPI dependency.
Guards login attempts and the Mihomo proxy, keyed by client address.
Suitable for single-instance deployments only.
"""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import HTTPException, Request

from shared.config import get_settings

logger = logging.getLogger(__name__)


class InMemoryRateLimiter:
    """Per-key sliding window of request timestamps."""

    def __init__(self):
        self._requests: dict[str, list[float]] = {}

    def _prune(self, key: str, window_seconds: int, now: float) -> list[float]:
        """Drop timestamps outside the window; keys with none left are removed."""
        window_start = now - window_seconds
        recent = [t for t in self._requests.get(key, []) if t > window_start]
        if recent:
            self._requests[key] = recent
        else:
            self._requests.pop(key, None)
        return recent

    def check_rate_limit(self, key: str, max_requests: int, window_seconds: int) -> bool:
        """
        Record a request for ``key`` if it is within the limit.

        Returns:
            True if request is allowed, False if rate limited
        """
        now = time.monotonic()
        recent = self._prune(key, window_seconds, now)

        if len(recent) >= max_requests:
            logger.warning(
                f"Rate limit exceeded for {key}: "
                f"{len(recent)}/{max_requests} in {window_seconds}s"
            )
            return False

        recent.append(now)
        self._requests[key] = recent
        return True

    def get_remaining(self, key: str, max_requests: int, window_seconds: int) -> int:
        """Requests still allowed for ``key`` in the current window."""
        recent = self._prune(key, window_seconds, time.monotonic())
        return max(0, max_requests - len(recent))

    def clear_all(self) -> None:
        """Clear all rate limit data."""
        self._requests.clear()


# Singleton instance
_rate_limiter: InMemoryRateLimiter | None = None


def get_rate_limiter() -> InMemoryRateLimiter:
    """Get singleton rate limiter instance."""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = InMemoryRateLimiter()
    return _rate_limiter


def rate_limit(scope: str, setting_name: str, window_seconds: int = 60) -> Callable[[Request], Awaitable[None]]:
    """
    Build a dependency that allows ``settings.<setting_name>`` requests
    per client and window for ``scope``.

    Usage:
        @router.post("/login", dependencies=[Depends(rate_limit("login", "RATE_LIMIT_LOGIN_PER_MINUTE"))])
    """

    async def dependency(request: Request) -> None:
        max_requests = getattr(get_settings(), setting_name)
        if max_requests <= 0:
            return

        client = request.client.host if request.client else "unknown"
        key = f"{scope}:{client}"
        if not get_rate_limiter().check_rate_limit(key, max_requests, window_seconds):
            raise HTTPException(
                status_code=429,
                detail="Too many requests, try again later",
                headers={"Retry-After": str(window_seconds)},
            )

    return dependency
