"""HSR Tools - API Middleware."""

from api.middleware.rate_limit import InMemoryRateLimiter, get_rate_limiter, rate_limit

__all__ = ["InMemoryRateLimiter", "get_rate_limiter", "rate_limit"]
