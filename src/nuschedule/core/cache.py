"""
Redis caching utilities for the API.

Provides:
- ResponseCache, owned by the application (app.state.cache)
- @cached decorator for endpoint caching
- Cache invalidation helpers

When no Redis URL is configured, or Redis can't be reached, app.state.cache
is None and every cached endpoint simply runs.
"""

import hashlib
import json
import logging
from functools import wraps
from typing import Any, Callable, Optional

import redis.asyncio as redis
from fastapi import Request

logger = logging.getLogger(__name__)

# Default TTLs (in seconds)
TTL_SHORT = 300  # 5 minutes
TTL_STANDARD = 3600  # 1 hour - general endpoints
TTL_LONG = 86400  # 24 hours - static data (courses, sections)

KEY_PREFIX = "api:"


class ResponseCache:
    """Thin wrapper over an async Redis client"""

    def __init__(self, client: Any):
        self.client = client

    @classmethod
    async def connect(cls, url: str) -> Optional["ResponseCache"]:
        """Connect and ping; None if Redis isn't reachable."""
        client = redis.from_url(url, encoding="utf-8", decode_responses=True)
        try:
            await client.ping()
        except Exception as e:
            logger.warning(f"Redis connection failed: {e}")
            await client.aclose()
            return None
        return cls(client)

    async def get(self, key: str) -> Optional[Any]:
        data = await self.client.get(key)
        return json.loads(data) if data else None

    async def set(self, key: str, value: Any, ttl: int) -> None:
        await self.client.setex(key, ttl, json.dumps(value, default=str))

    async def invalidate(self, pattern: str) -> int:
        """
        Invalidate cache entries matching a pattern.

        Args:
            pattern: Redis key pattern (e.g., "api:/api/courses*")

        Returns:
            Number of keys deleted
        """
        try:
            keys = [key async for key in self.client.scan_iter(match=pattern)]
            if keys:
                deleted: int = await self.client.delete(*keys)
                return deleted
            return 0
        except Exception as e:
            logger.warning(f"Cache invalidation error: {e}")
            return 0

    async def clear(self) -> int:
        """Clear all API cache entries."""
        return await self.invalidate(f"{KEY_PREFIX}*")

    async def close(self) -> None:
        await self.client.aclose()


def generate_cache_key(request: Request) -> str:
    """Generate a cache key from request path and query params."""
    path = request.url.path
    query_params = str(sorted(request.query_params.items()))

    key_data = f"{path}:{query_params}"
    key_hash = hashlib.md5(key_data.encode()).hexdigest()[:16]

    return f"{KEY_PREFIX}{path}:{key_hash}"


def cached(ttl: int = TTL_STANDARD) -> Callable:
    """
    Decorator to cache endpoint responses in Redis.

    Usage:
        @router.get("/courses")
        @cached(ttl=TTL_LONG)
        async def get_courses(request: Request, ...):
            ...

    The endpoint must take `request: Request` and return JSON-serializable
    data.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            request: Optional[Request] = kwargs.get("request")
            if request is None:
                request = next((arg for arg in args if isinstance(arg, Request)), None)

            cache: Optional[ResponseCache] = (
                getattr(request.app.state, "cache", None) if request else None
            )
            if cache is None:
                return await func(*args, **kwargs)

            cache_key = generate_cache_key(request)
            try:
                hit = await cache.get(cache_key)
            except Exception as e:
                logger.warning(f"Cache error: {e}")
                return await func(*args, **kwargs)

            if hit is not None:
                request.state.cache_hit = True
                return hit

            result = await func(*args, **kwargs)
            try:
                await cache.set(cache_key, result, ttl)
            except (TypeError, ValueError):
                # Result not JSON serializable, skip caching
                pass
            except Exception as e:
                logger.warning(f"Cache error: {e}")

            request.state.cache_hit = False
            return result

        return wrapper

    return decorator
