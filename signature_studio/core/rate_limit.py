"""Fixed-window counters for throttling the authentication endpoints.

Counters live behind the ``RateLimitStore`` protocol so the process-local store can be swapped
for a shared Redis store when several instances serve traffic.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

import redis.asyncio as redis

from signature_studio.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RateLimitPolicy:
    name: str
    max_attempts: int
    window_seconds: int


@dataclass(frozen=True, slots=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after: int = 0


def policy_from_settings(settings: Settings, name: str) -> RateLimitPolicy:
    section = settings.rate_limit
    if name == "login":
        return RateLimitPolicy("login", section.login_max_attempts, section.login_window_seconds)
    if name == "register":
        return RateLimitPolicy("register", section.register_max_attempts, section.register_window_seconds)
    raise ValueError(f"unknown rate limit policy: {name}")


class RateLimitStore(Protocol):
    async def hit(self, key: str, policy: RateLimitPolicy) -> RateLimitDecision:
        ...

    async def reset(self) -> None:
        ...

    async def close(self) -> None:
        ...


@dataclass(slots=True)
class _Window:
    count: int
    reset_at: float


class MemoryRateLimitStore:
    """Per-process counters; windows are reset lazily on the first hit after they expire."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    async def hit(self, key: str, policy: RateLimitPolicy) -> RateLimitDecision:
        # no await between read and update, so this is atomic on the event loop
        now = self._clock()
        bucket_key = f"{policy.name}:{key}"
        window = self._windows.get(bucket_key)
        if window is None or now > window.reset_at:
            self._windows[bucket_key] = _Window(count=1, reset_at=now + policy.window_seconds)
            return RateLimitDecision(allowed=True, remaining=policy.max_attempts - 1)
        if window.count >= policy.max_attempts:
            return RateLimitDecision(
                allowed=False,
                remaining=0,
                retry_after=max(1, math.ceil(window.reset_at - now)),
            )
        window.count += 1
        return RateLimitDecision(allowed=True, remaining=policy.max_attempts - window.count)

    async def reset(self) -> None:
        self._windows.clear()

    async def close(self) -> None:
        self._windows.clear()


class RedisRateLimitStore:
    """Counters shared across instances via ``INCR`` + ``PEXPIRE``."""

    def __init__(self, client: redis.Redis, prefix: str = "signature-studio:ratelimit:") -> None:
        self._client = client
        self._prefix = prefix

    @classmethod
    def from_url(cls, url: str) -> "RedisRateLimitStore":
        return cls(redis.from_url(url, decode_responses=True))

    async def hit(self, key: str, policy: RateLimitPolicy) -> RateLimitDecision:
        redis_key = f"{self._prefix}{policy.name}:{key}"
        async with self._client.pipeline(transaction=True) as pipe:
            pipe.incr(redis_key)
            pipe.pttl(redis_key)
            count, ttl_ms = await pipe.execute()
        if ttl_ms is None or ttl_ms < 0:
            ttl_ms = policy.window_seconds * 1000
            await self._client.pexpire(redis_key, ttl_ms)
        if count > policy.max_attempts:
            return RateLimitDecision(allowed=False, remaining=0, retry_after=max(1, math.ceil(ttl_ms / 1000)))
        return RateLimitDecision(allowed=True, remaining=policy.max_attempts - count)

    async def reset(self) -> None:
        async for key in self._client.scan_iter(match=f"{self._prefix}*"):
            await self._client.delete(key)

    async def close(self) -> None:
        await self._client.aclose()


def build_rate_limit_store(settings: Settings, client: Optional[redis.Redis] = None) -> RateLimitStore:
    if settings.rate_limit.backend == "redis":
        logger.info("Using Redis rate limit store")
        if client is not None:
            return RedisRateLimitStore(client)
        return RedisRateLimitStore.from_url(settings.rate_limit.redis_url)
    return MemoryRateLimitStore()


__all__ = [
    "MemoryRateLimitStore",
    "RateLimitDecision",
    "RateLimitPolicy",
    "RateLimitStore",
    "RedisRateLimitStore",
    "build_rate_limit_store",
    "policy_from_settings",
]
