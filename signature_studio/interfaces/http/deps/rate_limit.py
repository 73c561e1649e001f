"""Rate limit dependencies for the authentication endpoints."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from fastapi import Depends, Request

from signature_studio.core.config import Settings
from signature_studio.core.errors import RateLimitExceededError
from signature_studio.core.rate_limit import RateLimitStore, policy_from_settings

from .container import get_app_settings, get_rate_limit_store

logger = logging.getLogger(__name__)


def client_identifier(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def rate_limit(policy_name: str) -> Callable[..., Awaitable[None]]:
    """Dependency factory applying the named policy to the calling client address."""

    async def dependency(
        request: Request,
        settings: Settings = Depends(get_app_settings),
        store: RateLimitStore = Depends(get_rate_limit_store),
    ) -> None:
        policy = policy_from_settings(settings, policy_name)
        identifier = client_identifier(request)
        decision = await store.hit(identifier, policy)
        if not decision.allowed:
            logger.warning(
                "Rate limit %s exceeded for %s, retry after %ss",
                policy.name,
                identifier,
                decision.retry_after,
            )
            raise RateLimitExceededError(decision.retry_after)

    return dependency


__all__ = ["client_identifier", "rate_limit"]
