"""Access to the per-application service container."""

from fastapi import Depends, Request

from signature_studio.core.container import ApplicationContainer
from signature_studio.core.config import Settings
from signature_studio.core.rate_limit import RateLimitStore
from signature_studio.core.security import TokenService
from signature_studio.modules.signatures import SignatureRenderer


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_app_settings(container: ApplicationContainer = Depends(get_container)) -> Settings:
    return container.settings


def get_token_service(container: ApplicationContainer = Depends(get_container)) -> TokenService:
    return container.tokens


def get_renderer(container: ApplicationContainer = Depends(get_container)) -> SignatureRenderer:
    return container.renderer


def get_rate_limit_store(container: ApplicationContainer = Depends(get_container)) -> RateLimitStore:
    return container.rate_limit_store


__all__ = [
    "get_app_settings",
    "get_container",
    "get_rate_limit_store",
    "get_renderer",
    "get_token_service",
]
