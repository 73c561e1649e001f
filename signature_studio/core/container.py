"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass, field

from signature_studio.core.config import Settings, get_settings
from signature_studio.core.rate_limit import RateLimitStore, build_rate_limit_store
from signature_studio.core.security import TokenService
from signature_studio.infrastructure.database.session import get_engine
from signature_studio.modules.signatures import SignatureRenderer


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    tokens: TokenService = field(init=False)
    renderer: SignatureRenderer = field(init=False)
    rate_limit_store: RateLimitStore = field(init=False)

    def __post_init__(self) -> None:
        self.tokens = TokenService.from_settings(self.settings)
        self.renderer = SignatureRenderer(
            escape_html=self.settings.renderer.escape_html,
            default_preset=self.settings.renderer.default_preset,
        )
        self.rate_limit_store = build_rate_limit_store(self.settings)

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        get_engine(self.settings)

    async def shutdown(self) -> None:
        await self.rate_limit_store.close()


def build_container(settings: Settings | None = None) -> ApplicationContainer:
    container = ApplicationContainer(settings=settings or get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "build_container"]
