from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from signature_studio import __version__
from signature_studio.core.config import Settings, get_settings
from signature_studio.core.container import build_container
from signature_studio.core.logging_config import configure_logging
from signature_studio.infrastructure.database import dispose_engine, init_db
from signature_studio.interfaces.http.errors import register_exception_handlers
from signature_studio.interfaces.http.routers import create_api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db(app.state.container.settings)
    yield
    await app.state.container.shutdown()
    await dispose_engine()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Multi-tenant email signature management API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = build_container(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    asset_dir = Path(settings.asset_storage_dir).resolve()
    asset_dir.mkdir(parents=True, exist_ok=True)
    app.mount(settings.storage.public_prefix.rstrip("/"), StaticFiles(directory=str(asset_dir)), name="assets")

    app.include_router(create_api_router(settings.api_prefix))
    register_exception_handlers(app, debug=settings.debug)
    return app


app = create_app()
