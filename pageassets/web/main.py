from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pageassets.infrastructure.config import get_settings
from pageassets.infrastructure.logging import get_logger, setup_logging
from pageassets.infrastructure.manifests import reset_manifest_cache
from pageassets.web.routes import api

logger = get_logger(__name__)


def create_application() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app.title,
        version=settings.app.version,
        debug=settings.app.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api.router)

    @app.on_event("startup")
    async def startup_event() -> None:
        setup_logging(settings.logging)
        reset_manifest_cache()
        logger.info(f"Starting {settings.app.title}: {settings.get_environment_info()}")

    return app


app = create_application()
