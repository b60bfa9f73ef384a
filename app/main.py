from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routers import admin, auth, billing, me, videos
from app.shared.config import Settings, get_settings


logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    application = FastAPI(title="SaaS Demo API")
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(auth.router)
    application.include_router(me.router)
    application.include_router(billing.router)
    application.include_router(videos.router)
    application.include_router(admin.router)

    if settings.enable_manual_activation:
        logger.warning("main: manual subscription activation endpoint is enabled")
        application.include_router(billing.manual_activation_router)

    @application.get("/health")
    def health():
        return {"status": "ok"}

    return application


app = create_app()
