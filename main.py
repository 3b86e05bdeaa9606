"""
Player Skin API - Main Application Entry Point.

This module initializes and configures the FastAPI application for the Player
Skin API: a single endpoint that resolves a Minecraft username or UUID to the
player's current skin image and proxies the image bytes.

Key Responsibilities:
- Configure and launch the FastAPI application.
- Set up middleware for correlation, error handling and performance logging.
- Mount the health routers and the skin router.
- Initialize logging in the application lifespan.

Architecture:
Routers live in `api/`, the request pipeline in `services/`, the outbound
Mojang and image clients in `providers/`, and cross-cutting concerns
(configuration, logging, errors, middleware, validation) in `core/`.
"""

import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.endpoints import router
from api.health_router import health_router, monitoring_router, SERVICE_VERSION
from core.config import get_settings
from core.logging_config import setup_logging, get_logger
from core.middleware import (
    CorrelationMiddleware,
    ErrorHandlingMiddleware,
    PerformanceMiddleware,
)
from providers.image_provider import SkinImageProvider
from services.skin_selector import DEFAULT_SKINS


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger = get_logger("api.startup")

    settings = app.dependency_overrides.get(get_settings, get_settings)()
    logger.info(
        "Skin API configured",
        extra={
            "services_base_url": settings.services_base_url,
            "session_base_url": settings.session_base_url,
            "assets_dir": str(settings.assets_dir),
        },
    )
    missing = SkinImageProvider(settings).missing_assets(DEFAULT_SKINS.values())
    if missing:
        names = ", ".join(str(path) for path in missing)
        logger.error(f"Default skin assets missing: {names}")
        raise RuntimeError(f"Default skin assets missing: {names}")

    yield

    logger.info("Shutting down Skin API")


app = FastAPI(
    title="Player Skin API",
    description="Resolve a Minecraft username or UUID to the player's skin image",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ALLOW_ORIGINS", "*").split(","),
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Added last runs first: correlation ID is set before anything logs
app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(PerformanceMiddleware)
app.add_middleware(CorrelationMiddleware)

app.include_router(health_router)
app.include_router(monitoring_router)
app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("ENVIRONMENT", "development") == "development",
        log_level="info",
    )
