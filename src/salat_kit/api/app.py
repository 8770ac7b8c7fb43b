"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from salat_kit import __version__
from salat_kit.api.dependencies import initialize_app_state, shutdown_app_state
from salat_kit.api.routes import router as api_router
from salat_kit.config import AppConfig
from salat_kit.domain.errors import EmptyInputError, LocationUnavailableError, NotFoundError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    logger.info("Salat-Kit başlatılıyor...")

    state = await initialize_app_state(getattr(app.state, "config", None))

    # Scheduler'ı ve periyodik yenilemeyi başlat
    state.scheduler_adapter.start()
    if state.refresh_service is not None:
        state.refresh_service.start()

    logger.info("Salat-Kit hazır!")

    yield

    # Shutdown
    logger.info("Salat-Kit kapatılıyor...")
    await shutdown_app_state()
    logger.info("Salat-Kit kapatıldı.")


def create_app(config: AppConfig | None = None) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        config: Uygulama yapılandırması (varsayılan: ortam değişkenleri)

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Salat-Kit",
        description="Kıble yönü ve namaz vakti servisi",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config in app state
    app.state.config = config

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Production'da kısıtlanmalı
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LocationUnavailableError)
    async def location_unavailable_handler(
        request: Request, exc: LocationUnavailableError
    ) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @app.exception_handler(EmptyInputError)
    async def empty_input_handler(request: Request, exc: EmptyInputError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)}
        )

    # API routes
    app.include_router(api_router, prefix="/api")

    # Health check
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
