"""FastAPI application factory for the hedgecalc API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hedgecalc import __version__
from hedgecalc.config import Settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting hedgecalc API...")
    yield
    logger.info("hedgecalc API shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Hedgecalc API",
        description="Option hedging calculator - monthly hedge projection, payoff diagram, stress tests",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Accept"],
    )

    _register_routers(app)

    return app


def _register_routers(app: FastAPI):
    """Register all API routers."""
    from hedgecalc.web.routers.projection import router as projection_router
    from hedgecalc.web.routers.scenarios import router as scenarios_router
    from hedgecalc.web.routers.system import router as system_router

    app.include_router(projection_router, prefix="/api/v1")
    app.include_router(scenarios_router, prefix="/api/v1")
    app.include_router(system_router, prefix="/api/v1")
