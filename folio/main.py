"""Main FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from folio.api.v1.router import api_router
from folio.config import settings
from folio.core.metrics import MetricsMiddleware, read_metrics
from folio.core.rate_limiter import RateLimitMiddleware
from folio.db.mongodb import close_mongodb, init_mongodb
from folio.db.postgres import close_postgres, init_postgres
from folio.db.redis import close_redis, init_redis
from folio.fonts.loader import FontLoader, HttpxStylesheetFetcher

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open storage connections and the font loader for the app's lifetime."""
    logger.info("Starting up Folio API...")
    await init_postgres()
    await init_mongodb()
    await init_redis()

    async with httpx.AsyncClient(timeout=settings.FONT_FETCH_TIMEOUT) as http_client:
        app.state.font_loader = FontLoader(
            HttpxStylesheetFetcher(http_client),
            base_url=settings.GOOGLE_FONTS_CSS_URL,
        )
        logger.info("All connections established")

        yield

    logger.info("Shutting down Folio API...")
    await close_postgres()
    await close_mongodb()
    await close_redis()
    logger.info("All connections closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Folio API",
        description="Portfolio builder backend: accounts, portfolios, themes and fonts",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(MetricsMiddleware)

    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy", "version": VERSION}

    @app.get("/metrics", tags=["Observability"])
    async def get_metrics() -> dict:
        """Request counts and latencies collected by the metrics middleware."""
        return await read_metrics()

    return app


app = create_app()
