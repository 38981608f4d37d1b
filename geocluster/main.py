"""GeoCluster — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geocluster.config import settings
from geocluster.infrastructure.api.dependencies import get_distance_cache
from geocluster.infrastructure.api.routes_clusters import router as clusters_router
from geocluster.infrastructure.api.routes_health import router as health_router

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s | %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    cache = get_distance_cache()
    logger.info("Distance cache ready (capacity=%d)", cache.capacity)
    yield
    logger.info("Shutting down, dropping %d cached distances", cache.clear())


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="GeoCluster — map marker clustering",
        description="Zoom-aware marker clustering with a bounded distance cache",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS for the map frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(clusters_router, prefix="/api")

    return app


app = create_app()
