"""FastAPI application for the TruthGuard claim engine."""

import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..infrastructure.dependencies import get_service_container
from .endpoints import claims, health, notifications, users

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application.

    Pending analyses are cancelled on shutdown.
    """
    container = get_service_container()
    logger.info("🚀 TruthGuard engine starting")

    yield  # Application runs here

    await container.get_analysis_scheduler().shutdown()
    logger.info("👋 TruthGuard engine stopped")


# Create FastAPI application
app = FastAPI(
    title="TruthGuard API",
    description="Claim deduplication, review lifecycle and notification engine",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_service_container().config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(claims.router)
app.include_router(notifications.router)
app.include_router(users.router)
