"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from yeirin.api.exception_handlers import register_exception_handlers
from yeirin.api.middleware import RequestIdMiddleware
from yeirin.api.routes import counsel_requests, health, matching
from yeirin.core.config.settings import settings
from yeirin.core.logging import configure_logging
from yeirin.infrastructure.audit.audit_service import AuditService
from yeirin.infrastructure.database.connection import engine

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Args:
        app: FastAPI application
    """
    # Startup: test database connection, start audit queue worker
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("✅ Database connection established")

    await app.state.audit_service.start()

    yield

    # Shutdown: flush audit queue, cleanup
    await app.state.audit_service.stop()
    await engine.dispose()
    logger.info("👋 Database connection closed")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Yeirin Backend - 아동 상담의뢰 AI 매칭 API",
    lifespan=lifespan,
)
app.state.audit_service = AuditService()

# Middleware
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(health.router, prefix=settings.api_v1_prefix)
app.include_router(matching.router, prefix=settings.api_v1_prefix)
app.include_router(counsel_requests.router, prefix=settings.api_v1_prefix)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }
