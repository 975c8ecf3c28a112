"""Ledger Portal API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PortalError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database pool and chain client initialized on startup via lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal.api.error_handlers import register_error_handlers
from portal.api.routes import (
    amenities, catalog, certificates, enrollment, faculty, fees, health,
    metadata, users,
)
from portal.config import get_settings
from portal.infrastructure.chain_client import init_chain
from portal.infrastructure.database import init_db
from portal.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_chain(
        settings.chain_rpc_url,
        settings.contracts_dir,
        network_id=settings.chain_network_id,
        tx_timeout_seconds=settings.chain_tx_timeout_seconds,
    )
    logger.info("Ledger Portal API started")
    yield
    await db.dispose()
    logger.info("Ledger Portal API shutting down")


app = FastAPI(
    title="Ledger Portal API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(faculty.router)
app.include_router(catalog.router)
app.include_router(enrollment.router)
app.include_router(certificates.router)
app.include_router(fees.router)
app.include_router(amenities.router)
app.include_router(metadata.router)

register_error_handlers(app)
