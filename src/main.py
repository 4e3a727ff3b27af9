"""
Production FastAPI Application

Segment booking API backed by PostgreSQL (or the in-memory store when
SEAT_STORE_BACKEND=memory).
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    get_engine,
)
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Segment Booking] Starting up...')

    tracing = TracingConfig(service_name='segment-booking-service')
    tracing.setup()
    Logger.base.info('📊 [Segment Booking] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Segment Booking] Dependency injection wired')

    if settings.SEAT_STORE_BACKEND == 'postgres':
        tracing.instrument_sqlalchemy(engine=get_engine())
        await create_db_and_tables()
        Logger.base.info('🗄️  [Segment Booking] Database engine ready + instrumented')
    else:
        Logger.base.warning('🧪 [Segment Booking] Using in-memory seat store (not persistent)')

    Logger.base.info('✅ [Segment Booking] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Segment Booking] Shutting down...')

    if settings.SEAT_STORE_BACKEND == 'postgres':
        await dispose_engine()
        Logger.base.info('🗄️  [Segment Booking] Database engine disposed')

    # Flush remaining spans
    tracing.shutdown()

    container.unwire()

    Logger.base.info('👋 [Segment Booking] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
