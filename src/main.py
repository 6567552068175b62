"""
Production FastAPI Application

Run with: granian --interface asgi src.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import create_db_and_tables
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger


async def seed_initial_data() -> None:
    """Seeding problems are logged; the service still starts."""
    try:
        await container.csv_data_seeder().seed()
    except CustomBaseError as e:
        Logger.base.error(f'❌ [Booking Service] Seeding failed: {e.message}')
    except Exception as e:
        Logger.base.exception(f'❌ [Booking Service] Seeding failed: {e}')


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Booking Service] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Booking Service] Dependency injection wired')

    database = container.database()
    await create_db_and_tables(database)

    if settings.SEED_ON_STARTUP:
        await seed_initial_data()

    Logger.base.info('✅ [Booking Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Booking Service] Shutting down...')
    await database.dispose()
    container.unwire()
    cleanup()
    Logger.base.info('👋 [Booking Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
