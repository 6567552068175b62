"""
Test Configuration and Fixtures

- Environment is set before any application module reads settings
- Integration tests get a fresh SQLite file database per test (aiosqlite)
- HTTP tests go through httpx.AsyncClient + ASGITransport against src.main.app

Unit tests (marked `unit`) use AsyncMock collaborators and need none of this.
"""

# =============================================================================
# Environment setup MUST happen before any application import
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Fallback database for anything that reaches the global settings
    default_db = Path(tempfile.gettempdir()) / f'booking_test_{os.getpid()}.db'
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{default_db}'
    os.environ['SEED_ON_STARTUP'] = 'false'
    os.environ['MAX_BOOKINGS_PER_MEMBER'] = '2'


_early_setup_test_environment()

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from datetime import datetime, timezone  # noqa: E402

from dependency_injector import providers  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from src.platform.config.di import container  # noqa: E402
from src.platform.config.wire_modules import WIRE_MODULES  # noqa: E402
from src.platform.database.db_setting import Database, create_db_and_tables  # noqa: E402
from src.platform.database.unit_of_work import (  # noqa: E402
    AbstractUnitOfWork,
    SqlAlchemyUnitOfWork,
)
from src.platform.state.entity_lock import EntityLockRegistry  # noqa: E402
from src.service.booking.domain.booking_engine import BookingEngine  # noqa: E402
from src.service.booking.domain.entity.inventory_item_entity import InventoryItem  # noqa: E402
from src.service.booking.domain.entity.member_entity import Member  # noqa: E402


FIXED_NOW = datetime(2025, 1, 10, 10, 30, tzinfo=timezone.utc)


# =============================================================================
# Database
# =============================================================================
@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    db = Database(url=f'sqlite+aiosqlite:///{tmp_path / "booking.db"}')
    await create_db_and_tables(db)
    yield db
    await db.dispose()


@pytest.fixture
def uow_factory(database: Database) -> Callable[[], AbstractUnitOfWork]:
    return lambda: SqlAlchemyUnitOfWork(database.session)


@pytest.fixture
def booking_engine() -> BookingEngine:
    return BookingEngine(max_bookings=2, clock=lambda: FIXED_NOW)


@pytest.fixture
def lock_registry() -> EntityLockRegistry:
    return EntityLockRegistry()


@pytest.fixture
def create_member(
    uow_factory: Callable[[], AbstractUnitOfWork],
) -> Callable[..., Awaitable[Member]]:
    async def _create(*, booking_count: int = 0, name: str = 'Test', surname: str = 'Member') -> Member:
        async with uow_factory() as uow:
            member = await uow.member_repo.create(
                Member(
                    name=name,
                    surname=surname,
                    booking_count=booking_count,
                    date_joined=FIXED_NOW,
                )
            )
            await uow.commit()
        return member

    return _create


@pytest.fixture
def create_item(
    uow_factory: Callable[[], AbstractUnitOfWork],
) -> Callable[..., Awaitable[InventoryItem]]:
    async def _create(*, remaining_count: int = 5, title: str = 'Test Item') -> InventoryItem:
        async with uow_factory() as uow:
            item = await uow.inventory_item_repo.create(
                InventoryItem(
                    title=title,
                    description='Desc',
                    remaining_count=remaining_count,
                    expiration_date=FIXED_NOW.replace(year=2026),
                )
            )
            await uow.commit()
        return item

    return _create


@pytest.fixture
def load_state(
    uow_factory: Callable[[], AbstractUnitOfWork],
) -> Callable[..., Awaitable[tuple[Member | None, InventoryItem | None]]]:
    """Read a member and an item back from the store."""

    async def _load(member_id: int, item_id: int) -> tuple[Member | None, InventoryItem | None]:
        async with uow_factory() as uow:
            member = await uow.member_repo.get_by_id(member_id)
            item = await uow.inventory_item_repo.get_by_id(item_id)
        return member, item

    return _load


# =============================================================================
# HTTP
# =============================================================================
@pytest_asyncio.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    from src.main import app

    container.database.override(providers.Object(database))
    container.entity_lock_registry.reset()
    container.wire(modules=WIRE_MODULES)
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url='http://test') as ac:
            yield ac
    finally:
        container.unwire()
        container.database.reset_override()
