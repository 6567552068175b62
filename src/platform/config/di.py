"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.state.entity_lock import EntityLockRegistry
from src.service.booking.domain.booking_engine import BookingEngine
from src.service.booking.driven_adapter.seed.csv_data_seeder import CsvDataSeeder


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (engine is created lazily on first use)
    database = providers.Singleton(Database)

    # One unit of work per request, repositories share its session
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # In-process record locks, shared by every request in this worker
    entity_lock_registry = providers.Singleton(EntityLockRegistry)

    # Booking rules
    booking_engine = providers.Singleton(
        BookingEngine, max_bookings=config_service.provided.MAX_BOOKINGS_PER_MEMBER
    )

    # Startup CSV import
    csv_data_seeder = providers.Factory(
        CsvDataSeeder,
        uow_factory=unit_of_work.provider,
        data_dir=config_service.provided.SEED_DATA_DIR,
    )


container = Container()


def cleanup() -> None:
    container.reset_singletons()
