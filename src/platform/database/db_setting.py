"""
Database configuration entry point

Re-exports the SQLAlchemy pieces from orm_db_setting so models and adapters
import from one place.
"""

from src.platform.database.orm_db_setting import Base, Database, create_db_and_tables


__all__ = [
    'Base',
    'Database',
    'create_db_and_tables',
]
