"""
Initial data import from CSV

members.csv:   name,surname,booking_count,date_joined
inventory.csv: title,description,remaining_count,expiration_date

Runs only against an empty store. Each file is imported in its own unit of
work, so a bad row rolls back that file only.
"""

import csv
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterator, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import SeedDataError
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.entity.inventory_item_entity import InventoryItem
from src.service.booking.domain.entity.member_entity import Member


MEMBERS_FILE = 'members.csv'
INVENTORY_FILE = 'inventory.csv'

_DAY_FIRST_FORMATS = ('%d/%m/%Y %H:%M:%S', '%d/%m/%Y %H:%M', '%d/%m/%Y')


def _parse_instant(value: object) -> Optional[object]:
    """Accept ISO 8601 or dd/mm/YYYY; naive values are taken as UTC."""
    if not isinstance(value, str):
        return value
    value = value.strip()
    if not value:
        return None

    parsed: Optional[datetime] = None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        for fmt in _DAY_FIRST_FORMATS:
            try:
                parsed = datetime.strptime(value, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        raise ValueError(f'unrecognised date {value!r}')
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


class _CsvRow(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra='ignore')


class MemberRow(_CsvRow):
    name: str = Field(min_length=1)
    surname: str = ''
    booking_count: int = Field(default=0, ge=0)
    date_joined: Optional[datetime] = None

    @field_validator('date_joined', mode='before')
    @classmethod
    def parse_date_joined(cls, value: object) -> Optional[object]:
        return _parse_instant(value)

    def to_entity(self) -> Member:
        return Member(
            name=self.name,
            surname=self.surname,
            booking_count=self.booking_count,
            date_joined=self.date_joined,
        )


class InventoryRow(_CsvRow):
    title: str = Field(min_length=1)
    description: str = ''
    remaining_count: int = Field(default=0, ge=0)
    expiration_date: Optional[datetime] = None

    @field_validator('expiration_date', mode='before')
    @classmethod
    def parse_expiration_date(cls, value: object) -> Optional[object]:
        return _parse_instant(value)

    def to_entity(self) -> InventoryItem:
        return InventoryItem(
            title=self.title,
            description=self.description,
            remaining_count=self.remaining_count,
            expiration_date=self.expiration_date,
        )


_Row = TypeVar('_Row', bound=_CsvRow)


def read_rows(path: Path, row_model: type[_Row]) -> Iterator[_Row]:
    with path.open(newline='', encoding='utf-8-sig') as fh:
        reader = csv.DictReader(fh)
        for raw in reader:
            # Header keys are matched case-insensitively, blank cells fall back to defaults
            normalized = {
                (k or '').strip().lower(): v for k, v in raw.items() if v not in (None, '')
            }
            try:
                yield row_model.model_validate(normalized)
            except ValidationError as e:
                raise SeedDataError(
                    f'{path.name} line {reader.line_num}: {e.errors()[0]["msg"]}'
                ) from e


class CsvDataSeeder:
    def __init__(
        self, *, uow_factory: Callable[[], AbstractUnitOfWork], data_dir: Path | str
    ) -> None:
        self.uow_factory = uow_factory
        self.data_dir = Path(data_dir)

    async def _store_is_empty(self) -> bool:
        async with self.uow_factory() as uow:
            return not (
                await uow.member_repo.exists_any() or await uow.inventory_item_repo.exists_any()
            )

    @Logger.io
    async def seed(self) -> dict[str, int]:
        """Import both files; returns how many rows each one added."""
        if not await self._store_is_empty():
            Logger.base.info('🌱 [SEED] Database already contains data, skipping CSV import')
            return {MEMBERS_FILE: 0, INVENTORY_FILE: 0}

        Logger.base.info(f'🌱 [SEED] Starting CSV import from {self.data_dir}')
        imported = {
            MEMBERS_FILE: await self.import_members(),
            INVENTORY_FILE: await self.import_inventory_items(),
        }
        Logger.base.info(f'🌱 [SEED] CSV import complete: {imported}')
        return imported

    async def import_members(self) -> int:
        path = self.data_dir / MEMBERS_FILE
        if not path.exists():
            Logger.base.error(f'❌ [SEED] Members CSV file not found at: {path}')
            return 0

        rows = list(read_rows(path, MemberRow))
        async with self.uow_factory() as uow:
            for row in rows:
                await uow.member_repo.create(row.to_entity())
            await uow.commit()
        Logger.base.info(f'🌱 [SEED] Imported {len(rows)} members')
        return len(rows)

    async def import_inventory_items(self) -> int:
        path = self.data_dir / INVENTORY_FILE
        if not path.exists():
            Logger.base.error(f'❌ [SEED] Inventory CSV file not found at: {path}')
            return 0

        rows = list(read_rows(path, InventoryRow))
        async with self.uow_factory() as uow:
            for row in rows:
                await uow.inventory_item_repo.create(row.to_entity())
            await uow.commit()
        Logger.base.info(f'🌱 [SEED] Imported {len(rows)} inventory items')
        return len(rows)
