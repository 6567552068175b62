from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_inventory_item_repo import IInventoryItemRepo
from src.service.booking.domain.entity.inventory_item_entity import InventoryItem
from src.service.booking.driven_adapter.model.inventory_item_model import InventoryItemModel
from src.service.booking.driven_adapter.repo.time_util import as_utc


class InventoryItemRepoImpl(IInventoryItemRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _model_to_entity(model: InventoryItemModel) -> InventoryItem:
        return InventoryItem(
            id=model.id,
            title=model.title,
            description=model.description,
            remaining_count=model.remaining_count,
            expiration_date=as_utc(model.expiration_date),
        )

    @Logger.io
    async def get_by_id(self, item_id: int, *, for_update: bool = False) -> Optional[InventoryItem]:
        stmt = select(InventoryItemModel).where(InventoryItemModel.id == item_id)
        if for_update:
            stmt = stmt.with_for_update()
        model = (await self.session.execute(stmt)).scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    @Logger.io
    async def update(self, item: InventoryItem) -> InventoryItem:
        model = await self.session.get(InventoryItemModel, item.id)
        if model is None:
            raise NotFoundError(f'Inventory item with ID {item.id} not found')
        model.remaining_count = item.remaining_count
        await self.session.flush()
        return self._model_to_entity(model)

    @Logger.io
    async def create(self, item: InventoryItem) -> InventoryItem:
        model = InventoryItemModel(
            title=item.title,
            description=item.description,
            remaining_count=item.remaining_count,
            expiration_date=item.expiration_date,
        )
        self.session.add(model)
        await self.session.flush()
        return self._model_to_entity(model)

    async def exists_any(self) -> bool:
        return bool(await self.session.scalar(select(exists().select_from(InventoryItemModel))))
