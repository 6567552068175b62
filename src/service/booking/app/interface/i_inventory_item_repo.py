from abc import ABC, abstractmethod
from typing import Optional

from src.service.booking.domain.entity.inventory_item_entity import InventoryItem


class IInventoryItemRepo(ABC):
    """Inventory Item Repository Abstract Interface"""

    @abstractmethod
    async def get_by_id(self, item_id: int, *, for_update: bool = False) -> Optional[InventoryItem]:
        pass

    @abstractmethod
    async def update(self, item: InventoryItem) -> InventoryItem:
        pass

    @abstractmethod
    async def create(self, item: InventoryItem) -> InventoryItem:
        pass

    @abstractmethod
    async def exists_any(self) -> bool:
        pass
