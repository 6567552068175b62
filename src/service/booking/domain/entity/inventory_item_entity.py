from datetime import datetime
from typing import Optional

import attrs


@attrs.define
class InventoryItem:
    title: str
    description: str = ''
    remaining_count: int = 0
    expiration_date: Optional[datetime] = None  # Informational, bookings ignore it
    id: Optional[int] = None

    @property
    def in_stock(self) -> bool:
        return self.remaining_count > 0

    def take_one(self) -> 'InventoryItem':
        return attrs.evolve(self, remaining_count=self.remaining_count - 1)

    def return_one(self) -> 'InventoryItem':
        return attrs.evolve(self, remaining_count=self.remaining_count + 1)
