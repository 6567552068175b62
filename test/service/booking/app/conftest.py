from typing import Callable, Optional
from unittest.mock import AsyncMock

import attrs
import pytest

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.inventory_item_entity import InventoryItem
from src.service.booking.domain.entity.member_entity import Member


class FakeUnitOfWork(AbstractUnitOfWork):
    """AsyncMock repositories returning fixed snapshots; updates echo their input."""

    def __init__(
        self,
        *,
        member: Optional[Member] = None,
        item: Optional[InventoryItem] = None,
        booking: Optional[Booking] = None,
        new_booking_id: int = 101,
    ) -> None:
        self.member_repo = AsyncMock()
        self.member_repo.get_by_id = AsyncMock(return_value=member)
        self.member_repo.update = AsyncMock(side_effect=lambda m: m)

        self.inventory_item_repo = AsyncMock()
        self.inventory_item_repo.get_by_id = AsyncMock(return_value=item)
        self.inventory_item_repo.update = AsyncMock(side_effect=lambda i: i)

        self.booking_repo = AsyncMock()
        self.booking_repo.get_by_id = AsyncMock(return_value=booking)
        self.booking_repo.update = AsyncMock(side_effect=lambda b: b)
        self.booking_repo.create = AsyncMock(
            side_effect=lambda b: attrs.evolve(b, id=new_booking_id)
        )

        self.commit_count = 0
        self.rollback_count = 0

    async def _commit(self) -> None:
        self.commit_count += 1

    async def rollback(self) -> None:
        self.rollback_count += 1


@pytest.fixture
def make_uow() -> Callable[..., FakeUnitOfWork]:
    return FakeUnitOfWork
