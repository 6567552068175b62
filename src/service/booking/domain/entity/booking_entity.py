from datetime import datetime
from enum import StrEnum
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError


class BookingStatus(StrEnum):
    ACTIVE = 'active'
    CANCELLED = 'cancelled'


@attrs.define
class Booking:
    member_id: int
    inventory_item_id: int
    booking_datetime: datetime
    is_cancelled: bool = False
    id: Optional[int] = None  # Assigned by the store on creation

    @classmethod
    def create(cls, *, member_id: int, inventory_item_id: int, now: datetime) -> 'Booking':
        return cls(
            member_id=member_id,
            inventory_item_id=inventory_item_id,
            booking_datetime=now,
            is_cancelled=False,
        )

    @property
    def status(self) -> BookingStatus:
        return BookingStatus.CANCELLED if self.is_cancelled else BookingStatus.ACTIVE

    def cancel(self) -> 'Booking':
        # CANCELLED is terminal
        if self.is_cancelled:
            raise DomainError(f'Booking with ID {self.id} is already cancelled')
        return attrs.evolve(self, is_cancelled=True)
