from abc import ABC, abstractmethod
from typing import Optional

from src.service.booking.domain.entity.booking_entity import Booking


class IBookingRepo(ABC):
    """Booking Repository Abstract Interface"""

    @abstractmethod
    async def get_by_id(self, booking_id: int, *, for_update: bool = False) -> Optional[Booking]:
        pass

    @abstractmethod
    async def create(self, booking: Booking) -> Booking:
        """Persist a new booking and return it with the store-assigned id."""
        pass

    @abstractmethod
    async def update(self, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def count_active_by_member(self, member_id: int) -> int:
        pass
