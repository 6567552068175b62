from abc import ABC, abstractmethod
from typing import Optional

from src.service.booking.domain.entity.member_entity import Member


class IMemberRepo(ABC):
    """Member Repository Abstract Interface"""

    @abstractmethod
    async def get_by_id(self, member_id: int, *, for_update: bool = False) -> Optional[Member]:
        pass

    @abstractmethod
    async def update(self, member: Member) -> Member:
        pass

    @abstractmethod
    async def create(self, member: Member) -> Member:
        pass

    @abstractmethod
    async def exists_any(self) -> bool:
        pass
