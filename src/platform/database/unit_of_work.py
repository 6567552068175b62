"""
Unit of Work - one database session and transaction shared by the repositories

- UoW owns the session lifecycle
- UoW owns commit/rollback
- Repositories get the shared session from the UoW
- Use cases coordinate several repositories through the UoW
"""

from __future__ import annotations

import abc
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import InfrastructureError
from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.booking.app.interface.i_booking_repo import IBookingRepo
    from src.service.booking.app.interface.i_inventory_item_repo import IInventoryItemRepo
    from src.service.booking.app.interface.i_member_repo import IMemberRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            member = await uow.member_repo.get_by_id(member_id, for_update=True)
            ...
            await uow.commit()

    Leaving the block without commit() rolls everything back.
    """

    member_repo: IMemberRepo
    inventory_item_repo: IInventoryItemRepo
    booking_repo: IBookingRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(
        self, session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]]
    ) -> None:
        self.session_factory = session_factory
        self._session_cm: Optional[AbstractAsyncContextManager[AsyncSession]] = None
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.booking.driven_adapter.repo.booking_repo_impl import BookingRepoImpl
        from src.service.booking.driven_adapter.repo.inventory_item_repo_impl import (
            InventoryItemRepoImpl,
        )
        from src.service.booking.driven_adapter.repo.member_repo_impl import MemberRepoImpl

        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()

        # Repositories share the unit's session
        self.member_repo = MemberRepoImpl(self.session)
        self.inventory_item_repo = InventoryItemRepoImpl(self.session)
        self.booking_repo = BookingRepoImpl(self.session)

        return await super().__aenter__()

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        assert self._session_cm is not None
        session_cm = self._session_cm
        try:
            try:
                await super().__aexit__(exc_type, exc, tb)
            finally:
                self._session_cm = None
                self.session = None
                await session_cm.__aexit__(exc_type, exc, tb)
        except SQLAlchemyError as cleanup_error:
            Logger.base.error(f'💥 [UOW] Rollback or close failed: {cleanup_error}')
            raise InfrastructureError(
                'Storage is temporarily unavailable, retry the request'
            ) from cleanup_error

        if isinstance(exc, SQLAlchemyError):
            Logger.base.error(f'💥 [UOW] Rolled back after database error: {exc}')
            raise InfrastructureError('Storage is temporarily unavailable, retry the request') from exc

    async def _commit(self) -> None:
        assert self.session is not None
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
