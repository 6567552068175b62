from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_repo import IBookingRepo
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.repo.time_util import as_utc


class BookingRepoImpl(IBookingRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _model_to_entity(model: BookingModel) -> Booking:
        return Booking(
            id=model.id,
            member_id=model.member_id,
            inventory_item_id=model.inventory_item_id,
            booking_datetime=as_utc(model.booking_datetime),  # type: ignore[arg-type]
            is_cancelled=model.is_cancelled,
        )

    @Logger.io
    async def get_by_id(self, booking_id: int, *, for_update: bool = False) -> Optional[Booking]:
        stmt = select(BookingModel).where(BookingModel.id == booking_id)
        if for_update:
            stmt = stmt.with_for_update()
        model = (await self.session.execute(stmt)).scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    @Logger.io
    async def create(self, booking: Booking) -> Booking:
        model = BookingModel(
            member_id=booking.member_id,
            inventory_item_id=booking.inventory_item_id,
            booking_datetime=booking.booking_datetime,
            is_cancelled=booking.is_cancelled,
        )
        self.session.add(model)
        # Flush so the database assigns the id inside the open transaction
        await self.session.flush()
        return self._model_to_entity(model)

    @Logger.io
    async def update(self, booking: Booking) -> Booking:
        model = await self.session.get(BookingModel, booking.id)
        if model is None:
            raise NotFoundError(f'Booking with ID {booking.id} not found')
        model.is_cancelled = booking.is_cancelled
        await self.session.flush()
        return self._model_to_entity(model)

    async def count_active_by_member(self, member_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(BookingModel)
            .where(BookingModel.member_id == member_id, BookingModel.is_cancelled.is_(False))
        )
        return int(await self.session.scalar(stmt) or 0)
