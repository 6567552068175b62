from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_member_repo import IMemberRepo
from src.service.booking.domain.entity.member_entity import Member
from src.service.booking.driven_adapter.model.member_model import MemberModel
from src.service.booking.driven_adapter.repo.time_util import as_utc


class MemberRepoImpl(IMemberRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _model_to_entity(model: MemberModel) -> Member:
        return Member(
            id=model.id,
            name=model.name,
            surname=model.surname,
            booking_count=model.booking_count,
            date_joined=as_utc(model.date_joined),
        )

    @Logger.io
    async def get_by_id(self, member_id: int, *, for_update: bool = False) -> Optional[Member]:
        stmt = select(MemberModel).where(MemberModel.id == member_id)
        if for_update:
            stmt = stmt.with_for_update()
        model = (await self.session.execute(stmt)).scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    @Logger.io
    async def update(self, member: Member) -> Member:
        model = await self.session.get(MemberModel, member.id)
        if model is None:
            raise NotFoundError(f'Member with ID {member.id} not found')
        model.booking_count = member.booking_count
        await self.session.flush()
        return self._model_to_entity(model)

    @Logger.io
    async def create(self, member: Member) -> Member:
        model = MemberModel(
            name=member.name,
            surname=member.surname,
            booking_count=member.booking_count,
            date_joined=member.date_joined,
        )
        self.session.add(model)
        await self.session.flush()
        return self._model_to_entity(model)

    async def exists_any(self) -> bool:
        return bool(await self.session.scalar(select(exists().select_from(MemberModel))))
