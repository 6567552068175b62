from typing import Callable, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.platform.state.entity_lock import (
    EntityLockRegistry,
    inventory_item_lock_key,
    member_lock_key,
)
from src.service.booking.domain.booking_engine import BookingEngine
from src.service.booking.domain.value_object.outcome import BookingMutation, Outcome


class BookItemUseCase:
    """
    Book one unit of an inventory item for a member.

    Flow:
    1. Reject non-positive ids before touching locks or the store
    2. Lock member + item (in-process), open one unit of work
    3. Read member then item FOR UPDATE, let the engine decide
    4. On success write member, item and the new booking, then commit
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        booking_engine: BookingEngine,
        lock_registry: EntityLockRegistry,
    ) -> None:
        self.uow_factory = uow_factory
        self.booking_engine = booking_engine
        self.lock_registry = lock_registry

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        booking_engine: BookingEngine = Depends(Provide[Container.booking_engine]),
        lock_registry: EntityLockRegistry = Depends(Provide[Container.entity_lock_registry]),
    ) -> Self:
        return cls(
            uow_factory=uow_factory, booking_engine=booking_engine, lock_registry=lock_registry
        )

    @Logger.io
    async def execute(self, *, member_id: int, inventory_item_id: int) -> Outcome:
        if not (
            self.booking_engine.is_valid_id(member_id)
            and self.booking_engine.is_valid_id(inventory_item_id)
        ):
            outcome = self.booking_engine.evaluate_booking(
                member=None, item=None, member_id=member_id, item_id=inventory_item_id
            )
            return self._report(outcome, member_id=member_id, inventory_item_id=inventory_item_id)

        async with self.lock_registry.hold(
            member_lock_key(member_id), inventory_item_lock_key(inventory_item_id)
        ):
            async with self.uow_factory() as uow:
                member = await uow.member_repo.get_by_id(member_id, for_update=True)
                item = await uow.inventory_item_repo.get_by_id(inventory_item_id, for_update=True)

                outcome = self.booking_engine.evaluate_booking(
                    member=member, item=item, member_id=member_id, item_id=inventory_item_id
                )
                if outcome.succeeded:
                    assert isinstance(outcome.mutation, BookingMutation)
                    mutation = outcome.mutation
                    await uow.member_repo.update(mutation.member)
                    await uow.inventory_item_repo.update(mutation.item)
                    booking = await uow.booking_repo.create(mutation.booking)
                    await uow.commit()
                    outcome = attrs.evolve(outcome, mutation=attrs.evolve(mutation, booking=booking))

        return self._report(outcome, member_id=member_id, inventory_item_id=inventory_item_id)

    @staticmethod
    def _report(outcome: Outcome, *, member_id: int, inventory_item_id: int) -> Outcome:
        metrics.record_request(operation='book', outcome=outcome.kind)
        if outcome.succeeded:
            booking = outcome.booking
            Logger.base.info(
                f'✅ [BOOK] Member {member_id} booked item {inventory_item_id}, '
                f'booking {booking.id if booking else None}'
            )
        else:
            Logger.base.warning(
                f'⚠️ [BOOK] Rejected member {member_id} / item {inventory_item_id}: '
                f'{outcome.kind} ({outcome.message})'
            )
        return outcome
