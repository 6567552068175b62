from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.platform.state.entity_lock import (
    EntityLockRegistry,
    booking_lock_key,
    inventory_item_lock_key,
    member_lock_key,
)
from src.service.booking.domain.booking_engine import BookingEngine
from src.service.booking.domain.enum.consistency_warning import ConsistencyWarning
from src.service.booking.domain.value_object.outcome import CancellationMutation, Outcome


class CancelBookingUseCase:
    """
    Cancel a booking and give its slot and stock back.

    Flow:
    1. Reject a non-positive id before touching locks or the store
    2. Look up the booking's member/item ids (they never change once written)
    3. Lock booking + item + member, open one unit of work
    4. Read booking, member, item FOR UPDATE, let the engine decide
    5. On success write whatever the engine changed, then commit

    Missing linked records do not block the cancellation; each one is logged
    and counted as a consistency warning.
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

    async def _lock_keys(self, booking_id: int) -> list[str]:
        keys = [booking_lock_key(booking_id)]
        async with self.uow_factory() as uow:
            booking = await uow.booking_repo.get_by_id(booking_id)
        if booking is not None:
            keys += [
                inventory_item_lock_key(booking.inventory_item_id),
                member_lock_key(booking.member_id),
            ]
        return keys

    @Logger.io
    async def execute(self, *, booking_id: int) -> Outcome:
        if not self.booking_engine.is_valid_id(booking_id):
            outcome = self.booking_engine.evaluate_cancellation(
                booking=None, member=None, item=None, booking_id=booking_id
            )
            return self._report(outcome, booking_id=booking_id)

        # Locks are taken before the unit opens so no transaction waits on a lock
        async with self.lock_registry.hold(*await self._lock_keys(booking_id)):
            async with self.uow_factory() as uow:
                booking = await uow.booking_repo.get_by_id(booking_id, for_update=True)
                member = item = None
                if booking is not None:
                    member = await uow.member_repo.get_by_id(booking.member_id, for_update=True)
                    item = await uow.inventory_item_repo.get_by_id(
                        booking.inventory_item_id, for_update=True
                    )

                outcome = self.booking_engine.evaluate_cancellation(
                    booking=booking, member=member, item=item, booking_id=booking_id
                )
                if outcome.succeeded:
                    assert isinstance(outcome.mutation, CancellationMutation)
                    mutation = outcome.mutation
                    await uow.booking_repo.update(mutation.booking)
                    if mutation.item is not None:
                        await uow.inventory_item_repo.update(mutation.item)
                    if mutation.member is not None:
                        await uow.member_repo.update(mutation.member)
                    await uow.commit()

        return self._report(outcome, booking_id=booking_id)

    @staticmethod
    def _report(outcome: Outcome, *, booking_id: int) -> Outcome:
        metrics.record_request(operation='cancel', outcome=outcome.kind)
        if not outcome.succeeded:
            Logger.base.warning(
                f'⚠️ [CANCEL] Rejected booking {booking_id}: {outcome.kind} ({outcome.message})'
            )
            return outcome

        assert isinstance(outcome.mutation, CancellationMutation)
        booking = outcome.mutation.booking
        for warning in outcome.mutation.warnings:
            metrics.record_consistency_warning(warning=warning)
            if warning == ConsistencyWarning.MEMBER_COUNT_AT_ZERO:
                Logger.base.warning(
                    f'⚠️ [CANCEL] Member {booking.member_id} booking_count was already 0 '
                    f'while cancelling booking {booking_id}'
                )
            else:
                Logger.base.error(
                    f'❌ [CANCEL] {warning} for booking {booking_id} '
                    f'(member {booking.member_id}, item {booking.inventory_item_id}), '
                    'data inconsistency suspected'
                )

        Logger.base.info(
            f'✅ [CANCEL] Booking {booking_id} cancelled, '
            f'member {booking.member_id}, item {booking.inventory_item_id}'
        )
        return outcome
