"""
Unit tests for CancelBookingUseCase

Test Focus:
1. Success flips the booking and reverses both counters in one commit
2. Fail fast: invalid id, booking not found, already cancelled (nothing written)
3. Lenient branch: missing item / member or zero count still cancels, skipped side untouched
"""

from datetime import datetime, timezone
from typing import Any, Callable
from unittest.mock import Mock, call, patch

import pytest

from src.platform.state.entity_lock import EntityLockRegistry
from src.service.booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.booking.domain.booking_engine import BookingEngine
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.inventory_item_entity import InventoryItem
from src.service.booking.domain.entity.member_entity import Member
from src.service.booking.domain.enum.consistency_warning import ConsistencyWarning
from src.service.booking.domain.enum.outcome_kind import OutcomeKind


NOW = datetime(2025, 1, 10, 10, 30, tzinfo=timezone.utc)


@pytest.mark.unit
class TestCancelBookingUseCase:
    @pytest.fixture
    def engine(self) -> BookingEngine:
        return BookingEngine(max_bookings=2, clock=lambda: NOW)

    @pytest.fixture
    def active_booking(self) -> Booking:
        return Booking(id=1, member_id=1, inventory_item_id=101, booking_datetime=NOW)

    @pytest.fixture
    def member(self) -> Member:
        return Member(id=1, name='Test', surname='Member', booking_count=1)

    @pytest.fixture
    def item(self) -> InventoryItem:
        return InventoryItem(id=101, title='Cancelable Item', description='Desc', remaining_count=4)

    def _use_case(self, uow: Any, engine: BookingEngine) -> CancelBookingUseCase:
        return CancelBookingUseCase(
            uow_factory=lambda: uow, booking_engine=engine, lock_registry=EntityLockRegistry()
        )

    @pytest.mark.asyncio
    async def test_successful_cancellation(
        self,
        make_uow: Callable[..., Any],
        engine: BookingEngine,
        active_booking: Booking,
        member: Member,
        item: InventoryItem,
    ) -> None:
        """
        Given: active booking 1 -> member 1 (count 1), item 101 (4 left)
        When: Cancel(1)
        Then: booking cancelled, item 5 left, member count 0, committed once
        """
        # Arrange
        uow = make_uow(booking=active_booking, member=member, item=item)
        use_case = self._use_case(uow, engine)

        # Act
        outcome = await use_case.execute(booking_id=1)

        # Assert
        assert outcome.kind == OutcomeKind.CANCEL_SUCCEEDED
        assert outcome.booking is not None
        assert outcome.booking.id == 1
        assert uow.booking_repo.get_by_id.await_args_list[-1] == call(1, for_update=True)
        uow.member_repo.get_by_id.assert_awaited_once_with(1, for_update=True)
        uow.inventory_item_repo.get_by_id.assert_awaited_once_with(101, for_update=True)
        assert uow.booking_repo.update.await_args.args[0].is_cancelled is True
        assert uow.inventory_item_repo.update.await_args.args[0].remaining_count == 5
        assert uow.member_repo.update.await_args.args[0].booking_count == 0
        assert uow.commit_count == 1

    @pytest.mark.asyncio
    async def test_invalid_id_skips_store(self, engine: BookingEngine) -> None:
        # Arrange
        uow_factory = Mock()
        use_case = CancelBookingUseCase(
            uow_factory=uow_factory, booking_engine=engine, lock_registry=EntityLockRegistry()
        )

        # Act
        outcome = await use_case.execute(booking_id=0)

        # Assert
        assert outcome.kind == OutcomeKind.INVALID_ARGUMENT
        assert outcome.message == 'booking_id must be a positive integer'
        uow_factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_booking_not_found(self, make_uow: Callable[..., Any], engine: BookingEngine) -> None:
        # Arrange
        uow = make_uow(booking=None)
        use_case = self._use_case(uow, engine)

        # Act
        outcome = await use_case.execute(booking_id=999)

        # Assert
        assert outcome.kind == OutcomeKind.BOOKING_NOT_FOUND
        assert outcome.message == 'Booking with ID 999 not found'
        uow.member_repo.get_by_id.assert_not_awaited()
        uow.inventory_item_repo.get_by_id.assert_not_awaited()
        assert uow.commit_count == 0

    @pytest.mark.asyncio
    async def test_already_cancelled_writes_nothing(
        self,
        make_uow: Callable[..., Any],
        engine: BookingEngine,
        member: Member,
        item: InventoryItem,
    ) -> None:
        # Arrange
        cancelled = Booking(
            id=1, member_id=1, inventory_item_id=101, booking_datetime=NOW, is_cancelled=True
        )
        uow = make_uow(booking=cancelled, member=member, item=item)
        use_case = self._use_case(uow, engine)

        # Act
        outcome = await use_case.execute(booking_id=1)

        # Assert
        assert outcome.kind == OutcomeKind.ALREADY_CANCELLED
        assert outcome.message == 'Booking with ID 1 is already cancelled'
        uow.booking_repo.update.assert_not_awaited()
        uow.member_repo.update.assert_not_awaited()
        uow.inventory_item_repo.update.assert_not_awaited()
        assert uow.commit_count == 0

    @pytest.mark.asyncio
    async def test_missing_item_is_counted_and_skipped(
        self,
        make_uow: Callable[..., Any],
        engine: BookingEngine,
        active_booking: Booking,
        member: Member,
    ) -> None:
        """
        Given: active booking whose item no longer exists
        When: Cancel
        Then: cancellation succeeds, member still decremented, item untouched,
              one ITEM_MISSING consistency warning recorded
        """
        # Arrange
        uow = make_uow(booking=active_booking, member=member, item=None)
        use_case = self._use_case(uow, engine)

        # Act
        with patch(
            'src.service.booking.app.command.cancel_booking_use_case.metrics'
        ) as mock_metrics:
            outcome = await use_case.execute(booking_id=1)

        # Assert
        assert outcome.kind == OutcomeKind.CANCEL_SUCCEEDED
        uow.inventory_item_repo.update.assert_not_awaited()
        assert uow.member_repo.update.await_args.args[0].booking_count == 0
        assert uow.commit_count == 1
        mock_metrics.record_consistency_warning.assert_called_once_with(
            warning=ConsistencyWarning.ITEM_MISSING
        )
        mock_metrics.record_request.assert_called_once_with(
            operation='cancel', outcome=OutcomeKind.CANCEL_SUCCEEDED
        )

    @pytest.mark.asyncio
    async def test_member_count_already_zero_is_left_alone(
        self,
        make_uow: Callable[..., Any],
        engine: BookingEngine,
        active_booking: Booking,
        item: InventoryItem,
    ) -> None:
        # Arrange
        member = Member(id=1, name='Test', surname='Member', booking_count=0)
        uow = make_uow(booking=active_booking, member=member, item=item)
        use_case = self._use_case(uow, engine)

        # Act
        outcome = await use_case.execute(booking_id=1)

        # Assert
        assert outcome.kind == OutcomeKind.CANCEL_SUCCEEDED
        uow.member_repo.update.assert_not_awaited()
        assert uow.inventory_item_repo.update.await_args.args[0].remaining_count == 5
        assert uow.commit_count == 1
