"""
Booking decision logic

Pure functions of the snapshots passed in: decide whether a book or cancel
request is accepted and describe the resulting record states. Nothing here
reads or writes the store.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.inventory_item_entity import InventoryItem
from src.service.booking.domain.entity.member_entity import Member
from src.service.booking.domain.enum.consistency_warning import ConsistencyWarning
from src.service.booking.domain.enum.outcome_kind import OutcomeKind
from src.service.booking.domain.value_object.outcome import (
    BookingMutation,
    CancellationMutation,
    Outcome,
)


Clock = Callable[[], datetime]

DEFAULT_MAX_BOOKINGS = 2


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BookingEngine:
    def __init__(self, *, max_bookings: int = DEFAULT_MAX_BOOKINGS, clock: Clock = utc_now) -> None:
        if max_bookings < 1:
            raise ValueError('max_bookings must be at least 1')
        self.max_bookings = max_bookings
        self.clock = clock

    @staticmethod
    def is_valid_id(value: int) -> bool:
        return value > 0

    @Logger.io
    def evaluate_booking(
        self,
        *,
        member: Optional[Member],
        item: Optional[InventoryItem],
        member_id: int,
        item_id: int,
    ) -> Outcome:
        """
        Checks run in a fixed order and the first failure wins:
        ids, member exists, item exists, quota, stock.
        """
        if not (self.is_valid_id(member_id) and self.is_valid_id(item_id)):
            return Outcome.rejected(
                OutcomeKind.INVALID_ARGUMENT,
                'member_id and inventory_item_id must be positive integers',
            )
        if member is None:
            return Outcome.rejected(
                OutcomeKind.MEMBER_NOT_FOUND, f'Member with ID {member_id} not found'
            )
        if item is None:
            return Outcome.rejected(
                OutcomeKind.ITEM_NOT_FOUND, f'Inventory item with ID {item_id} not found'
            )
        if member.booking_count >= self.max_bookings:
            return Outcome.rejected(
                OutcomeKind.QUOTA_EXCEEDED,
                f'Member has reached the maximum allowed bookings of {self.max_bookings}',
            )
        if not item.in_stock:
            return Outcome.rejected(OutcomeKind.OUT_OF_STOCK, 'Inventory item is out of stock')

        booking = Booking.create(member_id=member_id, inventory_item_id=item_id, now=self.clock())
        return Outcome(
            kind=OutcomeKind.BOOK_SUCCEEDED,
            message='Booking successful',
            mutation=BookingMutation(
                booking=booking,
                member=member.reserve_slot(),
                item=item.take_one(),
            ),
        )

    @Logger.io
    def evaluate_cancellation(
        self,
        *,
        booking: Optional[Booking],
        member: Optional[Member],
        item: Optional[InventoryItem],
        booking_id: int,
    ) -> Outcome:
        """
        Cancellation is lenient about the linked records: a missing item or
        member, or a member count already at zero, leaves that side unchanged
        and is reported as a warning instead of a rejection.
        """
        if not self.is_valid_id(booking_id):
            return Outcome.rejected(
                OutcomeKind.INVALID_ARGUMENT, 'booking_id must be a positive integer'
            )
        if booking is None:
            return Outcome.rejected(
                OutcomeKind.BOOKING_NOT_FOUND, f'Booking with ID {booking_id} not found'
            )
        if booking.is_cancelled:
            return Outcome.rejected(
                OutcomeKind.ALREADY_CANCELLED, f'Booking with ID {booking_id} is already cancelled'
            )

        warnings: list[ConsistencyWarning] = []

        new_item: Optional[InventoryItem] = None
        if item is not None:
            new_item = item.return_one()
        else:
            warnings.append(ConsistencyWarning.ITEM_MISSING)

        new_member: Optional[Member] = None
        if member is None:
            warnings.append(ConsistencyWarning.MEMBER_MISSING)
        elif member.booking_count > 0:
            new_member = member.release_slot()
        else:
            warnings.append(ConsistencyWarning.MEMBER_COUNT_AT_ZERO)

        return Outcome(
            kind=OutcomeKind.CANCEL_SUCCEEDED,
            message='Booking cancelled successfully',
            mutation=CancellationMutation(
                booking=booking.cancel(),
                member=new_member,
                item=new_item,
                warnings=tuple(warnings),
            ),
        )
