from typing import Optional, Union

import attrs

from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.inventory_item_entity import InventoryItem
from src.service.booking.domain.entity.member_entity import Member
from src.service.booking.domain.enum.consistency_warning import ConsistencyWarning
from src.service.booking.domain.enum.outcome_kind import OutcomeKind


@attrs.frozen
class BookingMutation:
    """New state of the three records after an accepted booking."""

    booking: Booking  # id is None until the store assigns one
    member: Member
    item: InventoryItem


@attrs.frozen
class CancellationMutation:
    """
    New state after an accepted cancellation.

    member / item are None when that side is left untouched; `warnings`
    says why.
    """

    booking: Booking
    member: Optional[Member] = None
    item: Optional[InventoryItem] = None
    warnings: tuple[ConsistencyWarning, ...] = ()


Mutation = Union[BookingMutation, CancellationMutation]


@attrs.frozen
class Outcome:
    kind: OutcomeKind
    message: str
    mutation: Optional[Mutation] = None

    @property
    def succeeded(self) -> bool:
        return self.kind.is_success

    @property
    def booking(self) -> Optional[Booking]:
        return self.mutation.booking if self.mutation else None

    @classmethod
    def rejected(cls, kind: OutcomeKind, message: str) -> 'Outcome':
        return cls(kind=kind, message=message)
