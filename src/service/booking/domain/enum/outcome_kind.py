from enum import StrEnum


class OutcomeKind(StrEnum):
    BOOK_SUCCEEDED = 'book_succeeded'
    CANCEL_SUCCEEDED = 'cancel_succeeded'

    # Client input
    INVALID_ARGUMENT = 'invalid_argument'

    # Reference
    MEMBER_NOT_FOUND = 'member_not_found'
    ITEM_NOT_FOUND = 'item_not_found'
    BOOKING_NOT_FOUND = 'booking_not_found'

    # Business rule
    QUOTA_EXCEEDED = 'quota_exceeded'
    OUT_OF_STOCK = 'out_of_stock'
    ALREADY_CANCELLED = 'already_cancelled'

    @property
    def is_success(self) -> bool:
        return self in (OutcomeKind.BOOK_SUCCEEDED, OutcomeKind.CANCEL_SUCCEEDED)

    @property
    def is_not_found(self) -> bool:
        return self in (
            OutcomeKind.MEMBER_NOT_FOUND,
            OutcomeKind.ITEM_NOT_FOUND,
            OutcomeKind.BOOKING_NOT_FOUND,
        )
