from fastapi import APIRouter, Depends, status

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.book_item_use_case import BookItemUseCase
from src.service.booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.booking.domain.value_object.outcome import Outcome
from src.service.booking.driving_adapter.schema.booking_schema import (
    BookRequest,
    BookResponse,
    CancelRequest,
    CancelResponse,
)


router = APIRouter()


def raise_for_rejection(outcome: Outcome) -> None:
    """Map a rejected outcome onto the HTTP error it is reported as."""
    if outcome.succeeded:
        return
    if outcome.kind.is_not_found:
        raise NotFoundError(outcome.message)
    raise DomainError(outcome.message)


@router.post('/book', status_code=status.HTTP_200_OK)
@Logger.io
async def book(
    request: BookRequest,
    use_case: BookItemUseCase = Depends(BookItemUseCase.depends),
) -> BookResponse:
    outcome = await use_case.execute(
        member_id=request.member_id, inventory_item_id=request.inventory_item_id
    )
    raise_for_rejection(outcome)

    booking = outcome.booking
    assert booking is not None and booking.id is not None
    return BookResponse(
        message=outcome.message,
        booking_id=booking.id,
        booking_datetime=booking.booking_datetime,
    )


@router.post('/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel(
    request: CancelRequest,
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> CancelResponse:
    outcome = await use_case.execute(booking_id=request.booking_id)
    raise_for_rejection(outcome)

    booking = outcome.booking
    assert booking is not None and booking.id is not None
    return CancelResponse(message=outcome.message, booking_id=booking.id)
