"""Booking Domain Value Objects"""

from src.service.booking.domain.value_object.outcome import (
    BookingMutation,
    CancellationMutation,
    Outcome,
)

__all__ = ['BookingMutation', 'CancellationMutation', 'Outcome']
