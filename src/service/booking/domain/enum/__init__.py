"""Booking Domain Enums"""

from src.service.booking.domain.enum.consistency_warning import ConsistencyWarning
from src.service.booking.domain.enum.outcome_kind import OutcomeKind

__all__ = ['ConsistencyWarning', 'OutcomeKind']
