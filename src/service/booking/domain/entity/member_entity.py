from datetime import datetime
from typing import Optional

import attrs


@attrs.define
class Member:
    name: str
    surname: str
    booking_count: int = 0
    date_joined: Optional[datetime] = None
    id: Optional[int] = None  # Only None before the first flush

    def reserve_slot(self) -> 'Member':
        return attrs.evolve(self, booking_count=self.booking_count + 1)

    def release_slot(self) -> 'Member':
        """Give one slot back; the caller checks the count is above zero first."""
        return attrs.evolve(self, booking_count=self.booking_count - 1)
