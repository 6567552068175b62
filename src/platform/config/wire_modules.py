"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.booking.app.command import book_item_use_case, cancel_booking_use_case


WIRE_MODULES: list[ModuleType] = [
    book_item_use_case,
    cancel_booking_use_case,
]
