"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.model.inventory_item_model import InventoryItemModel
from src.service.booking.driven_adapter.model.member_model import MemberModel

__all__ = ['BookingModel', 'InventoryItemModel', 'MemberModel']
