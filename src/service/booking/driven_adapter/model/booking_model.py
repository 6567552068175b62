from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, false
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class BookingModel(Base):
    __tablename__ = 'booking'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('member.id'), nullable=False, index=True
    )
    inventory_item_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('inventory_item.id'), nullable=False, index=True
    )
    booking_datetime: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_cancelled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
