from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class MemberModel(Base):
    __tablename__ = 'member'
    __table_args__ = (CheckConstraint('booking_count >= 0', name='ck_member_booking_count'),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    surname: Mapped[str] = mapped_column(String(100), nullable=False)
    booking_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text('0')
    )
    date_joined: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
