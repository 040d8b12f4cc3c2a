"""SQLAlchemy ORM models for Tours and their scheduled start dates.

Start dates live in their own table, one row per date, so reports can
unwind them with a plain join.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.domain.mixins import TimestampMixin


class Tour(Base, TimestampMixin):
    __tablename__ = "tours"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(40), nullable=False, unique=True, index=True)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    max_group_size: Mapped[int] = mapped_column(Integer, nullable=False)

    # "easy" | "medium" | "difficult"
    difficulty: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    rating_average: Mapped[float] = mapped_column(Float, default=4.5, nullable=False)
    ratings_quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    price_discount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_cover: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    images: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)

    start_dates: Mapped[List["TourStartDate"]] = relationship(
        back_populates="tour",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="TourStartDate.start_date",
    )


class TourStartDate(Base):
    __tablename__ = "tour_start_dates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tour_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tours.id", ondelete="CASCADE"), nullable=False, index=True
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)

    tour: Mapped["Tour"] = relationship(back_populates="start_dates")
