"""Tour repository — CRUD from BaseRepository plus the reporting queries."""

from __future__ import annotations

from datetime import datetime, timezone
from itertools import groupby
from typing import Any

from sqlalchemy import extract, func, select
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import duplicate_field_error
from app.domain.tour import Tour, TourStartDate
from app.repositories.base import BaseRepository


def _name_conflict(exc: IntegrityError) -> bool:
    # unique index on tours.name lost a race with the service check
    return "name" in str(exc.orig)


class TourRepository(BaseRepository[Tour]):
    model = Tour

    async def name_taken(self, name: str, exclude_id: str | None = None) -> bool:
        q = select(func.count()).select_from(Tour).where(Tour.name == name)
        if exclude_id is not None:
            q = q.where(Tour.id != exclude_id)
        return (await self._session.execute(q)).scalar_one() > 0

    async def create(self, **kwargs: Any) -> Tour:
        start_dates = kwargs.pop("start_dates", None) or []
        kwargs["start_dates"] = [TourStartDate(start_date=d) for d in start_dates]
        try:
            return await super().create(**kwargs)
        except IntegrityError as exc:
            if _name_conflict(exc):
                raise duplicate_field_error(kwargs.get("name")) from exc
            raise

    async def update(self, instance: Tour, **kwargs: Any) -> Tour:
        if "start_dates" in kwargs:
            kwargs["start_dates"] = [
                TourStartDate(start_date=d) for d in kwargs["start_dates"] or []
            ]
        name = kwargs.get("name", instance.name)
        try:
            return await super().update(instance, **kwargs)
        except IntegrityError as exc:
            if _name_conflict(exc):
                raise duplicate_field_error(name) from exc
            raise

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    async def stats_by_difficulty(self, min_rating: float = 4.0) -> list[dict[str, Any]]:
        """Count / rating / price aggregates per difficulty, cheapest bucket first."""
        avg_price = func.avg(Tour.price).label("avg_price")
        q = (
            select(
                Tour.difficulty.label("difficulty"),
                func.count(Tour.id).label("num_tours"),
                func.sum(Tour.rating_average).label("num_rating"),
                func.avg(Tour.rating_average).label("avg_rating"),
                avg_price,
                func.min(Tour.price).label("min_price"),
                func.max(Tour.price).label("max_price"),
            )
            .where(Tour.rating_average >= min_rating)
            .group_by(Tour.difficulty)
            .order_by(avg_price.asc())
        )
        rows = (await self._session.execute(q)).mappings().all()
        return [dict(row) for row in rows]

    async def monthly_plan(self, year: int) -> list[dict[str, Any]]:
        """Tour starts per month of ``year``, one entry per month with at least one start.

        Each start date is its own row, so joining tours to start dates
        yields one row per (tour, start date) pair.
        """
        first = datetime(year, 1, 1, tzinfo=timezone.utc)
        last = datetime(year, 12, 1, tzinfo=timezone.utc)
        month = extract("month", TourStartDate.start_date).label("month")
        q = (
            select(month, Tour.name)
            .select_from(TourStartDate)
            .join(Tour, Tour.id == TourStartDate.tour_id)
            .where(TourStartDate.start_date >= first)
            .where(TourStartDate.start_date <= last)
            .order_by(month.asc(), TourStartDate.start_date.asc(), Tour.name.asc())
        )
        rows = (await self._session.execute(q)).all()

        plan: list[dict[str, Any]] = []
        for month_value, group in groupby(rows, key=lambda row: int(row.month)):
            names = [row.name for row in group]
            plan.append({"num_tour_starts": len(names), "tours": names, "month": month_value})
        return plan
