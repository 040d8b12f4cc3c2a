"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  tour.py    — Tour and its TourStartDate rows
  mixins.py  — Shared TimestampMixin
"""

from app.domain.tour import Tour, TourStartDate

__all__ = [
    "Tour",
    "TourStartDate",
]
