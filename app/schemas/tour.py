"""Tour Pydantic schemas (request DTOs, response models, report rows)."""


from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator

from app.schemas.common import CamelModel

Difficulty = Literal["easy", "medium", "difficult"]


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _as_utc(value: Any) -> Any:
    # Timestamps are stored as naive UTC; naive input is taken to be UTC already
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return value


class TourCreate(CamelModel):
    """Full tour document. Also used to re-validate a patched tour."""

    name: str = Field(min_length=10, max_length=40)
    duration: int = Field(gt=0)
    max_group_size: int = Field(gt=0)
    difficulty: Difficulty
    rating_average: float = Field(default=4.5, ge=1.0, le=5.0)
    ratings_quantity: int = Field(default=0, ge=0)
    price: float = Field(gt=0)
    price_discount: float | None = Field(default=None, ge=0)
    summary: str | None = None
    description: str | None = None
    image_cover: str | None = None
    images: list[str] = Field(default_factory=list)
    start_dates: list[datetime] = Field(default_factory=list)

    @field_validator("name", "summary", "description", mode="before")
    @classmethod
    def _trim(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("start_dates")
    @classmethod
    def _start_dates_utc(cls, value: list[datetime]) -> list[datetime]:
        return [_as_utc(d) for d in value]

    @model_validator(mode="after")
    def _discount_below_price(self) -> "TourCreate":
        if self.price_discount is not None and self.price_discount >= self.price:
            raise ValueError(
                f"Discount price ({self.price_discount}) should be below regular price"
            )
        return self


class TourUpdate(CamelModel):
    """Partial tour document. Rules are enforced on the merged result."""

    name: str | None = None
    duration: int | None = None
    max_group_size: int | None = None
    difficulty: str | None = None
    rating_average: float | None = None
    ratings_quantity: int | None = None
    price: float | None = None
    price_discount: float | None = None
    summary: str | None = None
    description: str | None = None
    image_cover: str | None = None
    images: list[str] | None = None
    start_dates: list[datetime] | None = None


class TourOut(CamelModel):
    id: str
    name: str
    duration: int
    max_group_size: int
    difficulty: str
    rating_average: float
    ratings_quantity: int
    price: float
    price_discount: float | None = None
    summary: str | None = None
    description: str | None = None
    image_cover: str | None = None
    images: list[str] = Field(default_factory=list)
    start_dates: list[datetime] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @field_validator("start_dates", mode="before")
    @classmethod
    def _unwrap_start_dates(cls, value: Any) -> Any:
        # ORM rows carry the datetime on .start_date
        if value is None:
            return []
        return [_as_utc(getattr(item, "start_date", item)) for item in value]

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _timestamps_utc(cls, value: Any) -> Any:
        return _as_utc(value)


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

class TourStats(CamelModel):
    """One difficulty bucket of the tour statistics report."""

    difficulty: str
    num_tours: int
    num_rating: float
    avg_rating: float
    avg_price: float
    min_price: float
    max_price: float


class MonthlyPlanEntry(CamelModel):
    num_tour_starts: int
    tours: list[str]
    month: int


# ---------------------------------------------------------------------------
# Envelope payloads
# ---------------------------------------------------------------------------

class TourData(CamelModel):
    tour: TourOut


class ToursData(CamelModel):
    # Projected documents, already keyed by their JSON names
    tours: list[dict[str, Any]]


class StatsData(CamelModel):
    stats: list[TourStats]


class PlanData(CamelModel):
    plan: list[MonthlyPlanEntry]
