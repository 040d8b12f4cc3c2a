"""Tour service — business rules between the tours router and TourRepository.

Rule: No SQLAlchemy / no FastAPI here. Pure Python business logic.
"""

import logging

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.api_features import QueryOptions
from app.core.exceptions import (
    BadRequestError,
    NotFoundError,
    duplicate_field_error,
    invalid_input_message,
)
from app.domain.tour import Tour
from app.repositories.tour import TourRepository
from app.schemas.tour import TourCreate, TourOut, TourUpdate

logger = logging.getLogger(__name__)

TOUR_NOT_FOUND = "Tour not found with that ID"

# Canned "top 5 cheap" view served by /tours/top-5-cheap
TOP_FIVE_CHEAP = QueryOptions(
    limit=5,
    sort="price,ratingAverage",
    fields="name,price,ratingAverage,difficulty",
)


def _invalid_input(exc: ValidationError) -> BadRequestError:
    return BadRequestError(invalid_input_message(exc.errors()))


class TourService:
    def __init__(self, session: AsyncSession):
        self._repo = TourRepository(session)

    async def list_tours(self, options: QueryOptions) -> tuple[list[Tour], list[str] | None]:
        return await self._repo.list(options)

    async def get_tour(self, tour_id: str) -> Tour:
        tour = await self._repo.get_by_id(tour_id)
        if not tour:
            raise NotFoundError(TOUR_NOT_FOUND)
        return tour

    async def create_tour(self, data: TourCreate) -> Tour:
        if await self._repo.name_taken(data.name):
            raise duplicate_field_error(data.name)
        tour = await self._repo.create(**data.model_dump())
        logger.info("Created tour %s (%s)", tour.id, tour.name)
        return tour

    async def update_tour(self, tour_id: str, data: TourUpdate) -> Tour:
        tour = await self.get_tour(tour_id)  # raises 404 if missing
        patch = data.model_dump(exclude_unset=True)

        # Re-run the full document rules against the merged result
        current = TourOut.model_validate(tour).model_dump(include=set(TourCreate.model_fields))
        try:
            merged = TourCreate.model_validate({**current, **patch})
        except ValidationError as exc:
            raise _invalid_input(exc) from None

        changes = merged.model_dump(include=set(patch))
        if "name" in changes and await self._repo.name_taken(merged.name, exclude_id=tour_id):
            raise duplicate_field_error(merged.name)

        updated = await self._repo.update(tour, **changes)
        logger.info("Updated tour %s fields=%s", tour_id, sorted(changes))
        return updated

    async def delete_tour(self, tour_id: str) -> None:
        deleted = await self._repo.delete(tour_id)
        if not deleted:
            raise NotFoundError(TOUR_NOT_FOUND)
        logger.info("Deleted tour %s", tour_id)

    async def tour_stats(self) -> list[dict]:
        stats = await self._repo.stats_by_difficulty(min_rating=4.0)
        logger.debug("Tour stats: %s", stats)
        return stats

    async def monthly_plan(self, year: int) -> list[dict]:
        plan = await self._repo.monthly_plan(year)
        logger.debug("Monthly plan for %s: %s", year, plan)
        return plan
