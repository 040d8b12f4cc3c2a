"""Tour router — HTTP handlers for /api/v1/tours.

Pattern:
  1. Inject DB session via Depends
  2. Instantiate TourService with the session
  3. Call the service and wrap the result in the success envelope

Errors are raised as AppException subclasses and turned into responses by
the handlers registered in app.core.exceptions.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Request, status
from pydantic.alias_generators import to_snake
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.api_features import QueryOptions
from app.core.response import Envelope, success
from app.db.base import get_db
from app.domain.tour import Tour
from app.schemas.tour import (
    PlanData,
    StatsData,
    TourCreate,
    TourData,
    TourOut,
    ToursData,
    TourUpdate,
)
from app.services.tour import TOP_FIVE_CHEAP, TourService

router = APIRouter(prefix="/tours", tags=["Tours"])


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _svc(session: AsyncSession) -> TourService:
    return TourService(session)


def _query_options(request: Request) -> QueryOptions:
    return QueryOptions.from_query_params(request.query_params)


def _project(tours: list[Tour], projection: list[str] | None) -> list[dict]:
    include = {to_snake(f) for f in projection} if projection else None
    return [
        TourOut.model_validate(t).model_dump(mode="json", by_alias=True, exclude_none=True, include=include)
        for t in tours
    ]


async def _list_response(request: Request, session: AsyncSession, options: QueryOptions) -> dict:
    tours, projection = await _svc(session).list_tours(options)
    return success(
        {"tours": _project(tours, projection)},
        request=request,
        results=len(tours),
    )


# ------------------------------------------------------------------
# Collection endpoints
# ------------------------------------------------------------------

@router.get(
    "",
    response_model=Envelope[ToursData],
    response_model_exclude_none=True,
)
async def get_all_tours(
    request: Request,
    options: QueryOptions = Depends(_query_options),
    session: AsyncSession = Depends(get_db),
):
    """List tours. Supports ?field[gte]=x filters, sort, fields, page and limit."""
    return await _list_response(request, session, options)


@router.get(
    "/top-5-cheap",
    response_model=Envelope[ToursData],
    response_model_exclude_none=True,
)
async def get_top_tours(
    request: Request,
    session: AsyncSession = Depends(get_db),
):
    """Five cheapest tours, lower rated first on price ties. The query string is ignored."""
    return await _list_response(request, session, TOP_FIVE_CHEAP)


@router.get(
    "/stats",
    response_model=Envelope[StatsData],
    response_model_exclude_none=True,
)
async def get_tour_stats(session: AsyncSession = Depends(get_db)):
    stats = await _svc(session).tour_stats()
    return success({"stats": stats})


@router.get(
    "/monthly-plan/{year}",
    response_model=Envelope[PlanData],
    response_model_exclude_none=True,
)
async def get_monthly_plan(
    year: int = Path(ge=1, le=9999),
    session: AsyncSession = Depends(get_db),
):
    plan = await _svc(session).monthly_plan(year)
    return success({"plan": plan})


@router.post(
    "",
    response_model=Envelope[TourData],
    response_model_exclude_none=True,
)
async def create_tour(
    body: TourCreate,
    session: AsyncSession = Depends(get_db),
):
    tour = await _svc(session).create_tour(body)
    return success({"tour": TourOut.model_validate(tour)})


# ------------------------------------------------------------------
# Single-resource endpoints
# ------------------------------------------------------------------

@router.get(
    "/{tour_id}",
    response_model=Envelope[TourData],
    response_model_exclude_none=True,
)
async def get_tour(
    tour_id: str,
    request: Request,
    session: AsyncSession = Depends(get_db),
):
    tour = await _svc(session).get_tour(tour_id)
    return success({"tour": TourOut.model_validate(tour)}, request=request)


@router.patch(
    "/{tour_id}",
    response_model=Envelope[TourData],
    response_model_exclude_none=True,
)
async def update_tour(
    tour_id: str,
    body: TourUpdate,
    session: AsyncSession = Depends(get_db),
):
    """Partial update; the merged document must still pass the create rules."""
    tour = await _svc(session).update_tour(tour_id, body)
    return success({"tour": TourOut.model_validate(tour)})


@router.delete("/{tour_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tour(
    tour_id: str,
    session: AsyncSession = Depends(get_db),
):
    await _svc(session).delete_tour(tour_id)
