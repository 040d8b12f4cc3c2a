"""Generic async repository: fetch, filtered listing, create, update, delete."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.api_features import APIFeatures, QueryOptions
from app.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository over a single mapped model."""

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _base_query(self):
        return select(self.model)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: str) -> ModelT | None:
        result = await self._session.execute(
            self._base_query().where(self.model.id == entity_id)
        )
        return result.scalars().first()

    async def list(self, options: QueryOptions) -> tuple[list[ModelT], list[str] | None]:
        """Return (items, projection) after filter, sort, field selection and pagination.

        The projection is the list of JSON field names to keep, or None for all.
        """
        features = (
            APIFeatures(self._base_query(), self.model, options)
            .filter()
            .sort()
            .limit_fields()
            .paginate()
        )
        items = (await self._session.execute(features.query)).scalars().all()
        return list(items), features.projection

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._session.flush()  # defaults are client-side, id is set here
        return instance

    async def update(self, instance: ModelT, **kwargs: Any) -> ModelT:
        kwargs.pop("id", None)
        for key, value in kwargs.items():
            setattr(instance, key, value)
        await self._session.flush()
        return instance

    async def delete(self, entity_id: str) -> bool:
        result = await self._session.execute(
            delete(self.model).where(self.model.id == entity_id)
        )
        await self._session.flush()
        return result.rowcount > 0
