"""Query-feature helper for list endpoints.

``QueryOptions`` is a plain description of what a caller asked for
(``?price[gte]=500&sort=-price,name&fields=name,price&page=2&limit=10``).
``APIFeatures`` applies it to a SQLAlchemy ``Select`` through four chained
calls::

    features = APIFeatures(select(Tour), Tour, options).filter().sort().limit_fields().paginate()
    rows = (await session.execute(features.query)).scalars().all()

Field names in the query string are the camelCase names used in the JSON
representation; they are mapped to snake_case model attributes.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any, Mapping

from pydantic.alias_generators import to_snake
from sqlalchemy import Select

from app.core.config import settings
from app.core.exceptions import BadRequestError

# Largest value SQLite (and BIGINT columns) can bind
MAX_INT64 = 2**63 - 1

RESERVED_PARAMS = frozenset({"page", "sort", "limit", "fields"})
OPERATORS = ("gte", "gt", "lte", "lt")

# price[gte]=500 -> ("price", "gte")
_BRACKET_RE = re.compile(r"^(?P<field>[A-Za-z_][A-Za-z0-9_]*)\[(?P<op>[a-z]+)\]$")


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


class QueryOptions:
    """Filter / sort / projection / pagination request for a list operation."""

    def __init__(
        self,
        *,
        filters: dict[str, dict[str, str]] | None = None,
        sort: str | None = None,
        fields: str | None = None,
        page: int = 1,
        limit: int | None = None,
    ):
        self.filters = filters or {}
        self.sort = sort
        self.fields = fields
        self.page = page
        self.limit = limit

    def __repr__(self) -> str:
        return (
            f"QueryOptions(filters={self.filters!r}, sort={self.sort!r}, "
            f"fields={self.fields!r}, page={self.page!r}, limit={self.limit!r})"
        )

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "QueryOptions":
        """Parse a raw query string mapping.

        ``page``, ``sort``, ``limit`` and ``fields`` are reserved; every other
        key is a filter. ``field=value`` means equality, ``field[op]=value``
        with op in gte/gt/lte/lt means comparison.
        """
        filters: dict[str, dict[str, str]] = {}
        for key, value in params.items():
            if key in RESERVED_PARAMS:
                continue
            match = _BRACKET_RE.match(key)
            if match:
                op = match.group("op")
                if op not in OPERATORS:
                    raise BadRequestError(f"Unsupported filter operator: {op}")
                filters.setdefault(match.group("field"), {})[op] = value
            else:
                filters.setdefault(key, {})["eq"] = value

        options = cls(
            filters=filters,
            sort=params.get("sort"),
            fields=params.get("fields"),
            page=_positive_int("page", params.get("page"), default=1),
            limit=_positive_int("limit", params.get("limit"), default=None),
        )
        if options.offset + options.effective_limit > MAX_INT64:
            raise BadRequestError(f"Invalid page: {params.get('page')}.")
        return options

    @property
    def sort_fields(self) -> list[str]:
        return _split_csv(self.sort)

    @property
    def selected_fields(self) -> list[str]:
        return _split_csv(self.fields)

    @property
    def effective_limit(self) -> int:
        limit = self.limit or settings.default_page_limit
        return min(limit, settings.max_page_limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.effective_limit


def _positive_int(name: str, raw: str | None, default: int | None) -> int | None:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise BadRequestError(f"Invalid {name}: {raw}.") from None
    if value < 1 or value > MAX_INT64:
        raise BadRequestError(f"Invalid {name}: {raw}.")
    return value


def _coerce(column, field: str, raw: str) -> Any:
    """Convert a query-string value to the column's Python type."""
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return raw
    try:
        if python_type is bool:
            lowered = raw.lower()
            if lowered not in ("true", "false", "1", "0"):
                raise ValueError(raw)
            return lowered in ("true", "1")
        if python_type is datetime:
            value = datetime.fromisoformat(raw)
            # stored values are naive UTC
            if value.tzinfo is not None:
                value = value.astimezone(timezone.utc).replace(tzinfo=None)
            return value
        if python_type is date:
            return date.fromisoformat(raw)
        value = python_type(raw)
        if python_type is int and abs(value) > MAX_INT64:
            raise ValueError(raw)
        return value
    except (TypeError, ValueError):
        raise BadRequestError(f"Invalid {field}: {raw}.") from None


class APIFeatures:
    """Applies QueryOptions to a SELECT over ``model``.

    Each step returns ``self`` so calls chain; ``query`` holds the statement.
    Unknown fields are ignored in filters and sorts.
    """

    def __init__(self, query: Select, model: type, options: QueryOptions):
        self.query = query
        self.model = model
        self.options = options
        self.projection: list[str] | None = None

    def _column(self, field: str):
        name = to_snake(field)
        columns = self.model.__table__.columns
        if name not in columns:
            return None
        return getattr(self.model, name)

    def filter(self) -> "APIFeatures":
        for field, conditions in self.options.filters.items():
            col = self._column(field)
            if col is None:
                continue
            for op, raw in conditions.items():
                value = _coerce(col, field, raw)
                if op == "eq":
                    self.query = self.query.where(col == value)
                elif op == "gte":
                    self.query = self.query.where(col >= value)
                elif op == "gt":
                    self.query = self.query.where(col > value)
                elif op == "lte":
                    self.query = self.query.where(col <= value)
                elif op == "lt":
                    self.query = self.query.where(col < value)
        return self

    def sort(self) -> "APIFeatures":
        fields = self.options.sort_fields or _split_csv(settings.default_sort)
        for field in fields:
            descending = field.startswith("-")
            col = self._column(field.lstrip("-"))
            if col is None:
                continue
            self.query = self.query.order_by(col.desc() if descending else col.asc())
        # Stable order for ties
        self.query = self.query.order_by(self.model.id.asc())
        return self

    def limit_fields(self) -> "APIFeatures":
        selected = self.options.selected_fields
        if selected:
            self.projection = ["id", *[f for f in selected if f != "id"]]
        return self

    def paginate(self) -> "APIFeatures":
        self.query = self.query.offset(self.options.offset).limit(self.options.effective_limit)
        return self
