"""QueryOptions parsing and the SQL produced by APIFeatures."""

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy import select

from app.core.api_features import APIFeatures, QueryOptions
from app.core.config import settings
from app.core.exceptions import BadRequestError
from app.domain.tour import Tour
from app.services.tour import TOP_FIVE_CHEAP


def _sql(features: APIFeatures) -> str:
    return str(features.query.compile(compile_kwargs={"literal_binds": True}))


class TestQueryOptions:
    def test_reserved_params_are_not_filters(self):
        opts = QueryOptions.from_query_params(
            {"page": "2", "sort": "-price", "limit": "10", "fields": "name", "difficulty": "easy"}
        )
        assert opts.filters == {"difficulty": {"eq": "easy"}}
        assert opts.page == 2
        assert opts.limit == 10
        assert opts.sort_fields == ["-price"]
        assert opts.selected_fields == ["name"]

    def test_bracket_operators(self):
        opts = QueryOptions.from_query_params({"price[gte]": "500", "price[lt]": "1500", "duration[gt]": "3"})
        assert opts.filters == {
            "price": {"gte": "500", "lt": "1500"},
            "duration": {"gt": "3"},
        }

    def test_unsupported_operator(self):
        with pytest.raises(BadRequestError):
            QueryOptions.from_query_params({"price[regex]": "1"})

    @pytest.mark.parametrize("raw", ["0", "-1", "abc"])
    def test_bad_page(self, raw):
        with pytest.raises(BadRequestError) as exc:
            QueryOptions.from_query_params({"page": raw})
        assert exc.value.status_code == 400

    def test_limit_defaults_and_clamps(self):
        assert QueryOptions().effective_limit == settings.default_page_limit
        assert QueryOptions(limit=10**9).effective_limit == settings.max_page_limit

    def test_offset(self):
        assert QueryOptions(page=3, limit=20).offset == 40

    @pytest.mark.parametrize("name", ["page", "limit"])
    def test_values_beyond_int64(self, name):
        with pytest.raises(BadRequestError, match=f"Invalid {name}"):
            QueryOptions.from_query_params({name: str(2**63)})

    def test_offset_must_fit_int64(self):
        with pytest.raises(BadRequestError, match="Invalid page"):
            QueryOptions.from_query_params({"page": str(2**62), "limit": "10"})

    def test_csv_ignores_blanks(self):
        assert QueryOptions(sort="price,, -name ").sort_fields == ["price", "-name"]


class TestAPIFeatures:
    def _features(self, **kwargs) -> APIFeatures:
        return APIFeatures(select(Tour), Tour, QueryOptions(**kwargs))

    def test_filter_maps_camel_case_to_columns(self):
        sql = _sql(self._features(filters={"ratingAverage": {"gte": "4.5"}}).filter())
        assert "tours.rating_average >= 4.5" in sql

    def test_filter_skips_unknown_and_relationship_fields(self):
        sql = _sql(self._features(filters={"nope": {"eq": "1"}, "startDates": {"eq": "x"}}).filter())
        assert "WHERE" not in sql

    def test_filter_coercion_error(self):
        with pytest.raises(BadRequestError, match="Invalid duration: long."):
            self._features(filters={"duration": {"eq": "long"}}).filter()

    def test_filter_rejects_int_beyond_int64(self):
        with pytest.raises(BadRequestError, match="Invalid duration"):
            self._features(filters={"duration": {"eq": str(2**63)}}).filter()

    def test_datetime_filter_converted_to_naive_utc(self):
        features = self._features(filters={"createdAt": {"gte": "2022-01-01T02:00:00+05:00"}}).filter()
        params = features.query.compile().params
        assert list(params.values()) == [datetime(2021, 12, 31, 21, 0)]

    def test_sort_order(self):
        sql = _sql(self._features(sort="-price,name").sort())
        assert "ORDER BY tours.price DESC, tours.name ASC, tours.id ASC" in sql

    def test_default_sort(self):
        sql = _sql(self._features().sort())
        assert "ORDER BY tours.created_at DESC" in sql

    def test_projection_always_includes_id(self):
        features = self._features(fields="name,id,price").limit_fields()
        assert features.projection == ["id", "name", "price"]

    def test_no_projection_by_default(self):
        assert self._features().limit_fields().projection is None

    def test_paginate(self):
        sql = _sql(self._features(page=2, limit=5).paginate())
        assert "LIMIT 5" in sql
        assert "OFFSET 5" in sql

    def test_top_five_preset(self):
        assert TOP_FIVE_CHEAP.effective_limit == 5
        assert TOP_FIVE_CHEAP.sort_fields == ["price", "ratingAverage"]
        assert TOP_FIVE_CHEAP.selected_fields == ["name", "price", "ratingAverage", "difficulty"]
        assert TOP_FIVE_CHEAP.filters == {}
        assert TOP_FIVE_CHEAP.page == 1
