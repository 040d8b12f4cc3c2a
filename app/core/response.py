"""Standardized JSON response envelope helpers.

Every successful response has the shape
``{ status: "success", requestTime?, results?, data: {...} }``.
"""


from typing import Any, Generic, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Success envelope. Optional members are dropped when unset."""

    status: str = "success"
    request_time: str | None = None
    results: int | None = None
    data: T

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


def request_time(request: Request) -> str | None:
    """Timestamp stamped on the request by RequestTimeMiddleware."""
    return getattr(request.state, "request_time", None)


def success(data: Any, *, request: Request | None = None, results: int | None = None) -> dict:
    """Build a success envelope dict for use with Envelope."""
    body: dict[str, Any] = {"status": "success", "data": data}
    if request is not None:
        body["request_time"] = request_time(request)
    if results is not None:
        body["results"] = results
    return body
