"""Schema base shared by every request and response model."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire; also reads ORM objects."""

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }


class HealthResponse(BaseModel):
    status: str = "ok"
    app: str
    env: str
