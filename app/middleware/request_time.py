"""Request timing middleware — stamps each request and logs its duration."""


import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


def _iso_now() -> str:
    # 2024-05-01T09:30:00.123Z
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RequestTimeMiddleware(BaseHTTPMiddleware):
    """Sets ``request.state.request_time`` (ISO-8601, UTC) before the handler runs."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.request_time = _iso_now()
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000)
        logger.info(
            "%s %s -> %s (%sms)",
            request.method, request.url.path, response.status_code, duration_ms,
        )
        return response
