from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("timing")

QUIET_PATHS = ("/",)


class TimingMiddleware(BaseHTTPMiddleware):
    """Add X-Process-Time and log each request; slow ones at WARNING."""

    def __init__(self, app, slow_ms: int = 500):
        super().__init__(app)
        self.slow_ms = slow_ms

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Process-Time"] = f"{elapsed_ms:.2f}ms"
        if elapsed_ms > self.slow_ms:
            logger.warning(
                f"Slow request {request.method} {request.url.path} {response.status_code} took {elapsed_ms:.0f}ms"
            )
        elif request.url.path in QUIET_PATHS:
            logger.debug(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.0f}ms")
        else:
            logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.0f}ms")
        return response
