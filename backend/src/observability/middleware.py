"""FastAPI middleware for observability.

Assigns a request ID to every HTTP request and logs its start and completion.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging_config import get_logger
from .request_id import generate_request_id, set_request_id

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware to generate and inject request IDs."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)

        start_time = time.time()
        logger.info(f"{request.method} {request.url.path}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Request failed after {duration_ms:.2f}ms: {str(e)}",
                exc_info=True
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(f"Request completed: {response.status_code} in {duration_ms:.2f}ms")

        response.headers["X-Request-ID"] = request_id
        return response
