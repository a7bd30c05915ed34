"""Custom middleware for FastAPI application"""

import time
import uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from backend.app.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log its outcome and duration"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Reuse the caller's request id when one is supplied
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Request failed: {e}",
                extra={**context, "duration_ms": _elapsed_ms(started)},
                exc_info=True
            )
            raise

        logger.info(
            "Request completed",
            extra={
                **context,
                "status_code": response.status_code,
                "duration_ms": _elapsed_ms(started),
            }
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
