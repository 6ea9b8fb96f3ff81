# Request Logging Middleware with Correlation IDs
# Tags every request with an ID and logs its outcome and timing

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("record_search.api")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that:
    1. Reuses the caller's X-Request-ID or assigns a new one
    2. Logs request completion or failure with timing
    3. Echoes the request ID on the response
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id

        started_at = time.perf_counter()
        log_extra = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Request failed",
                extra={**log_extra, "duration_ms": self._elapsed_ms(started_at), "error": str(e)},
            )
            raise

        logger.info(
            "Request completed",
            extra={
                **log_extra,
                "status_code": response.status_code,
                "duration_ms": self._elapsed_ms(started_at),
            },
        )
        response.headers["X-Request-ID"] = request_id
        return response

    @staticmethod
    def _elapsed_ms(started_at: float) -> float:
        return round((time.perf_counter() - started_at) * 1000, 2)
