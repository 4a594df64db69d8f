"""
Last-resort handler for exceptions that escape a route.

Services only raise for unexpected failures (store errors, bugs), so
everything arriving here is logged with its correlation id and answered
with a generic application/problem+json 500. Details are exposed only in
debug mode.
"""

import logging
from datetime import datetime, timezone

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from orders_api.config import get_settings

logger = logging.getLogger(__name__)


class ExceptionHandlingMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return self.problem_response(request, exc)

    def problem_response(self, request, exc: Exception) -> JSONResponse:
        settings = get_settings()
        correlation_id = getattr(request.state, "correlation_id", None)

        logger.exception(
            f"Unhandled exception occurred. CorrelationId: {correlation_id}, "
            f"Path: {request.url.path}, Method: {request.method}"
        )

        problem = {
            "type": "https://tools.ietf.org/html/rfc7231#section-6.6.1",
            "title": "An error occurred while processing your request.",
            "status": 500,
            "instance": request.url.path,
            "detail": (
                repr(exc)
                if settings.DEBUG
                else "An internal server error occurred. Please contact support with the correlation ID."
            ),
            "correlationId": correlation_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if settings.DEBUG:
            problem["exceptionType"] = type(exc).__name__

        return JSONResponse(
            status_code=500,
            content=problem,
            media_type="application/problem+json",
        )
