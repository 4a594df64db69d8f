"""
Correlation ID Middleware.

Reuses the caller's X-Correlation-ID or mints one, and makes it available to
handlers (request.state), to log records (context var) and to the client
(response header).
"""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware

from orders_api.logging_config import correlation_id_var

CORRELATION_ID_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request, call_next):
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        token = correlation_id_var.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token)

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
