"""
Correlation ID middleware for request tracing.
"""
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from proworker.lib.logging import get_logger, set_correlation_id

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Accepts X-Correlation-ID from incoming requests or generates a new one.

    The id is stored on request.state, bound to the logging context for the
    duration of the request, and echoed back in the response headers.
    """

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        set_correlation_id(correlation_id)

        logger.info(
            "Incoming request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None,
            }
        )

        try:
            response = await call_next(request)
        finally:
            set_correlation_id(None)

        response.headers[CORRELATION_HEADER] = correlation_id

        logger.info(
            "Response sent",
            extra={
                "correlation_id": correlation_id,
                "status_code": response.status_code,
            }
        )

        return response
