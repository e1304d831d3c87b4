"""
Middleware for request ids and request logging
"""

import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .logging import clear_request_id, get_logger, set_request_id

logger = get_logger(__name__)

REQUEST_ID_HEADER = 'X-Request-ID'


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log its start, end and failures."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER) or None)
        started = time.perf_counter()
        try:
            logger.info(
                'Request started',
                method=request.method,
                path=request.url.path,
                user_agent=request.headers.get('user-agent'),
                remote_addr=request.client.host if request.client else None,
            )

            response = await call_next(request)

            logger.info(
                'Request completed',
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response

        except Exception as e:
            logger.error('Request failed', method=request.method, path=request.url.path, error=str(e))
            raise

        finally:
            clear_request_id()
