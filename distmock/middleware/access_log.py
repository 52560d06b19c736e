import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("distmock.access")


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = int(getattr(response, "status_code", 500) or 500)
            return response
        finally:
            latency_ms = (time.perf_counter() - started) * 1000.0
            client_ip = request.client.host if request.client else "-"
            logger.info(
                '%s "%s %s" %d %.1fms',
                client_ip,
                request.method,
                request.url.path,
                status_code,
                latency_ms,
            )
