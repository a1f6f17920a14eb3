from __future__ import annotations

import logging
import time
import uuid

from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from catalog_api.context import reset_correlation_id, set_correlation_id
from catalog_api.metrics import observe_http_request, resolve_http_path_label


CORRELATION_HEADER = "x-correlation-id"

logger = logging.getLogger("catalog_api.request")


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Binds one correlation id to the request, its logs, its span and its response."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[no-untyped-def]
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        token = set_correlation_id(correlation_id)

        span = trace.get_current_span()
        if span.is_recording():
            span.set_attribute("correlation_id", correlation_id)

        try:
            response = await call_next(request)
        finally:
            reset_correlation_id(token)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore[no-untyped-def]
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._record(request, 500, started, failed=True)
            raise

        self._record(request, response.status_code, started)
        return response

    @staticmethod
    def _record(request: Request, status_code: int, started: float, *, failed: bool = False) -> None:
        # route is only resolved once the router has run, so read it afterwards
        path = resolve_http_path_label(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        observe_http_request(method=request.method, path=path, status=status_code, duration=duration_ms / 1000)

        fields = {
            "method": request.method,
            "path": path,
            "status_code": status_code,
            "duration_ms": duration_ms,
        }
        if failed:
            logger.error("http.error", exc_info=True, extra=fields)
        else:
            logger.info("http.request", extra=fields)
