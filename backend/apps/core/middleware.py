"""
Core middleware.
"""

import time
from collections.abc import Callable
from uuid import UUID, uuid4

from django.http import HttpRequest, HttpResponse

from apps.core.logging import bind_contextvars, clear_contextvars, get_logger
from apps.core.utils import get_client_ip

logger = get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware:
    """
    Assigns a correlation ID to every request.

    Reuses a valid UUID from the X-Correlation-ID header or generates one,
    binds it (with client IP and user agent) to the structured log context,
    and echoes it back in the response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = self._get_or_create_correlation_id(request)
        request.correlation_id = correlation_id  # type: ignore[attr-defined]

        clear_contextvars()
        bind_contextvars(
            correlation_id=str(correlation_id),
            **{
                "request.ip_address": get_client_ip(request),
                "request.user_agent": request.headers.get("User-Agent", ""),
                "http.method": request.method,
                "http.url_details.path": request.path,
            },
        )

        start = time.monotonic()
        try:
            response = self.get_response(request)
            logger.info(
                "request_finished",
                **{"http.status_code": response.status_code},
                duration_ms=(time.monotonic() - start) * 1000,
            )
            response[CORRELATION_ID_HEADER] = str(correlation_id)
            return response
        finally:
            clear_contextvars()

    @staticmethod
    def _get_or_create_correlation_id(request: HttpRequest) -> UUID:
        header_value = request.headers.get(CORRELATION_ID_HEADER)
        if header_value:
            try:
                return UUID(header_value)
            except ValueError:
                pass
        return uuid4()
