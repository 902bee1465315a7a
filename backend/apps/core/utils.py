"""
Core utility functions.
"""

from django.http import HttpRequest
from django.utils import timezone


def get_client_ip(request: HttpRequest) -> str | None:
    """
    Extract client IP from X-Forwarded-For or REMOTE_ADDR.

    X-Forwarded-For may hold a proxy chain; the first entry is the
    original client.
    """
    x_forwarded_for: str | None = request.META.get("HTTP_X_FORWARDED_FOR")
    if x_forwarded_for:
        return x_forwarded_for.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR") or None


def iso_now() -> str:
    """Current UTC time as an ISO-8601 string."""
    return timezone.now().isoformat()
