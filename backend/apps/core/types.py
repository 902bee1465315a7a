"""
Custom type definitions for the application.

These types help mypy understand custom attributes added by middleware
and authentication.
"""

from uuid import UUID

from django.http import HttpRequest

from apps.core.auth import AuthContext


class AuthenticatedHttpRequest(HttpRequest):
    """
    HttpRequest after CorrelationIdMiddleware and BearerAuth have run.

    Use this type for endpoints that require authentication.
    """

    auth: AuthContext
    correlation_id: UUID
