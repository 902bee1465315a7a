"""
Shared pytest fixtures for all tests.

This module provides common fixtures used across multiple test modules.
Individual test modules can override these fixtures if needed.

Factories
---------
Import factories directly from their modules:

    from tests.accounts.factories import UserFactory
    from tests.inspections.factories import InspectionFactory
    from tests.notifications.factories import NotificationFactory

Example usage:

    @pytest.mark.django_db
    def test_something():
        admin = UserFactory.create(role="admin")
        InspectionFactory.create(inspector_name="Jane Doe")
"""

from collections.abc import Callable, Iterator
from io import BytesIO
from typing import Any, cast
from unittest.mock import MagicMock, patch

import pytest
from django.test import Client, RequestFactory
from django.test.client import WSGIRequest  # type: ignore[attr-defined]
from PIL import Image
from stytch.core.response_base import StytchError, StytchErrorDetails

from apps.core.auth import AuthContext
from apps.core.types import AuthenticatedHttpRequest


def make_request_with_auth(request: "WSGIRequest", auth: AuthContext) -> AuthenticatedHttpRequest:
    """
    Set auth on a request and return it typed as AuthenticatedHttpRequest.

    Example:
        request = request_factory.get("/api/v1/users/me")
        request = make_request_with_auth(request, AuthContext(uid=user.uid, user=user))
    """
    request.auth = auth  # type: ignore[attr-defined]
    return cast(AuthenticatedHttpRequest, request)


def make_stytch_error(error_type: str = "member_not_found", status_code: int = 404) -> StytchError:
    """Build a StytchError as raised by the Stytch client."""
    return StytchError(
        StytchErrorDetails(
            status_code=status_code,
            request_id="req-test",
            error_type=error_type,
            error_message=f"Stytch error: {error_type}",
            error_url="https://stytch.com/docs",
        )
    )


def create_test_image_bytes(width: int = 100, height: int = 100, format: str = "PNG") -> bytes:
    """Create a test image as bytes."""
    img = Image.new("RGB", (width, height), color="red")
    buffer = BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()


@pytest.fixture
def request_factory() -> RequestFactory:
    """
    Django request factory for unit testing views.

    Use this when you need to call Django Ninja endpoint functions directly
    without going through the full HTTP stack.
    """
    return RequestFactory()


@pytest.fixture
def api_client() -> Client:
    """
    Django test client for full HTTP request/response cycle tests.

    Example:
        def test_api_returns_200(api_client):
            response = api_client.get("/api/v1/health")
            assert response.status_code == 200
    """
    return Client()


@pytest.fixture
def mock_stytch() -> Iterator[MagicMock]:
    """
    Replace the Stytch client with a MagicMock for the duration of a test.

    Session JWTs authenticate to member_id "member-test-default" unless the
    test sets mock_stytch.sessions.authenticate_jwt.return_value itself.
    """
    client = MagicMock()
    client.sessions.authenticate_jwt.return_value.member_session.member_id = "member-test-default"
    with patch("apps.accounts.stytch_client.get_stytch_client", return_value=client):
        yield client


@pytest.fixture
def authenticated_request(
    request_factory: RequestFactory,
) -> Callable[..., AuthenticatedHttpRequest]:
    """
    Factory fixture for creating authenticated requests.

    Example:
        def test_endpoint(authenticated_request, admin_user):
            request = authenticated_request(admin_user, method="post", path="/")
            result = my_endpoint(request)
    """

    def _make_request(
        user: Any,
        method: str = "get",
        path: str = "/",
        data: dict | None = None,
        content_type: str = "application/json",
    ) -> AuthenticatedHttpRequest:
        method_func = getattr(request_factory, method.lower())
        kwargs: dict[str, Any] = {}
        if data is not None:
            kwargs["data"] = data
            kwargs["content_type"] = content_type

        request = method_func(path, **kwargs)
        return make_request_with_auth(request, AuthContext(uid=user.uid, user=user))

    return _make_request


@pytest.fixture
def admin_user(db):
    """Create a user with the admin role."""
    from tests.accounts.factories import UserFactory

    return UserFactory.create(role="admin", username="admin")


@pytest.fixture
def supervisor_user(db):
    """Create a user with the supervisor role."""
    from tests.accounts.factories import UserFactory

    return UserFactory.create(role="supervisor")


@pytest.fixture
def inspector_user(db):
    """Create a user with the inspector role."""
    from tests.accounts.factories import UserFactory

    return UserFactory.create(role="inspector")
