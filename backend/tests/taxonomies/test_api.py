"""
Tests for dropdown taxonomy API endpoints.
"""

from unittest.mock import MagicMock

import pytest
from django.test import Client
from ninja.errors import HttpError

from apps.accounts.models import User
from apps.taxonomies.api import add_option, get_dropdown_options, remove_option
from apps.taxonomies.schemas import AddOptionRequest
from apps.taxonomies.services import seed_defaults
from tests.accounts.factories import UserFactory


@pytest.mark.django_db
class TestDropdownEndpoints:
    """Tests for dropdown endpoints."""

    def test_any_user_reads(self, authenticated_request, inspector_user: User) -> None:
        response = get_dropdown_options(authenticated_request(inspector_user))

        assert "Pressure Vessel" in response.options["types"]

    def test_supervisor_adds_trimmed_value(self, authenticated_request, supervisor_user: User) -> None:
        seed_defaults()

        response = add_option(
            authenticated_request(supervisor_user, method="post"), "orientations", AddOptionRequest(value=" Inclined ")
        )

        assert response.category == "orientations"
        assert response.values[-1] == "Inclined"

    def test_inspector_cannot_edit(self, authenticated_request, inspector_user: User) -> None:
        with pytest.raises(HttpError) as exc_info:
            add_option(authenticated_request(inspector_user, method="post"), "types", AddOptionRequest(value="Kiln"))
        assert exc_info.value.status_code == 403

    def test_unknown_category_is_bad_request(self, authenticated_request, admin_user: User) -> None:
        with pytest.raises(HttpError) as exc_info:
            remove_option(authenticated_request(admin_user, method="delete"), "colors", "Red")
        assert exc_info.value.status_code == 400

    def test_http_remove_value_containing_slash(self, api_client: Client, mock_stytch: MagicMock) -> None:
        UserFactory.create(uid="u1", role="admin")
        mock_stytch.sessions.authenticate_jwt.return_value.member_session.member_id = "u1"
        seed_defaults()

        response = api_client.delete(
            "/api/v1/settings/dropdowns/types/Column/Tower",
            HTTP_AUTHORIZATION="Bearer session-jwt",
        )

        assert response.status_code == 200
        body = response.json()
        assert body["category"] == "types"
        assert "Column/Tower" not in body["values"]
        assert "Reactor" in body["values"]
