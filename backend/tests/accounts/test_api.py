"""
Tests for user API endpoints.
"""

from unittest.mock import MagicMock

import pytest
from django.test import Client
from ninja.errors import HttpError

from apps.accounts.api import (
    create_user,
    delete_user,
    force_logout,
    get_current_user,
    list_inspectors,
    list_users,
    send_password_reset,
    update_user,
)
from apps.accounts.models import User
from apps.accounts.schemas import CreateUserRequest, DeleteUserRequest, UpdateUserRequest
from apps.audit.constants import AuditAction
from apps.audit.models import AuditLog
from apps.core.auth import AuthContext
from tests.accounts.factories import UserFactory
from tests.conftest import make_request_with_auth, make_stytch_error
from tests.inspections.factories import InspectionFactory


@pytest.mark.django_db
class TestGetCurrentUser:
    """Tests for get_current_user endpoint."""

    def test_returns_profile(self, authenticated_request, inspector_user: User) -> None:
        response = get_current_user(authenticated_request(inspector_user))

        assert response.uid == inspector_user.uid
        assert response.role == "inspector"
        assert response.email == inspector_user.email

    def test_principal_without_profile_is_forbidden(self, request_factory) -> None:
        request = make_request_with_auth(request_factory.get("/"), AuthContext(uid="member-orphan"))

        with pytest.raises(HttpError) as exc_info:
            get_current_user(request)
        assert exc_info.value.status_code == 403

    def test_inactive_user_is_forbidden(self, authenticated_request) -> None:
        user = UserFactory.create(is_active=False)

        with pytest.raises(HttpError) as exc_info:
            get_current_user(authenticated_request(user))
        assert exc_info.value.status_code == 403


@pytest.mark.django_db
class TestListUsers:
    """Tests for list_users and list_inspectors endpoints."""

    def test_admin_lists_all_users_by_username(self, authenticated_request, admin_user: User) -> None:
        UserFactory.create(username="zed")
        UserFactory.create(username="amy")

        response = list_users(authenticated_request(admin_user))

        assert response.count == 3
        assert [u.username for u in response.users] == ["admin", "amy", "zed"]

    def test_non_admin_is_forbidden(self, authenticated_request, inspector_user: User) -> None:
        with pytest.raises(HttpError) as exc_info:
            list_users(authenticated_request(inspector_user))
        assert exc_info.value.status_code == 403

    def test_inspectors_excludes_admins(
        self, authenticated_request, admin_user: User, supervisor_user: User, inspector_user: User
    ) -> None:
        response = list_inspectors(authenticated_request(inspector_user))

        assert {u.uid for u in response.users} == {supervisor_user.uid, inspector_user.uid}


@pytest.mark.django_db
class TestCreateUser:
    """Tests for create_user endpoint."""

    def test_creates_member_and_profile(
        self, authenticated_request, admin_user: User, mock_stytch: MagicMock
    ) -> None:
        mock_stytch.organizations.members.create.return_value.member.member_id = "member-test-new"
        payload = CreateUserRequest(email="new@x.com", username="newbie", role="supervisor", firstName="New")

        status, response = create_user(authenticated_request(admin_user, method="post"), payload)

        assert status == 201
        assert response.uid == "member-test-new"
        user = User.objects.get(uid="member-test-new")
        assert user.role == "supervisor"
        assert user.first_name == "New"
        assert AuditLog.objects.get().action == AuditAction.USER_CREATED
        mock_stytch.organizations.members.create.assert_called_once_with(
            organization_id="organization-test-00000000",
            email_address="new@x.com",
            name="New",
        )

    def test_stytch_rejection_is_bad_request(
        self, authenticated_request, admin_user: User, mock_stytch: MagicMock
    ) -> None:
        mock_stytch.organizations.members.create.side_effect = make_stytch_error("duplicate_email", 400)
        payload = CreateUserRequest(email="dup@x.com", username="dup")

        with pytest.raises(HttpError) as exc_info:
            create_user(authenticated_request(admin_user, method="post"), payload)

        assert exc_info.value.status_code == 400
        assert not User.objects.filter(email="dup@x.com").exists()


@pytest.mark.django_db
class TestUpdateUser:
    """Tests for update_user endpoint."""

    def test_updates_fields_and_audits(self, authenticated_request, admin_user: User) -> None:
        target = UserFactory.create(role="inspector")

        response = update_user(
            authenticated_request(admin_user, method="patch"),
            target.uid,
            UpdateUserRequest(role="supervisor", fullName="Jane Q. Doe"),
        )

        assert response.role == "supervisor"
        assert response.full_name == "Jane Q. Doe"
        entry = AuditLog.objects.get()
        assert entry.action == AuditAction.USER_UPDATED
        assert entry.details == {"changes": {"role": "supervisor", "full_name": "Jane Q. Doe"}}

    def test_deactivation_is_audited_as_such(self, authenticated_request, admin_user: User) -> None:
        target = UserFactory.create()

        update_user(authenticated_request(admin_user, method="patch"), target.uid, UpdateUserRequest(isActive=False))

        assert AuditLog.objects.get().action == AuditAction.USER_DEACTIVATED

    def test_missing_user_is_not_found(self, authenticated_request, admin_user: User) -> None:
        with pytest.raises(HttpError) as exc_info:
            update_user(authenticated_request(admin_user, method="patch"), "nobody", UpdateUserRequest(role="admin"))
        assert exc_info.value.status_code == 404


@pytest.mark.django_db
class TestSessionAdministration:
    """Tests for force_logout and send_password_reset endpoints."""

    def test_force_logout_revokes_sessions(
        self, authenticated_request, admin_user: User, mock_stytch: MagicMock
    ) -> None:
        target = UserFactory.create()

        force_logout(authenticated_request(admin_user, method="post"), target.uid)

        mock_stytch.sessions.revoke.assert_called_once_with(member_id=target.uid)
        assert AuditLog.objects.get().action == AuditAction.FORCE_LOGOUT

    def test_password_reset_sends_email(
        self, authenticated_request, admin_user: User, mock_stytch: MagicMock
    ) -> None:
        target = UserFactory.create(email="jane@x.com")

        response = send_password_reset(authenticated_request(admin_user, method="post"), target.uid)

        assert response.message == "Password reset sent to jane@x.com"
        mock_stytch.passwords.email.reset_start.assert_called_once_with(
            organization_id="organization-test-00000000",
            email_address="jane@x.com",
        )
        assert AuditLog.objects.get().action == AuditAction.PASSWORD_RESET_SENT

    def test_password_reset_without_email(self, authenticated_request, admin_user: User) -> None:
        target = UserFactory.create(email="")

        with pytest.raises(HttpError) as exc_info:
            send_password_reset(authenticated_request(admin_user, method="post"), target.uid)
        assert exc_info.value.status_code == 400


@pytest.mark.django_db
class TestDeleteUserEndpoint:
    """Tests for delete_user endpoint error mapping."""

    @pytest.mark.parametrize(
        ("caller_role", "uid", "expected_status", "expected_code"),
        [
            ("inspector", "u2", 403, "permission-denied"),
            ("admin", "", 400, "invalid-argument"),
            ("admin", "u-missing", 404, "not-found"),
        ],
    )
    def test_maps_errors_to_status_and_code(
        self,
        authenticated_request,
        mock_stytch: MagicMock,
        caller_role: str,
        uid: str,
        expected_status: int,
        expected_code: str,
    ) -> None:
        caller = UserFactory.create(role=caller_role)
        UserFactory.create(uid="u2")

        status, error = delete_user(authenticated_request(caller, method="post"), DeleteUserRequest(uid=uid))

        assert status == expected_status
        assert error.code == expected_code

    def test_self_deletion_is_failed_precondition(self, authenticated_request, admin_user: User) -> None:
        status, error = delete_user(
            authenticated_request(admin_user, method="post"), DeleteUserRequest(uid=admin_user.uid)
        )

        assert status == 400
        assert error.code == "failed-precondition"
        assert error.detail == "Cannot delete your own account."

    def test_unauthenticated_context(self, request_factory) -> None:
        request = make_request_with_auth(request_factory.post("/"), AuthContext())

        status, error = delete_user(request, DeleteUserRequest(uid="u2"))

        assert status == 401
        assert error.code == "unauthenticated"

    def test_http_round_trip_uses_camel_case(self, api_client: Client, mock_stytch: MagicMock) -> None:
        UserFactory.create(uid="u1", role="admin")
        UserFactory.create(uid="u2", username="", email="jane@x.com", first_name="Jane", last_name="Doe")
        InspectionFactory.create_batch(2, inspector_name="Jane Doe")
        mock_stytch.sessions.authenticate_jwt.return_value.member_session.member_id = "u1"

        response = api_client.post(
            "/api/v1/users/delete-complete",
            data={"uid": "u2"},
            content_type="application/json",
            HTTP_AUTHORIZATION="Bearer session-jwt",
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "User deleted. Inspections preserved with inspector marked as deleted.",
            "deletedItems": ["auth", "firestore-user"],
            "updatedItems": ["inspections:2"],
        }

    def test_http_missing_token_is_unauthorized(self, api_client: Client) -> None:
        response = api_client.post("/api/v1/users/delete-complete", data={"uid": "u2"}, content_type="application/json")

        assert response.status_code == 401

    def test_http_error_bodies_distinguish_bad_requests(self, api_client: Client, mock_stytch: MagicMock) -> None:
        UserFactory.create(uid="u1", role="admin")
        mock_stytch.sessions.authenticate_jwt.return_value.member_session.member_id = "u1"

        own_account = api_client.post(
            "/api/v1/users/delete-complete",
            data={"uid": "u1"},
            content_type="application/json",
            HTTP_AUTHORIZATION="Bearer session-jwt",
        )
        missing_uid = api_client.post(
            "/api/v1/users/delete-complete",
            data={"uid": ""},
            content_type="application/json",
            HTTP_AUTHORIZATION="Bearer session-jwt",
        )

        assert own_account.status_code == 400
        assert own_account.json() == {"detail": "Cannot delete your own account.", "code": "failed-precondition"}
        assert missing_uid.status_code == 400
        assert missing_uid.json() == {"detail": "User ID is required.", "code": "invalid-argument"}
