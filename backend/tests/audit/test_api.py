"""
Tests for audit log API endpoints.
"""

import pytest
from ninja.errors import HttpError

from apps.accounts.models import User
from apps.audit.api import list_audit_logs
from apps.audit.constants import AuditAction
from apps.audit.services import create_audit_log, identity_of


@pytest.mark.django_db
class TestListAuditLogs:
    """Tests for list_audit_logs endpoint."""

    def test_admin_lists_entries(self, authenticated_request, admin_user: User, inspector_user: User) -> None:
        create_audit_log(AuditAction.FORCE_LOGOUT, identity_of(admin_user), identity_of(inspector_user))

        response = list_audit_logs(authenticated_request(admin_user))

        assert response.count == 1
        entry = response.logs[0]
        assert entry.action == "FORCE_LOGOUT"
        assert entry.performed_by.username == "admin"
        assert entry.target_user.uid == inspector_user.uid

    def test_filters_by_action(self, authenticated_request, admin_user: User, inspector_user: User) -> None:
        create_audit_log(AuditAction.FORCE_LOGOUT, identity_of(admin_user), identity_of(inspector_user))
        create_audit_log(AuditAction.USER_UPDATED, identity_of(admin_user), identity_of(inspector_user))

        response = list_audit_logs(authenticated_request(admin_user), action=AuditAction.USER_UPDATED)

        assert [e.action for e in response.logs] == ["USER_UPDATED"]

    def test_limit_is_clamped(self, authenticated_request, admin_user: User, inspector_user: User) -> None:
        for _ in range(3):
            create_audit_log(AuditAction.USER_UPDATED, identity_of(admin_user), identity_of(inspector_user))

        assert list_audit_logs(authenticated_request(admin_user), limit=0).count == 1

    def test_supervisor_is_forbidden(self, authenticated_request, supervisor_user: User) -> None:
        with pytest.raises(HttpError) as exc_info:
            list_audit_logs(authenticated_request(supervisor_user))
        assert exc_info.value.status_code == 403
