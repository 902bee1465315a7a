"""
Tests for user services.
"""

import pytest

from apps.accounts.models import User
from apps.accounts.services import list_inspectors, update_user
from apps.audit.constants import AuditAction
from apps.audit.models import AuditLog
from tests.accounts.factories import UserFactory


@pytest.mark.django_db
class TestUpdateUser:
    """Tests for update_user."""

    def test_unchanged_values_write_nothing(self, admin_user: User) -> None:
        target = UserFactory.create(role="inspector", username="jdoe")

        update_user(admin_user, target, {"role": "inspector", "username": "jdoe"})

        assert AuditLog.objects.count() == 0

    def test_ignores_unknown_fields(self, admin_user: User) -> None:
        target = UserFactory.create(uid="member-test-keep")

        update_user(admin_user, target, {"uid": "member-test-other", "is_staff": True})

        target.refresh_from_db()
        assert target.uid == "member-test-keep"
        assert target.is_staff is False
        assert AuditLog.objects.count() == 0

    def test_reactivation(self, admin_user: User) -> None:
        target = UserFactory.create(is_active=False)

        update_user(admin_user, target, {"is_active": True})

        target.refresh_from_db()
        assert target.is_active is True
        entry = AuditLog.objects.get()
        assert entry.action == AuditAction.USER_ACTIVATED
        assert entry.performed_by_uid == admin_user.uid
        assert entry.target_uid == target.uid

    def test_active_flag_with_other_fields_is_plain_update(self, admin_user: User) -> None:
        target = UserFactory.create()

        update_user(admin_user, target, {"is_active": False, "role": "supervisor"})

        assert AuditLog.objects.get().action == AuditAction.USER_UPDATED


@pytest.mark.django_db
def test_list_inspectors_includes_supervisors() -> None:
    UserFactory.create(role="admin", username="a")
    supervisor = UserFactory.create(role="supervisor", username="b")
    inspector = UserFactory.create(role="inspector", username="c")

    assert list(list_inspectors()) == [supervisor, inspector]
