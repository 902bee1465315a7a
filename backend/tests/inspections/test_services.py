"""
Tests for inspection services.
"""

from unittest.mock import MagicMock, patch

import pytest

from apps.inspections.exceptions import (
    DeletedInspectorError,
    EquipmentNotFoundError,
    InvalidStatusTransitionError,
    StatusPermissionError,
)
from apps.inspections.models import Inspection, InspectionPhoto, InspectionStatusLog
from apps.inspections.services import (
    add_photo,
    change_status,
    create_inspection,
    delete_inspection,
    delete_photo,
    find_inspector,
    list_inspections,
    status_history,
    update_inspection,
)
from apps.notifications.models import Notification
from tests.accounts.factories import UserFactory
from tests.conftest import create_test_image_bytes
from tests.equipment.factories import EquipmentFactory
from tests.inspections.factories import InspectionFactory, InspectionPhotoFactory


@pytest.mark.django_db
class TestListInspections:
    """Tests for list_inspections filters."""

    def test_filters(self) -> None:
        equipment = EquipmentFactory.create()
        match = InspectionFactory.create(inspector_name="Jane Doe", equipment=equipment, status="approved")
        InspectionFactory.create(inspector_name="Jane Doe", status="approved")
        InspectionFactory.create(inspector_name="Bob Ray", equipment=equipment, status="approved")
        InspectionFactory.create(inspector_name="Jane Doe", equipment=equipment, status="draft")

        result = list_inspections(inspector_name="Jane Doe", equipment_id=equipment.pk, status="approved")

        assert [i.pk for i in result] == [match.pk]

    def test_name_filter_is_exact(self) -> None:
        InspectionFactory.create(inspector_name="Jane Doe (Deleted)")

        assert not list_inspections(inspector_name="Jane Doe").exists()


@pytest.mark.django_db
class TestCreateInspection:
    """Tests for create_inspection."""

    def test_defaults_inspector_to_author(self) -> None:
        author = UserFactory.create(first_name="Jane", last_name="Doe")

        inspection = create_inspection(author, {"findings": "OK"})

        assert inspection.inspector_name == "Jane Doe"
        assert inspection.inspector_deleted is False

    def test_keeps_explicit_inspector(self) -> None:
        author = UserFactory.create(first_name="Jane", last_name="Doe")

        inspection = create_inspection(author, {"inspector_name": "Bob Ray"})

        assert inspection.inspector_name == "Bob Ray"

    def test_unknown_equipment(self) -> None:
        with pytest.raises(EquipmentNotFoundError):
            create_inspection(UserFactory.create(), {"equipment_id": 999})
        assert not Inspection.objects.exists()

    def test_logs_initial_status(self) -> None:
        author = UserFactory.create(first_name="Jane", last_name="Doe")

        inspection = create_inspection(author, {"findings": "OK"})

        entry = inspection.status_log.get()
        assert (entry.old_status, entry.new_status, entry.changed_by) == (None, "draft", "Jane Doe")

    def test_rejects_reviewed_initial_status(self) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            create_inspection(UserFactory.create(), {"status": "approved"})
        assert not Inspection.objects.exists()

    def test_submitted_notifies_supervisors(self) -> None:
        UserFactory.create(role="supervisor", username="sup1")
        UserFactory.create(role="supervisor", username="sup2")
        UserFactory.create(role="supervisor", username="gone", is_active=False)
        equipment = EquipmentFactory.create(tag_number="V-101")

        create_inspection(
            UserFactory.create(first_name="Jane", last_name="Doe"),
            {"status": "submitted", "equipment_id": equipment.pk},
        )

        notifications = Notification.objects.order_by("target_user")
        assert [n.target_user for n in notifications] == ["sup1", "sup2"]
        assert notifications[0].title == "Report Pending Review"
        assert notifications[0].message == "Jane Doe submitted an inspection report for V-101. Please review."


@pytest.mark.django_db
class TestUpdateInspection:
    """Tests for update_inspection."""

    def test_applies_changes_and_unlinks_equipment(self) -> None:
        inspection = InspectionFactory.create(equipment=EquipmentFactory.create(), findings="Old")

        update_inspection(inspection, {"recommendations": "Re-test in 2 years", "equipment_id": None, "findings": None})

        inspection.refresh_from_db()
        assert inspection.recommendations == "Re-test in 2 years"
        assert inspection.equipment_id is None
        assert inspection.findings == "Old"

    def test_unknown_equipment(self) -> None:
        inspection = InspectionFactory.create()

        with pytest.raises(EquipmentNotFoundError):
            update_inspection(inspection, {"equipment_id": 999})

    def test_deleted_inspector_cannot_be_renamed(self) -> None:
        inspection = InspectionFactory.create(inspector_name="Jane Doe (Deleted)", inspector_deleted=True)

        with pytest.raises(DeletedInspectorError):
            update_inspection(inspection, {"inspector_name": "Bob Ray"})

        inspection.refresh_from_db()
        assert inspection.inspector_name == "Jane Doe (Deleted)"

    def test_deleted_inspector_record_accepts_other_changes(self) -> None:
        inspection = InspectionFactory.create(inspector_name="Jane Doe (Deleted)", inspector_deleted=True)

        update_inspection(inspection, {"inspector_name": "Jane Doe (Deleted)", "findings": "Rechecked"})

        inspection.refresh_from_db()
        assert inspection.inspector_name == "Jane Doe (Deleted)"
        assert inspection.findings == "Rechecked"


@pytest.mark.django_db
class TestPhotos:
    """Tests for photo handling."""

    def test_add_photo_stores_image(self) -> None:
        inspection = InspectionFactory.create()

        photo = add_photo(inspection, "wall.png", create_test_image_bytes(20, 10), "image/png", caption="Wall")

        assert photo.storage_key.startswith("inspection_photos/")
        assert (photo.width, photo.height) == (20, 10)
        assert photo.caption == "Wall"
        assert list(inspection.photos.all()) == [photo]

    def test_delete_photo_removes_file(self) -> None:
        photo = InspectionPhotoFactory.create(storage_key="inspection_photos/a.jpg")

        with patch("apps.inspections.services.get_storage_service") as mock_storage:
            delete_photo(photo)

        assert not InspectionPhoto.objects.exists()
        mock_storage.return_value.delete.assert_called_once_with("inspection_photos/a.jpg")

    def test_delete_inspection_removes_photo_files(self) -> None:
        inspection = InspectionFactory.create()
        InspectionPhotoFactory.create(inspection=inspection, storage_key="inspection_photos/a.jpg")
        InspectionPhotoFactory.create(inspection=inspection, storage_key="inspection_photos/b.jpg")
        storage = MagicMock()

        with patch("apps.inspections.services.get_storage_service", return_value=storage):
            delete_inspection(inspection)

        assert not Inspection.objects.exists()
        assert not InspectionPhoto.objects.exists()
        deleted = sorted(call.args[0] for call in storage.delete.call_args_list)
        assert deleted == ["inspection_photos/a.jpg", "inspection_photos/b.jpg"]


@pytest.mark.django_db
class TestChangeStatus:
    """Tests for change_status and the status log."""

    def test_supervisor_approves_and_inspector_is_notified(self) -> None:
        UserFactory.create(first_name="Jane", last_name="Doe", username="jdoe")
        supervisor = UserFactory.create(role="supervisor", first_name="Sam", last_name="Lee")
        inspection = InspectionFactory.create(inspector_name="Jane Doe", status="submitted")

        change_status(inspection, "approved", supervisor)

        inspection.refresh_from_db()
        assert inspection.status == "approved"
        entry = InspectionStatusLog.objects.get(inspection=inspection)
        assert (entry.old_status, entry.new_status, entry.changed_by) == ("submitted", "approved", "Sam Lee")
        notification = Notification.objects.get()
        assert notification.target_user == "jdoe"
        assert notification.title == "Report Approved"
        assert notification.type == Notification.Type.SUCCESS
        assert notification.message == (
            f"Your inspection report for inspection #{inspection.pk} has been approved by Sam Lee."
        )

    def test_rejection_alerts_inspector(self) -> None:
        UserFactory.create(username="jdoe", email="jane@example.com")
        supervisor = UserFactory.create(role="supervisor")
        inspection = InspectionFactory.create(inspector_name="jane@example.com", status="submitted")

        change_status(inspection, "rejected", supervisor)

        notification = Notification.objects.get()
        assert notification.target_user == "jdoe"
        assert notification.title == "Report Rejected"
        assert notification.type == Notification.Type.ALERT

    @pytest.mark.parametrize("new_status", ["approved", "rejected"])
    @pytest.mark.parametrize("role", ["inspector", "admin"])
    def test_only_supervisors_review(self, role: str, new_status: str) -> None:
        inspection = InspectionFactory.create(status="submitted")

        with pytest.raises(StatusPermissionError):
            change_status(inspection, new_status, UserFactory.create(role=role))

        inspection.refresh_from_db()
        assert inspection.status == "submitted"
        assert not InspectionStatusLog.objects.exists()

    @pytest.mark.parametrize("new_status", ["draft", "submitted", "rejected"])
    def test_approved_is_final(self, new_status: str) -> None:
        inspection = InspectionFactory.create(status="approved")

        with pytest.raises(InvalidStatusTransitionError, match="from 'approved'"):
            change_status(inspection, new_status, UserFactory.create(role="supervisor"))

    def test_draft_cannot_skip_review(self) -> None:
        inspection = InspectionFactory.create(status="draft")

        with pytest.raises(InvalidStatusTransitionError):
            change_status(inspection, "approved", UserFactory.create(role="supervisor"))

    def test_resubmission_notifies_supervisors(self) -> None:
        UserFactory.create(role="supervisor", username="sup1")
        inspector = UserFactory.create(first_name="Jane", last_name="Doe")
        inspection = InspectionFactory.create(inspector_name="Jane Doe", status="rejected")

        change_status(inspection, "submitted", inspector)

        notification = Notification.objects.get()
        assert notification.target_user == "sup1"
        assert notification.title == "Report Pending Review"

    def test_saving_draft_again_is_logged_without_notification(self) -> None:
        UserFactory.create(role="supervisor")
        inspection = InspectionFactory.create(status="draft")

        change_status(inspection, "draft", UserFactory.create())

        assert InspectionStatusLog.objects.filter(inspection=inspection).count() == 1
        assert not Notification.objects.exists()

    def test_deleted_inspector_is_not_notified(self) -> None:
        UserFactory.create(username="Jane Doe (Deleted)")
        inspection = InspectionFactory.create(
            inspector_name="Jane Doe (Deleted)", inspector_deleted=True, status="submitted"
        )

        change_status(inspection, "approved", UserFactory.create(role="supervisor"))

        assert not Notification.objects.exists()

    def test_status_history_is_oldest_first(self) -> None:
        supervisor = UserFactory.create(role="supervisor")
        inspection = create_inspection(UserFactory.create(), {"status": "submitted"})
        change_status(inspection, "rejected", supervisor)
        change_status(inspection, "submitted", supervisor)

        history = [(e.old_status, e.new_status) for e in status_history(inspection)]

        assert history == [(None, "submitted"), ("submitted", "rejected"), ("rejected", "submitted")]


@pytest.mark.django_db
class TestFindInspector:
    """Tests for find_inspector."""

    def test_matches_first_and_last_name(self) -> None:
        user = UserFactory.create(first_name="Jane", last_name="Doe")

        assert find_inspector(InspectionFactory.create(inspector_name="Jane Doe")) == user

    def test_matches_username(self) -> None:
        user = UserFactory.create(username="jdoe")

        assert find_inspector(InspectionFactory.create(inspector_name="jdoe")) == user

    def test_unknown_name(self) -> None:
        UserFactory.create(username="jdoe")

        assert find_inspector(InspectionFactory.create(inspector_name="Bob Ray")) is None
