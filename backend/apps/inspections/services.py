"""
Inspection services - inspection records, status workflow and photo attachments.
"""

from typing import Any

from django.db import transaction
from django.db.models import Q, QuerySet, Value
from django.db.models.functions import Concat

from apps.accounts.models import User
from apps.core.logging import get_logger
from apps.equipment.models import Equipment
from apps.inspections.constants import INITIAL_STATUSES, REVIEW_STATUSES, VALID_TRANSITIONS
from apps.inspections.exceptions import (
    DeletedInspectorError,
    EquipmentNotFoundError,
    InvalidStatusTransitionError,
    StatusPermissionError,
)
from apps.inspections.models import Inspection, InspectionPhoto, InspectionStatusLog
from apps.media.services import get_storage_service
from apps.notifications.models import Notification
from apps.notifications.services import add_notification

logger = get_logger(__name__)

PHOTO_PREFIX = "inspection_photos"
NULLABLE_FIELDS = {"equipment_id", "inspection_date"}


def list_inspections(
    inspector_name: str | None = None,
    equipment_id: int | None = None,
    status: str | None = None,
) -> QuerySet[Inspection]:
    """Inspections matching the optional filters, newest first."""
    queryset = Inspection.objects.prefetch_related("photos").order_by("-created_at")

    if inspector_name:
        queryset = queryset.filter(inspector_name=inspector_name)
    if equipment_id is not None:
        queryset = queryset.filter(equipment_id=equipment_id)
    if status:
        queryset = queryset.filter(status=status)

    return queryset


def _check_equipment(equipment_id: int | None) -> None:
    if equipment_id is not None and not Equipment.objects.filter(pk=equipment_id).exists():
        raise EquipmentNotFoundError(f"Equipment {equipment_id} not found")


def _label(inspection: Inspection) -> str:
    if inspection.equipment_id is not None:
        return inspection.equipment.tag_number
    return f"inspection #{inspection.pk}"


def find_inspector(inspection: Inspection) -> User | None:
    """
    The user an inspection's inspector_name refers to, or None.

    Matches "first last", full_name, username or email exactly.
    Inspections of deleted inspectors never match.
    """
    if inspection.inspector_deleted:
        return None

    name = inspection.inspector_name
    return (
        User.objects.annotate(first_last=Concat("first_name", Value(" "), "last_name"))
        .filter(Q(first_last=name) | Q(full_name=name) | Q(username=name) | Q(email=name))
        .order_by("uid")
        .first()
    )


def _notify_status_change(inspection: Inspection, new_status: str, actor: User) -> None:
    label = _label(inspection)
    reviewer = actor.display_name or "a Supervisor"

    if new_status == Inspection.Status.SUBMITTED:
        addresses = {
            user.username or user.email
            for user in User.objects.filter(role=User.Role.SUPERVISOR, is_active=True)
            if user.username or user.email
        }
        for address in sorted(addresses):
            add_notification(
                address,
                "Report Pending Review",
                f"{actor.display_name or inspection.inspector_name} submitted an inspection report "
                f"for {label}. Please review.",
                Notification.Type.INFO,
            )
        return

    if new_status not in REVIEW_STATUSES:
        return

    inspector = find_inspector(inspection)
    address = inspector and (inspector.username or inspector.email)
    if not address:
        logger.info("status_notification_skipped", inspection_id=inspection.pk, reason="inspector_not_found")
        return

    if new_status == Inspection.Status.APPROVED:
        add_notification(
            address,
            "Report Approved",
            f"Your inspection report for {label} has been approved by {reviewer}.",
            Notification.Type.SUCCESS,
        )
    else:
        add_notification(
            address,
            "Report Rejected",
            f"Your inspection report for {label} was rejected by {reviewer}. "
            "Please review the feedback and resubmit.",
            Notification.Type.ALERT,
        )


def _check_reviewer(actor: User, new_status: str) -> None:
    if new_status in REVIEW_STATUSES and actor.role != User.Role.SUPERVISOR:
        verb = "approve" if new_status == Inspection.Status.APPROVED else "reject"
        raise StatusPermissionError(f"Only supervisors can {verb} inspections.")


def create_inspection(author: User, data: dict[str, Any]) -> Inspection:
    """
    Record an inspection.

    The inspector name defaults to the author's display name. New
    inspections start as draft or submitted; the creation is logged.

    Raises:
        EquipmentNotFoundError: If equipment_id does not exist
        InvalidStatusTransitionError: If the initial status is not allowed
    """
    _check_equipment(data.get("equipment_id"))
    status = data.get("status") or Inspection.Status.DRAFT
    if status not in INITIAL_STATUSES:
        raise InvalidStatusTransitionError(f"Inspections cannot be created as '{status}'")
    if not data.get("inspector_name"):
        data = {**data, "inspector_name": author.display_name}

    with transaction.atomic():
        inspection = Inspection.objects.create(**{**data, "status": status})
        InspectionStatusLog.objects.create(
            inspection=inspection,
            old_status=None,
            new_status=status,
            changed_by=author.display_name or "Unknown",
        )

    if status == Inspection.Status.SUBMITTED:
        _notify_status_change(inspection, status, author)

    logger.info(
        "inspection_created",
        inspection_id=inspection.pk,
        equipment_id=inspection.equipment_id,
        status=status,
        author_uid=author.uid,
    )
    return inspection


def change_status(inspection: Inspection, new_status: str, actor: User) -> Inspection:
    """
    Move an inspection to a new status.

    Approving and rejecting are reserved to supervisors. The change is
    logged and the inspector (on review) or the supervisors (on
    submission) are notified.

    Raises:
        StatusPermissionError: If the actor's role may not set new_status
        InvalidStatusTransitionError: If new_status cannot follow the current status
    """
    _check_reviewer(actor, new_status)

    old_status = inspection.status
    if new_status not in VALID_TRANSITIONS.get(old_status, frozenset()):
        raise InvalidStatusTransitionError(f"Cannot change status from '{old_status}' to '{new_status}'")

    with transaction.atomic():
        inspection.status = new_status
        inspection.save(update_fields=["status", "updated_at"])
        InspectionStatusLog.objects.create(
            inspection=inspection,
            old_status=old_status,
            new_status=new_status,
            changed_by=actor.display_name or "Unknown",
        )

    logger.info(
        "inspection_status_changed",
        inspection_id=inspection.pk,
        old_status=old_status,
        new_status=new_status,
        changed_by_uid=actor.uid,
    )
    if new_status != old_status:
        _notify_status_change(inspection, new_status, actor)
    return inspection


def update_inspection(inspection: Inspection, changes: dict[str, Any]) -> Inspection:
    """
    Apply a partial update. Status changes go through change_status.

    Raises:
        EquipmentNotFoundError: If equipment_id is changed to a missing equipment
        DeletedInspectorError: If the inspector of a deleted user's record is renamed
    """
    changes = {name: value for name, value in changes.items() if value is not None or name in NULLABLE_FIELDS}
    if not changes:
        return inspection

    if (
        inspection.inspector_deleted
        and "inspector_name" in changes
        and changes["inspector_name"] != inspection.inspector_name
    ):
        raise DeletedInspectorError("The inspector of this inspection was deleted; the name cannot be changed")

    if "equipment_id" in changes:
        _check_equipment(changes["equipment_id"])

    for name, value in changes.items():
        setattr(inspection, name, value)
    inspection.save(update_fields=[*changes, "updated_at"])
    logger.info("inspection_updated", inspection_id=inspection.pk, fields=sorted(changes))
    return inspection


def status_history(inspection: Inspection) -> QuerySet[InspectionStatusLog]:
    """Status changes of an inspection, oldest first."""
    return inspection.status_log.order_by("timestamp", "id")


def delete_inspection(inspection: Inspection) -> None:
    """Delete an inspection together with its photo files."""
    keys = list(inspection.photos.values_list("storage_key", flat=True))
    inspection_id = inspection.pk
    inspection.delete()

    storage = get_storage_service()
    for key in keys:
        storage.delete(key)
    logger.info("inspection_deleted", inspection_id=inspection_id, photos_deleted=len(keys))


def add_photo(
    inspection: Inspection,
    filename: str,
    content: bytes,
    content_type: str,
    caption: str = "",
) -> InspectionPhoto:
    """
    Store a photo and attach it to the inspection.

    Raises:
        StorageValidationError: If the file type or size is not allowed
    """
    stored = get_storage_service().save_image(PHOTO_PREFIX, filename, content, content_type)
    return InspectionPhoto.objects.create(
        inspection=inspection,
        storage_key=stored.key,
        url=stored.url,
        caption=caption,
        content_type=stored.content_type,
        size_bytes=stored.size_bytes,
        width=stored.width,
        height=stored.height,
    )


def delete_photo(photo: InspectionPhoto) -> None:
    """Remove a photo from its inspection and from storage."""
    key = photo.storage_key
    photo.delete()
    get_storage_service().delete(key)
