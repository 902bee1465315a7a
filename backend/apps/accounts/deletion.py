"""
Complete user deletion.

Removes a user from Stytch and from the local database while keeping
their inspection history. Inspections reference inspectors by name, so
they are matched by every name the user may have been recorded under and
re-labelled with a " (Deleted)" suffix instead of being removed.

The steps run one after another without a surrounding transaction.
A failure part-way leaves the earlier steps applied.
"""

from dataclasses import dataclass, field

from django.utils import timezone
from stytch.core.response_base import StytchError

from apps.accounts.exceptions import (
    FailedPreconditionError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    PermissionDeniedError,
    UnauthenticatedError,
)
from apps.accounts.models import User
from apps.accounts.stytch_client import delete_member
from apps.audit.constants import AuditAction
from apps.audit.services import Identity, create_audit_log
from apps.core.logging import get_logger
from apps.core.utils import iso_now
from apps.inspections.models import Inspection
from apps.notifications.models import Notification

logger = get_logger(__name__)

DELETION_MARKER = " (Deleted)"
SUCCESS_MESSAGE = "User deleted. Inspections preserved with inspector marked as deleted."


@dataclass
class DeletionResult:
    """Outcome of a complete user deletion.

    Attributes:
        deleted_items: Tags of removed data, e.g. "auth", "notifications:3".
        updated_items: Tags of preserved-but-modified data, e.g. "inspections:2".
    """

    success: bool = True
    message: str = SUCCESS_MESSAGE
    deleted_items: list[str] = field(default_factory=list)
    updated_items: list[str] = field(default_factory=list)


def candidate_names(user: User) -> list[str]:
    """
    Names the user's inspections may be recorded under, most specific first.

    Duplicates are kept; a repeated name simply matches nothing on its
    second pass because the first pass already renamed the records.
    """
    names = []
    if user.first_name and user.last_name:
        names.append(f"{user.first_name} {user.last_name}")
    if user.full_name:
        names.append(user.full_name)
    if user.username:
        names.append(user.username)
    if user.email:
        names.append(user.email)
    return names


def mark_inspections_deleted(names: list[str], uid: str, email: str | None) -> int:
    """
    Re-label inspections written by the user as belonging to a deleted inspector.

    Each name is matched exactly and all its inspections are updated in a
    single statement. Names already carrying the marker are skipped so
    records are never marked twice.

    Returns:
        Number of inspections updated
    """
    deleted_at = timezone.now()
    total = 0

    for name in names:
        if DELETION_MARKER.strip() in name:
            continue

        updated = Inspection.objects.filter(inspector_name=name).update(
            inspector_deleted=True,
            inspector_deleted_at=deleted_at,
            inspector_name=f"{name}{DELETION_MARKER}",
            original_inspector_name=name,
            original_inspector_id=uid,
            original_inspector_email=email or None,
        )
        logger.info("inspections_marked_deleted", inspector_name=name, count=updated)
        total += updated

    return total


def delete_user_notifications(email: str, username: str) -> int:
    """
    Delete notifications addressed to the user's email or username.

    Returns:
        Sum of the email and username match counts
    """
    matched_ids: list[int] = []
    for target in (email, username):
        if target:
            matched_ids.extend(
                Notification.objects.filter(target_user=target).values_list("id", flat=True)
            )

    if matched_ids:
        Notification.objects.filter(id__in=set(matched_ids)).delete()
    return len(matched_ids)


def _check_preconditions(caller_uid: str | None, target_uid: str) -> tuple[User, User]:
    if not caller_uid:
        raise UnauthenticatedError("User must be authenticated.")

    caller = User.objects.filter(uid=caller_uid).first()
    if caller is None or caller.role != User.Role.ADMIN:
        raise PermissionDeniedError("Only admins can delete users.")

    if not target_uid:
        raise InvalidArgumentError("User ID is required.")

    if target_uid == caller_uid:
        raise FailedPreconditionError("Cannot delete your own account.")

    target = User.objects.filter(uid=target_uid).first()
    if target is None:
        raise NotFoundError("User not found.")

    return caller, target


def delete_user_complete(caller_uid: str | None, target_uid: str) -> DeletionResult:
    """
    Delete a user everywhere while preserving their inspections.

    Steps:
    1. Delete the Stytch member (any failure is logged and tolerated)
    2. Delete the local user record
    3. Mark the user's inspections as written by a deleted inspector
    4. Delete notifications addressed to the user
    5. Write a USER_DELETED_COMPLETE audit log entry

    Args:
        caller_uid: uid of the authenticated caller, None if unauthenticated
        target_uid: uid of the user to delete

    Returns:
        DeletionResult listing what was deleted and what was updated

    Raises:
        UnauthenticatedError: Caller is not authenticated
        PermissionDeniedError: Caller is not an admin
        InvalidArgumentError: target_uid is empty
        FailedPreconditionError: Caller tried to delete themselves
        NotFoundError: Target user does not exist
        InternalError: Any later step failed; earlier steps stay applied
    """
    caller, target = _check_preconditions(caller_uid, target_uid)

    names = candidate_names(target)
    email, username = target.email, target.username
    target_identity = Identity(
        uid=target.uid,
        username=target.username or "Unknown",
        email=target.email or None,
    )
    logger.info(
        "user_deletion_started",
        target_uid=target.uid,
        performed_by_uid=caller.uid,
        searched_names=names,
    )

    result = DeletionResult()
    try:
        try:
            delete_member(target.uid)
            result.deleted_items.append("auth")
        except Exception as e:
            logger.warning(
                "identity_delete_failed",
                target_uid=target.uid,
                error=e.details.error_message if isinstance(e, StytchError) else str(e),
            )

        target.delete()
        result.deleted_items.append("firestore-user")

        inspections_updated = mark_inspections_deleted(names, target_uid, email)
        if inspections_updated > 0:
            result.updated_items.append(f"inspections:{inspections_updated}")

        notifications_deleted = delete_user_notifications(email, username)
        if notifications_deleted > 0:
            result.deleted_items.append(f"notifications:{notifications_deleted}")

        create_audit_log(
            action=AuditAction.USER_DELETED_COMPLETE,
            performed_by=Identity(
                uid=caller.uid,
                username=caller.username or "Admin",
                email=caller.email or None,
            ),
            target_user=target_identity,
            details={
                "deletedItems": result.deleted_items,
                "updatedItems": result.updated_items,
                "inspectionsPreserved": inspections_updated,
                "searchedNames": names,
                "deletedAt": iso_now(),
            },
        )
    except Exception as e:
        logger.error(
            "user_deletion_failed",
            target_uid=target_identity["uid"],
            deleted_items=result.deleted_items,
            updated_items=result.updated_items,
            error=str(e),
        )
        raise InternalError(str(e)) from e

    logger.info(
        "user_deletion_completed",
        target_uid=target_identity["uid"],
        deleted_items=result.deleted_items,
        updated_items=result.updated_items,
    )
    return result
