"""
User services - business logic for user management.

Every administrative change is written to the audit log.
"""

from typing import Any

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts import stytch_client
from apps.accounts.models import User
from apps.audit.constants import AuditAction
from apps.audit.services import create_audit_log, identity_of
from apps.core.logging import get_logger

logger = get_logger(__name__)

UPDATABLE_FIELDS = (
    "role",
    "username",
    "first_name",
    "last_name",
    "full_name",
    "photo_url",
    "is_active",
)


def list_users() -> QuerySet[User]:
    """All users ordered by username."""
    return User.objects.order_by("username")


def list_inspectors() -> QuerySet[User]:
    """Users who can be assigned inspections (inspectors and supervisors)."""
    return User.objects.filter(
        role__in=[User.Role.INSPECTOR, User.Role.SUPERVISOR],
    ).order_by("username")


def create_user(actor: User, email: str, username: str, **profile: Any) -> User:
    """
    Create a Stytch member and its local user profile.

    Raises:
        StytchError: If Stytch rejects the member (e.g. duplicate email)
    """
    name = profile.get("full_name") or " ".join(
        part for part in (profile.get("first_name"), profile.get("last_name")) if part
    )
    member_id = stytch_client.create_member(email, name=name)

    with transaction.atomic():
        user = User.objects.create_user(uid=member_id, email=email, username=username, **profile)
        create_audit_log(
            action=AuditAction.USER_CREATED,
            performed_by=identity_of(actor),
            target_user=identity_of(user),
            details={"role": user.role},
        )

    logger.info("user_created", uid=user.uid, role=user.role)
    return user


def _update_action(user: User, changes: dict[str, Any]) -> str:
    if set(changes) == {"is_active"}:
        return AuditAction.USER_ACTIVATED if changes["is_active"] else AuditAction.USER_DEACTIVATED
    return AuditAction.USER_UPDATED


def update_user(actor: User, user: User, changes: dict[str, Any]) -> User:
    """
    Apply a partial update to a user and record it.

    Fields whose value does not change are ignored. A change of the active
    flag alone is recorded as USER_ACTIVATED / USER_DEACTIVATED, anything
    else as USER_UPDATED. Nothing is written when nothing changed.

    Args:
        actor: Admin performing the update
        user: User being updated
        changes: Field name to new value, limited to UPDATABLE_FIELDS

    Returns:
        The updated user
    """
    applied = {
        name: value
        for name, value in changes.items()
        if name in UPDATABLE_FIELDS and getattr(user, name) != value
    }
    if not applied:
        return user

    with transaction.atomic():
        for name, value in applied.items():
            setattr(user, name, value)
        user.save(update_fields=[*applied, "updated_at"])

        create_audit_log(
            action=_update_action(user, applied),
            performed_by=identity_of(actor),
            target_user=identity_of(user),
            details={"changes": applied},
        )

    logger.info("user_updated", uid=user.uid, fields=sorted(applied))
    return user


def force_logout(actor: User, user: User) -> None:
    """
    Revoke all sessions of a user.

    Raises:
        StytchError: If Stytch rejects the call
    """
    stytch_client.revoke_member_sessions(user.uid)
    create_audit_log(
        action=AuditAction.FORCE_LOGOUT,
        performed_by=identity_of(actor),
        target_user=identity_of(user),
    )
    logger.info("user_sessions_revoked", uid=user.uid)


def send_password_reset(actor: User, user: User) -> None:
    """
    Email a password reset link to a user.

    Raises:
        ValueError: If the user has no email address
        StytchError: If Stytch rejects the call
    """
    if not user.email:
        raise ValueError("User has no email address")

    stytch_client.send_password_reset(user.email)
    create_audit_log(
        action=AuditAction.PASSWORD_RESET_SENT,
        performed_by=identity_of(actor),
        target_user=identity_of(user),
    )
    logger.info("password_reset_sent", uid=user.uid)
