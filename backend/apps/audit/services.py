"""
Audit services - recording and querying administrative actions.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, TypedDict
from uuid import UUID

from django.db.models import QuerySet

from apps.audit.constants import DEFAULT_MAX_RESULTS
from apps.audit.models import AuditLog
from apps.core.logging import get_contextvars, get_logger

if TYPE_CHECKING:
    from apps.accounts.models import User

logger = get_logger(__name__)


class Identity(TypedDict):
    """Snapshot of a user's identity as written into an audit entry."""

    uid: str | None
    username: str | None
    email: str | None


@dataclass
class AuditLogFilters:
    """Optional filters for get_audit_logs."""

    action: str | None = None
    performed_by_uid: str | None = None
    target_user_uid: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


def identity_of(user: "User") -> Identity:
    """Snapshot a user's identity (taken before the user is modified or deleted)."""
    return Identity(uid=user.uid, username=user.username or None, email=user.email or None)


def _current_correlation_id() -> UUID | None:
    value = get_contextvars().get("correlation_id")
    if not value:
        return None
    try:
        return UUID(str(value))
    except ValueError:
        return None


def create_audit_log(
    action: str,
    performed_by: Identity,
    target_user: Identity,
    details: dict[str, Any] | None = None,
) -> AuditLog:
    """
    Append an audit log entry.

    Missing usernames are stored as "Unknown", missing uids and emails as
    null. The timestamp is assigned by the database layer on insert.

    Args:
        action: Action type, e.g. AuditAction.USER_UPDATED
        performed_by: Identity of the acting user
        target_user: Identity of the affected user
        details: Action-specific details

    Returns:
        The created AuditLog instance
    """
    entry = AuditLog.objects.create(
        action=action,
        performed_by_uid=performed_by.get("uid") or None,
        performed_by_username=performed_by.get("username") or "Unknown",
        performed_by_email=performed_by.get("email") or None,
        target_uid=target_user.get("uid") or None,
        target_username=target_user.get("username") or "Unknown",
        target_email=target_user.get("email") or None,
        details=details or {},
        correlation_id=_current_correlation_id(),
    )
    logger.info(
        "audit_log_created",
        action=action,
        audit_log_id=str(entry.id),
        performed_by_uid=entry.performed_by_uid,
        target_uid=entry.target_uid,
    )
    return entry


def get_audit_logs(
    filters: AuditLogFilters | None = None,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> list[AuditLog]:
    """
    Get audit log entries, newest first.

    Args:
        filters: Optional action / actor / target / date-range filters
        max_results: Maximum number of entries returned

    Returns:
        Matching entries ordered by timestamp descending
    """
    filters = filters or AuditLogFilters()
    queryset: QuerySet[AuditLog] = AuditLog.objects.all()

    if filters.action:
        queryset = queryset.filter(action=filters.action)
    if filters.performed_by_uid:
        queryset = queryset.filter(performed_by_uid=filters.performed_by_uid)
    if filters.target_user_uid:
        queryset = queryset.filter(target_uid=filters.target_user_uid)
    if filters.start_date:
        queryset = queryset.filter(timestamp__gte=filters.start_date)
    if filters.end_date:
        queryset = queryset.filter(timestamp__lte=filters.end_date)

    return list(queryset.order_by("-timestamp")[:max_results])
