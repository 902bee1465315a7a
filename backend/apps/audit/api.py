"""
Audit log API endpoints (admin only).
"""

from datetime import datetime

from ninja import Router

from apps.audit.models import AuditLog
from apps.audit.schemas import AuditIdentity, AuditLogListResponse, AuditLogResponse
from apps.audit.services import AuditLogFilters, get_audit_logs
from apps.core.schemas import ErrorResponse
from apps.core.security import BearerAuth, get_auth_context
from apps.core.types import AuthenticatedHttpRequest

router = Router(tags=["audit"])
bearer_auth = BearerAuth()


def _to_response(entry: AuditLog) -> AuditLogResponse:
    return AuditLogResponse(
        id=entry.id,
        action=entry.action,
        performed_by=AuditIdentity(**entry.performed_by),
        target_user=AuditIdentity(**entry.target_user),
        details=entry.details,
        timestamp=entry.timestamp,
    )


@router.get(
    "/",
    response={200: AuditLogListResponse, 401: ErrorResponse, 403: ErrorResponse},
    auth=bearer_auth,
    operation_id="listAuditLogs",
    summary="List audit log entries",
)
def list_audit_logs(
    request: AuthenticatedHttpRequest,
    action: str | None = None,
    performed_by_uid: str | None = None,
    target_user_uid: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    limit: int = 100,
) -> AuditLogListResponse:
    """
    List audit log entries, newest first.

    Admin only.
    """
    get_auth_context(request).require_admin()

    logs = get_audit_logs(
        AuditLogFilters(
            action=action,
            performed_by_uid=performed_by_uid,
            target_user_uid=target_user_uid,
            start_date=start_date,
            end_date=end_date,
        ),
        max_results=max(1, min(limit, 500)),
    )

    return AuditLogListResponse(logs=[_to_response(entry) for entry in logs], count=len(logs))
