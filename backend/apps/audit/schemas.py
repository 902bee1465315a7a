"""
Audit API schemas - Pydantic models for responses.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class AuditIdentity(BaseModel):
    """Identity of a user as recorded in an audit entry."""

    uid: str | None = Field(default=None, description="User identifier")
    username: str = Field(..., description="Username at the time of the action")
    email: str | None = Field(default=None, description="Email at the time of the action")


class AuditLogResponse(BaseModel):
    """A single audit log entry."""

    id: UUID
    action: str = Field(..., description="Action type, e.g. 'USER_DELETED_COMPLETE'")
    performed_by: AuditIdentity
    target_user: AuditIdentity
    details: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime


class AuditLogListResponse(BaseModel):
    """List of audit log entries, newest first."""

    logs: list[AuditLogResponse]
    count: int
