"""
Notification API schemas - Pydantic models for request/response.
"""

from datetime import datetime
from typing import Literal

from pydantic import Field

from apps.core.schemas import CamelSchema


class NotificationCreateRequest(CamelSchema):
    """Request to notify a user."""

    target_user: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Recipient username or email",
        examples=["jdoe"],
    )
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    type: Literal["info", "success", "alert"] = "info"


class NotificationResponse(CamelSchema):
    """A notification."""

    id: int
    target_user: str
    title: str
    message: str
    type: str
    read: bool
    created_at: datetime


class NotificationListResponse(CamelSchema):
    """Caller's notifications, newest first."""

    notifications: list[NotificationResponse]
    unread_count: int
