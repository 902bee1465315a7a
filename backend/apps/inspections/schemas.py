"""
Inspection API schemas - Pydantic models for request/response.
"""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import Field

from apps.core.schemas import CamelSchema

InspectionStatus = Literal["draft", "submitted", "approved", "rejected"]


class InspectionCreateRequest(CamelSchema):
    """Request to record an inspection."""

    inspector_name: str | None = Field(
        default=None,
        max_length=255,
        description="Defaults to the caller's display name",
    )
    equipment_id: int | None = None
    inspection_date: date | None = None
    status: InspectionStatus = Field(default="draft", description="New inspections start as draft or submitted")
    findings: str = ""
    recommendations: str = ""
    data: dict[str, Any] = Field(default_factory=dict, description="Inspection form fields")


class InspectionUpdateRequest(CamelSchema):
    """Partial update of an inspection. Omitted fields are unchanged; status has its own endpoint."""

    inspector_name: str | None = Field(default=None, min_length=1, max_length=255)
    equipment_id: int | None = None
    inspection_date: date | None = None
    findings: str | None = None
    recommendations: str | None = None
    data: dict[str, Any] | None = None


class InspectionPhotoResponse(CamelSchema):
    """Photo attached to an inspection."""

    id: int
    url: str
    caption: str
    content_type: str
    size_bytes: int
    width: int
    height: int
    created_at: datetime


class InspectionResponse(CamelSchema):
    """Inspection record."""

    id: int
    inspector_name: str
    equipment_id: int | None
    inspection_date: date | None
    status: str
    findings: str
    recommendations: str
    data: dict[str, Any]
    inspector_deleted: bool
    inspector_deleted_at: datetime | None
    original_inspector_name: str
    original_inspector_id: str
    original_inspector_email: str | None
    photos: list[InspectionPhotoResponse]
    created_at: datetime
    updated_at: datetime


class InspectionListResponse(CamelSchema):
    """List of inspections, newest first."""

    inspections: list[InspectionResponse]
    count: int


class StatusChangeRequest(CamelSchema):
    """Request to move an inspection to another status."""

    status: InspectionStatus = Field(..., examples=["submitted"])


class StatusLogEntryResponse(CamelSchema):
    """One status change of an inspection."""

    old_status: str | None
    new_status: str
    changed_by: str
    timestamp: datetime


class StatusLogResponse(CamelSchema):
    """Status history of an inspection, oldest first."""

    entries: list[StatusLogEntryResponse]
