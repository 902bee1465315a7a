"""
Equipment API schemas - Pydantic models for request/response.
"""

from datetime import datetime

from pydantic import Field

from apps.core.schemas import CamelSchema


class EquipmentFields(CamelSchema):
    """Descriptive fields shared by create requests and responses."""

    description: str = Field(default="", max_length=255)
    equipment_type: str = Field(default="", max_length=100, examples=["Pressure Vessel"])
    function: str = Field(default="", max_length=100, examples=["Storage"])
    geometry: str = Field(default="", max_length=100, examples=["Cylindrical (Vertical)"])
    construction: str = Field(default="", max_length=100, examples=["Welded"])
    service: str = Field(default="", max_length=100, examples=["Sour Service (H2S)"])
    orientation: str = Field(default="", max_length=100, examples=["Vertical"])
    status: str = Field(default="Active", max_length=100)
    location: str = Field(default="", max_length=255)
    manufacturer: str = Field(default="", max_length=255)
    year_built: int | None = Field(default=None, ge=1800, le=2200)


class EquipmentCreateRequest(EquipmentFields):
    """Request to register equipment."""

    tag_number: str = Field(..., min_length=1, max_length=100, examples=["V-101"])


class EquipmentUpdateRequest(CamelSchema):
    """Partial update of an equipment record. Omitted fields are unchanged."""

    tag_number: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=255)
    equipment_type: str | None = Field(default=None, max_length=100)
    function: str | None = Field(default=None, max_length=100)
    geometry: str | None = Field(default=None, max_length=100)
    construction: str | None = Field(default=None, max_length=100)
    service: str | None = Field(default=None, max_length=100)
    orientation: str | None = Field(default=None, max_length=100)
    status: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=255)
    manufacturer: str | None = Field(default=None, max_length=255)
    year_built: int | None = Field(default=None, ge=1800, le=2200)


class EquipmentResponse(EquipmentFields):
    """Equipment record."""

    id: int
    tag_number: str
    image_url: str
    created_at: datetime
    updated_at: datetime


class EquipmentListResponse(CamelSchema):
    """List of equipment, newest first."""

    equipment: list[EquipmentResponse]
    count: int
