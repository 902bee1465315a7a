"""
Taxonomy API schemas - Pydantic models for request/response.
"""

from pydantic import BaseModel, Field


class DropdownOptionsResponse(BaseModel):
    """All dropdown categories with their ordered values."""

    options: dict[str, list[str]] = Field(
        ...,
        description="Category to values",
        examples=[{"orientations": ["Horizontal", "Vertical", "Sloped"]}],
    )


class AddOptionRequest(BaseModel):
    """Request to add a value to a category."""

    value: str = Field(..., min_length=1, max_length=255, examples=["Sloped"])


class CategoryOptionsResponse(BaseModel):
    """Values of one category after a change."""

    category: str
    values: list[str]
