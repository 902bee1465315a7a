"""
Core schemas - shared Pydantic models for API responses.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    detail: str = Field(..., description="Human-readable error message")

    model_config = {"json_schema_extra": {"example": {"detail": "Only admins can delete users."}}}


class MessageResponse(BaseModel):
    """Generic acknowledgement with a human-readable message."""

    message: str = Field(..., description="Result message")


class CamelSchema(BaseModel):
    """
    Base for payloads exchanged with the web client in camelCase.

    Fields are declared in snake_case; both spellings are accepted on input.
    Routes returning these schemas set by_alias=True.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CodedErrorResponse(ErrorResponse):
    """Error response that also names the kind of error."""

    code: str = Field(..., description="Error kind, e.g. 'failed-precondition'")

    model_config = {
        "json_schema_extra": {
            "example": {"detail": "Cannot delete your own account.", "code": "failed-precondition"}
        }
    }
