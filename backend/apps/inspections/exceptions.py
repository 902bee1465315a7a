"""
Exceptions for inspections app.
"""


class InspectionError(Exception):
    """Base exception for inspection errors."""

    pass


class EquipmentNotFoundError(InspectionError):
    """Referenced equipment does not exist."""

    pass


class InvalidStatusTransitionError(InspectionError):
    """Requested status cannot follow the current one."""

    pass


class StatusPermissionError(InspectionError):
    """Caller's role may not set the requested status."""

    pass


class DeletedInspectorError(InspectionError):
    """Inspector name of a record preserved from a deleted user cannot change."""

    pass
