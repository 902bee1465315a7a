"""
Constants for audit app.
"""

from django.db import models


class AuditAction(models.TextChoices):
    """Administrative action types recorded in the audit log."""

    USER_CREATED = "USER_CREATED", "User created"
    USER_UPDATED = "USER_UPDATED", "User updated"
    USER_DEACTIVATED = "USER_DEACTIVATED", "User deactivated"
    USER_ACTIVATED = "USER_ACTIVATED", "User activated"
    USER_DELETED = "USER_DELETED", "User deleted"
    USER_DELETED_COMPLETE = "USER_DELETED_COMPLETE", "User deleted (inspections preserved)"
    FORCE_LOGOUT = "FORCE_LOGOUT", "Forced logout"
    PASSWORD_RESET_SENT = "PASSWORD_RESET_SENT", "Password reset sent"


DEFAULT_MAX_RESULTS = 100
