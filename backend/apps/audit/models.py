"""
Audit models - append-only record of administrative actions.
"""

import uuid
from typing import Any

from django.db import models


class AuditLog(models.Model):
    """
    Permanent audit log entry.

    Rows are only ever inserted. Actor and target identities are
    denormalized so entries stay readable after the users are deleted.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # What happened
    action = models.CharField(
        max_length=100,
        db_index=True,
        help_text="Action type, e.g. 'USER_DELETED_COMPLETE'",
    )

    # Who did it
    performed_by_uid = models.CharField(max_length=255, null=True, blank=True, db_index=True)
    performed_by_username = models.CharField(max_length=150, default="Unknown")
    performed_by_email = models.EmailField(null=True, blank=True)

    # Who it happened to
    target_uid = models.CharField(max_length=255, null=True, blank=True, db_index=True)
    target_username = models.CharField(max_length=150, default="Unknown")
    target_email = models.EmailField(null=True, blank=True)

    details = models.JSONField(
        default=dict,
        blank=True,
        help_text="Action-specific details, e.g. affected record counts",
    )

    # Context
    correlation_id = models.UUIDField(
        null=True,
        blank=True,
        help_text="Request trace ID for correlation",
    )

    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-timestamp"]

    def __str__(self) -> str:
        return f"{self.action} by {self.performed_by_username}"

    @property
    def performed_by(self) -> dict[str, Any]:
        return {
            "uid": self.performed_by_uid,
            "username": self.performed_by_username,
            "email": self.performed_by_email,
        }

    @property
    def target_user(self) -> dict[str, Any]:
        return {
            "uid": self.target_uid,
            "username": self.target_username,
            "email": self.target_email,
        }
