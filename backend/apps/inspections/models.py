"""
Inspection models - inspection records and their photo attachments.
"""

from django.db import models

from apps.core.models import TimestampedModel


class Inspection(TimestampedModel):
    """
    Inspection record.

    The inspector is stored by name, not by foreign key, so records outlive
    the user who wrote them. When that user is deleted the name gets a
    " (Deleted)" suffix and the original identity is kept in the
    original_inspector_* fields.
    """

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        SUBMITTED = "submitted", "Submitted"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"

    inspector_name = models.CharField(max_length=255, db_index=True)
    equipment = models.ForeignKey(
        "equipment.Equipment",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="inspections",
    )
    inspection_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    findings = models.TextField(blank=True)
    recommendations = models.TextField(blank=True)
    data = models.JSONField(
        default=dict,
        blank=True,
        help_text="Inspection form fields, e.g. thickness readings",
    )

    # Set when the inspector's account is deleted
    inspector_deleted = models.BooleanField(default=False)
    inspector_deleted_at = models.DateTimeField(null=True, blank=True)
    original_inspector_name = models.CharField(max_length=255, blank=True)
    original_inspector_id = models.CharField(max_length=255, blank=True)
    original_inspector_email = models.EmailField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Inspection {self.pk} by {self.inspector_name}"


class InspectionPhoto(TimestampedModel):
    """Photo attached to an inspection."""

    inspection = models.ForeignKey(
        Inspection,
        on_delete=models.CASCADE,
        related_name="photos",
    )
    storage_key = models.CharField(max_length=500)
    url = models.URLField(max_length=1000)
    caption = models.CharField(max_length=255, blank=True)
    content_type = models.CharField(max_length=100)
    size_bytes = models.PositiveIntegerField()
    width = models.PositiveIntegerField(default=0)
    height = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:
        return self.storage_key


class InspectionStatusLog(models.Model):
    """
    Append-only history of an inspection's status changes.

    old_status is null for the entry written when the inspection is created.
    """

    inspection = models.ForeignKey(
        Inspection,
        on_delete=models.CASCADE,
        related_name="status_log",
    )
    old_status = models.CharField(max_length=20, null=True, blank=True)
    new_status = models.CharField(max_length=20)
    changed_by = models.CharField(max_length=255, default="Unknown")
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["timestamp", "id"]

    def __str__(self) -> str:
        return f"Inspection {self.inspection_id}: {self.old_status} -> {self.new_status}"
