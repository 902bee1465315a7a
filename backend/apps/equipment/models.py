"""
Equipment models - registry of inspected assets.
"""

from django.db import models

from apps.core.models import TimestampedModel


class Equipment(TimestampedModel):
    """
    Registered piece of equipment.

    Classification fields hold free text; the UI offers the values
    configured in the dropdown taxonomies but does not enforce them.
    """

    tag_number = models.CharField(
        max_length=100,
        unique=True,
        help_text="Plant tag, e.g. 'V-101'",
    )
    description = models.CharField(max_length=255, blank=True)
    equipment_type = models.CharField(max_length=100, blank=True, help_text="e.g. 'Pressure Vessel'")
    function = models.CharField(max_length=100, blank=True)
    geometry = models.CharField(max_length=100, blank=True)
    construction = models.CharField(max_length=100, blank=True)
    service = models.CharField(max_length=100, blank=True)
    orientation = models.CharField(max_length=100, blank=True)
    status = models.CharField(max_length=100, blank=True, default="Active")
    location = models.CharField(max_length=255, blank=True)
    manufacturer = models.CharField(max_length=255, blank=True)
    year_built = models.PositiveIntegerField(null=True, blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    image_key = models.CharField(
        max_length=500,
        blank=True,
        help_text="Storage key of the current image",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "equipment"

    def __str__(self) -> str:
        return self.tag_number
