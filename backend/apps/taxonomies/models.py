"""
Taxonomy models - configurable dropdown options.
"""

from django.db import models


class DropdownOption(models.Model):
    """One selectable value in a dropdown category."""

    category = models.CharField(max_length=50, db_index=True)
    value = models.CharField(max_length=255)
    position = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["category", "position", "id"]
        constraints = [
            models.UniqueConstraint(fields=["category", "value"], name="unique_dropdown_option"),
        ]

    def __str__(self) -> str:
        return f"{self.category}: {self.value}"


class DropdownSeed(models.Model):
    """
    Record that the default options were seeded.

    Defaults are seeded once; lists emptied afterwards stay empty.
    """

    seeded_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"Dropdown defaults seeded at {self.seeded_at:%Y-%m-%d %H:%M}"
