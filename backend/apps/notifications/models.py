"""
Notification models.
"""

from django.db import models


class Notification(models.Model):
    """
    In-app notification addressed to a user.

    target_user holds the recipient's email or username rather than a
    foreign key; notifications are removed when the user is deleted.
    """

    class Type(models.TextChoices):
        INFO = "info", "Info"
        SUCCESS = "success", "Success"
        ALERT = "alert", "Alert"

    target_user = models.CharField(
        max_length=255,
        db_index=True,
        help_text="Recipient email or username",
    )
    title = models.CharField(max_length=255)
    message = models.TextField()
    type = models.CharField(max_length=20, choices=Type.choices, default=Type.INFO)
    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.title} -> {self.target_user}"
