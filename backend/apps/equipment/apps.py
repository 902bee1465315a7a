"""Equipment app configuration."""

from django.apps import AppConfig


class EquipmentConfig(AppConfig):
    """Configuration for equipment app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.equipment"
