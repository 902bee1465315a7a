"""Inspections app configuration."""

from django.apps import AppConfig


class InspectionsConfig(AppConfig):
    """Configuration for inspections app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.inspections"
