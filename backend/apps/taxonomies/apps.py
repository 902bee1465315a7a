"""Taxonomies app configuration."""

from django.apps import AppConfig


class TaxonomiesConfig(AppConfig):
    """Configuration for taxonomies app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.taxonomies"
