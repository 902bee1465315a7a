"""
Management command to seed the default dropdown options.
"""

from django.core.management.base import BaseCommand

from apps.taxonomies.services import seed_defaults


class Command(BaseCommand):
    """Insert the default equipment dropdown options."""

    help = "Seed default dropdown options (types, functions, geometries, ...)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Remove all existing options before seeding",
        )

    def handle(self, *args, **options):
        reset = options["reset"]

        if reset:
            self.stdout.write(self.style.WARNING("Removing existing dropdown options"))

        created = seed_defaults(reset=reset)
        self.stdout.write(self.style.SUCCESS(f"Seeded {created} dropdown options"))
