"""
Taxonomy services - dropdown option lists.
"""

from django.db import IntegrityError, transaction
from django.db.models import Max

from apps.core.logging import get_logger
from apps.taxonomies.constants import CATEGORIES, DEFAULT_DROPDOWN_OPTIONS
from apps.taxonomies.exceptions import UnknownCategoryError
from apps.taxonomies.models import DropdownOption, DropdownSeed

logger = get_logger(__name__)


def _check_category(category: str) -> None:
    if category not in CATEGORIES:
        raise UnknownCategoryError(f"Unknown category '{category}'. Allowed: {', '.join(CATEGORIES)}")


def seed_defaults(reset: bool = False) -> int:
    """
    Insert the default options and record that seeding happened.

    Existing options are kept unless reset is set, in which case every
    option is removed first.

    Returns:
        Number of options created
    """
    with transaction.atomic():
        if reset:
            DropdownOption.objects.all().delete()

        options = [
            DropdownOption(category=category, value=value, position=position)
            for category, values in DEFAULT_DROPDOWN_OPTIONS.items()
            for position, value in enumerate(values)
        ]
        before = DropdownOption.objects.count()
        DropdownOption.objects.bulk_create(options, ignore_conflicts=True)
        created = DropdownOption.objects.count() - before

        if not DropdownSeed.objects.exists():
            DropdownSeed.objects.create()

    logger.info("dropdown_defaults_seeded", created=created, reset=reset)
    return created


def get_dropdown_options() -> dict[str, list[str]]:
    """
    All categories mapped to their ordered values.

    Seeds the defaults on first use only. Categories emptied later stay empty.
    """
    if not DropdownSeed.objects.exists():
        seed_defaults()

    options: dict[str, list[str]] = {category: [] for category in CATEGORIES}
    for category, value in DropdownOption.objects.values_list("category", "value"):
        options.setdefault(category, []).append(value)
    return options


def add_option(category: str, value: str) -> list[str]:
    """
    Add a value to a category. Adding an existing value changes nothing.

    Returns:
        The category's values after the change

    Raises:
        UnknownCategoryError: If the category is not known
    """
    _check_category(category)

    if not DropdownOption.objects.filter(category=category, value=value).exists():
        last = DropdownOption.objects.filter(category=category).aggregate(Max("position"))["position__max"]
        position = (last or 0) + 1
        try:
            with transaction.atomic():
                DropdownOption.objects.create(category=category, value=value, position=position)
        except IntegrityError:
            # Added concurrently
            pass
        else:
            logger.info("dropdown_option_added", category=category, value=value)

    return list(DropdownOption.objects.filter(category=category).values_list("value", flat=True))


def remove_option(category: str, value: str) -> list[str]:
    """
    Remove a value from a category. Removing a missing value changes nothing.

    Returns:
        The category's values after the change

    Raises:
        UnknownCategoryError: If the category is not known
    """
    _check_category(category)

    deleted, _ = DropdownOption.objects.filter(category=category, value=value).delete()
    if deleted:
        logger.info("dropdown_option_removed", category=category, value=value)

    return list(DropdownOption.objects.filter(category=category).values_list("value", flat=True))
