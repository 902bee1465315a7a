"""
Equipment services - registry CRUD and image handling.
"""

from typing import Any

from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from apps.core.logging import get_logger
from apps.equipment.exceptions import DuplicateTagNumberError
from apps.equipment.models import Equipment
from apps.media.services import get_storage_service

logger = get_logger(__name__)

IMAGE_PREFIX = "equipment_images"
NULLABLE_FIELDS = {"year_built"}


def list_equipment() -> QuerySet[Equipment]:
    """All equipment, newest first."""
    return Equipment.objects.order_by("-created_at")


def _save(equipment: Equipment, **save_kwargs: Any) -> None:
    try:
        with transaction.atomic():
            equipment.save(**save_kwargs)
    except IntegrityError as e:
        raise DuplicateTagNumberError(f"Tag number '{equipment.tag_number}' is already registered") from e


def create_equipment(data: dict[str, Any]) -> Equipment:
    """
    Register a piece of equipment.

    Raises:
        DuplicateTagNumberError: If the tag number is taken
    """
    equipment = Equipment(**data)
    _save(equipment)
    logger.info("equipment_created", equipment_id=equipment.pk, tag_number=equipment.tag_number)
    return equipment


def update_equipment(equipment: Equipment, changes: dict[str, Any]) -> Equipment:
    """
    Apply a partial update.

    Raises:
        DuplicateTagNumberError: If tag_number is changed to one that is taken
    """
    changes = {name: value for name, value in changes.items() if value is not None or name in NULLABLE_FIELDS}
    if not changes:
        return equipment

    for name, value in changes.items():
        setattr(equipment, name, value)
    _save(equipment, update_fields=[*changes, "updated_at"])
    logger.info("equipment_updated", equipment_id=equipment.pk, fields=sorted(changes))
    return equipment


def delete_equipment(equipment: Equipment) -> None:
    """Delete equipment and its image. Inspections keep their data, unlinked."""
    image_key = equipment.image_key
    equipment_id = equipment.pk
    equipment.delete()
    if image_key:
        get_storage_service().delete(image_key)
    logger.info("equipment_deleted", equipment_id=equipment_id)


def set_equipment_image(equipment: Equipment, filename: str, content: bytes, content_type: str) -> Equipment:
    """
    Store a new image for the equipment and replace the previous one.

    Raises:
        StorageValidationError: If the file type or size is not allowed
    """
    storage = get_storage_service()
    stored = storage.save_image(IMAGE_PREFIX, filename, content, content_type)

    previous_key = equipment.image_key
    equipment.image_key = stored.key
    equipment.image_url = stored.url
    equipment.save(update_fields=["image_key", "image_url", "updated_at"])

    if previous_key:
        storage.delete(previous_key)
    return equipment
