"""
Storage service abstraction for local and S3 backends.

Equipment images and inspection photos are uploaded through the API as
multipart files and written here.
"""

import uuid
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from PIL import Image, UnidentifiedImageError

from apps.core.logging import get_logger

logger = get_logger(__name__)


class StorageValidationError(Exception):
    """Upload rejected before it reached storage."""


@dataclass
class StoredImage:
    """Result of saving an image."""

    key: str
    url: str
    content_type: str
    size_bytes: int
    width: int
    height: int


class StorageService:
    """
    Abstraction over local filesystem and S3 storage.

    Local storage goes through Django's default_storage (MEDIA_ROOT);
    S3 is used when USE_S3_STORAGE is set.
    """

    def __init__(self) -> None:
        self.max_size_bytes: int = getattr(settings, "MEDIA_MAX_IMAGE_SIZE_BYTES", 10 * 1024 * 1024)
        self.allowed_content_types: set[str] = set(
            getattr(settings, "MEDIA_ALLOWED_IMAGE_TYPES", ["image/jpeg", "image/png", "image/webp"])
        )
        self.use_s3 = getattr(settings, "USE_S3_STORAGE", False)
        if self.use_s3:
            import boto3

            self.s3_client = boto3.client(
                "s3",
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                region_name=getattr(settings, "AWS_S3_REGION_NAME", "us-east-1"),
            )
            self.bucket_name = settings.AWS_STORAGE_BUCKET_NAME

    def generate_key(self, prefix: str, filename: str) -> str:
        """Generate a unique storage key, e.g. 'equipment_images/3f9c…e1.jpg'."""
        ext = Path(filename).suffix.lower() or ".jpg"
        return f"{prefix}/{uuid.uuid4().hex[:12]}{ext}"

    def validate(self, content_type: str, size_bytes: int) -> list[str]:
        """
        Validate an upload's content type and size.

        Returns list of validation errors (empty if valid).
        """
        errors = []

        if content_type not in self.allowed_content_types:
            allowed = ", ".join(sorted(self.allowed_content_types))
            errors.append(f"Invalid content type. Allowed: {allowed}")

        if size_bytes > self.max_size_bytes:
            max_mb = self.max_size_bytes / (1024 * 1024)
            errors.append(f"File too large. Maximum size: {max_mb:.0f}MB")

        return errors

    def save_image(self, prefix: str, filename: str, content: bytes, content_type: str) -> StoredImage:
        """
        Validate and store an image.

        Raises:
            StorageValidationError: If the content type or size is not allowed
        """
        errors = self.validate(content_type, len(content))
        if errors:
            raise StorageValidationError("; ".join(errors))

        key = self.save_file(self.generate_key(prefix, filename), content, content_type)
        width, height = self.get_image_dimensions(content)

        logger.info("image_stored", key=key, size_bytes=len(content), content_type=content_type)
        return StoredImage(
            key=key,
            url=self.get_public_url(key),
            content_type=content_type,
            size_bytes=len(content),
            width=width,
            height=height,
        )

    def get_image_dimensions(self, image_data: bytes) -> tuple[int, int]:
        """Extract image dimensions from binary data; (0, 0) if unreadable."""
        try:
            with Image.open(BytesIO(image_data)) as img:
                return img.size
        except (UnidentifiedImageError, OSError):
            return (0, 0)

    def save_file(self, key: str, content: bytes, content_type: str) -> str:
        """Save raw bytes under key and return the key actually used."""
        if self.use_s3:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type,
            )
            return key
        return default_storage.save(key, ContentFile(content))

    def delete(self, key: str) -> None:
        """Delete file from storage. Failures are logged, not raised."""
        try:
            if self.use_s3:
                self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
            elif default_storage.exists(key):
                default_storage.delete(key)
        except Exception as e:
            logger.warning("storage_delete_failed", key=key, error=str(e))

    def get_public_url(self, key: str) -> str:
        """Get public URL for a stored file."""
        if self.use_s3:
            custom_domain = getattr(settings, "AWS_S3_CUSTOM_DOMAIN", None)
            if custom_domain:
                return f"https://{custom_domain}/{key}"
            return f"https://{self.bucket_name}.s3.amazonaws.com/{key}"

        backend_url = getattr(settings, "BACKEND_URL", "http://localhost:8000")
        return f"{backend_url}{settings.MEDIA_URL}{key}"


# Singleton instance
_storage_service: StorageService | None = None


def get_storage_service() -> StorageService:
    """Get the storage service singleton."""
    global _storage_service
    if _storage_service is None:
        _storage_service = StorageService()
    return _storage_service
