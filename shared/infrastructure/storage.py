"""Artifact storage for payment proof screenshots.

Uploads go through Django's configured storage backend (local filesystem by
default, any `django-storages` backend in production). The engine only ever
sees the returned key; it never reads the artifact back.
"""

from __future__ import annotations

import hashlib
import logging
import uuid

from django.conf import settings  # type: ignore
from django.core.files.base import ContentFile  # type: ignore
from django.core.files.storage import default_storage  # type: ignore
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_FORMATS = {"JPEG": "jpg", "PNG": "png", "WEBP": "webp"}


class ArtifactRejected(ValueError):
    """Uploaded file is not an acceptable payment proof image."""


class PaymentProofStorage:
    """Validates and stores payment screenshots, returning an opaque key."""

    def __init__(self, storage=None):
        self.storage = storage or default_storage
        self.max_size = getattr(settings, "PAYMENT_PROOF_MAX_SIZE", 5 * 1024 * 1024)
        self.upload_dir = getattr(settings, "PAYMENT_PROOF_UPLOAD_DIR", "payments").strip("/")

    def _validate_image(self, file_obj) -> str:
        """Return the file extension for a valid image, raise ArtifactRejected otherwise"""
        size = getattr(file_obj, "size", None)
        if size is not None and size > self.max_size:
            raise ArtifactRejected(f"File too large. Maximum is {self.max_size / 1024 / 1024:.1f} MB")

        try:
            file_obj.seek(0)
            with Image.open(file_obj) as img:
                img.verify()
                image_format = img.format
        except (UnidentifiedImageError, OSError, SyntaxError) as exc:
            raise ArtifactRejected(f"Invalid image: {exc}") from exc

        if image_format not in ALLOWED_IMAGE_FORMATS:
            raise ArtifactRejected(f"Unsupported format: {image_format}")
        return ALLOWED_IMAGE_FORMATS[image_format]

    def _generate_key(self, payload: bytes, ext: str) -> str:
        """Key: payments/<md5_8>_<uuid8>.<ext>"""
        digest = hashlib.md5(payload).hexdigest()[:8]
        uid = uuid.uuid4().hex[:8]
        return f"{self.upload_dir}/{digest}_{uid}.{ext}"

    def upload(self, file_obj) -> str:
        ext = self._validate_image(file_obj)
        file_obj.seek(0)
        payload = file_obj.read()
        key = self.storage.save(self._generate_key(payload, ext), ContentFile(payload))
        logger.info("Stored payment proof %s (%d bytes)", key, len(payload))
        return key


def upload_artifact(file_obj) -> str:
    """Store an uploaded payment screenshot and return its opaque key."""
    return PaymentProofStorage().upload(file_obj)
