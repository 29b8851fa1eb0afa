"""
Attachment storage.

Uploaded files are written to Django's default storage (local disk under
MEDIA_ROOT) and referenced from messages and private-space posts by URL.
The attachment kind comes from the file's content (libmagic), never from
the content type the client declared.

Usage:
    from chat.storage import store_uploaded_file

    attachment = store_uploaded_file(request.FILES["file"])
    # {"type": "image", "url": "/uploads/attachments/3f.../photo.png", "name": "photo.png"}
"""

from __future__ import annotations

import logging
import mimetypes
import os
import uuid
from typing import TYPE_CHECKING

import magic
from django.conf import settings
from django.core.exceptions import SuspiciousFileOperation
from django.core.files.storage import default_storage
from django.utils.text import get_valid_filename

from chat.constants import ATTACHMENT_CONFIG, AttachmentType
from core.validators import validate_file_size, validate_not_empty_file

if TYPE_CHECKING:
    from django.core.files.uploadedfile import UploadedFile

logger = logging.getLogger(__name__)


def detect_mime_type(uploaded_file: UploadedFile) -> str | None:
    """
    Detect the MIME type of an upload from its first bytes using libmagic.

    Returns:
        The detected MIME type, or None when the file is empty or libmagic
        cannot read it
    """
    uploaded_file.seek(0)
    header = uploaded_file.read(ATTACHMENT_CONFIG.SNIFF_BYTES)
    uploaded_file.seek(0)

    if not header:
        return None

    try:
        return magic.from_buffer(header, mime=True)
    except magic.MagicException as exc:
        logger.warning(f"MIME detection failed for {uploaded_file.name}: {exc}")
        return None


def attachment_type_for(uploaded_file: UploadedFile, filename: str = "") -> str:
    """
    Classify an upload as image, video or file.

    Detection reads the content; the file extension is only consulted when
    libmagic gives no answer.
    """
    mime_type = detect_mime_type(uploaded_file)
    if mime_type is None:
        mime_type, _ = mimetypes.guess_type(filename)
    mime_type = (mime_type or "").lower()

    if mime_type.startswith("image/"):
        return AttachmentType.IMAGE
    if mime_type.startswith("video/"):
        return AttachmentType.VIDEO
    return AttachmentType.FILE


def validate_upload(uploaded_file: UploadedFile) -> None:
    """
    Run size checks on an upload.

    Raises:
        django.core.exceptions.ValidationError: Empty or too large
    """
    validate_not_empty_file(uploaded_file)
    validate_file_size(settings.MAX_ATTACHMENT_SIZE_MB)(uploaded_file)


def store_uploaded_file(uploaded_file: UploadedFile) -> dict[str, str]:
    """
    Save an upload and describe it as an attachment.

    Each file lands in its own random directory so the original name can be
    kept without collisions.

    Returns:
        {"type": ..., "url": ..., "name": ...}
    """
    original_name = (uploaded_file.name or "fichier")[: ATTACHMENT_CONFIG.MAX_NAME_LENGTH]
    try:
        safe_name = get_valid_filename(os.path.basename(original_name))
    except SuspiciousFileOperation:
        safe_name = "fichier"
    path = f"{ATTACHMENT_CONFIG.UPLOAD_DIR}/{uuid.uuid4().hex}/{safe_name}"

    attachment_type = attachment_type_for(uploaded_file, original_name)
    stored_name = default_storage.save(path, uploaded_file)

    return {
        "type": attachment_type,
        "url": default_storage.url(stored_name),
        "name": original_name,
    }
