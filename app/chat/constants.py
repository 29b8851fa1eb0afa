"""
Constants and configuration for chat module features.

This module centralizes configuration values for:
- Message content (deleted placeholder, length limits)
- Attachment handling (kinds, size limit)
- Per-chat display preferences (theme colors and modes)

Import example:
    from chat.constants import MESSAGE_CONFIG, ThemeColor
"""

from typing import Final

from django.db import models


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    # Text that replaces the content of a deleted message
    DELETED_TEXT: Final[str] = "message supprimé"

    MAX_CONTENT_LENGTH: Final[int] = 10000  # Characters


# =============================================================================
# Attachment Configuration
# =============================================================================


class ATTACHMENT_CONFIG:
    """Configuration for message and private-space attachments."""

    # Subdirectory of MEDIA_ROOT holding uploaded files
    UPLOAD_DIR: Final[str] = "attachments"

    MAX_NAME_LENGTH: Final[int] = 255

    # Bytes read from the start of an upload for MIME detection
    SNIFF_BYTES: Final[int] = 2048


class AttachmentType(models.TextChoices):
    """Kind of attachment, derived from the detected MIME type."""

    IMAGE = "image", "Image"
    VIDEO = "video", "Video"
    FILE = "file", "File"


# =============================================================================
# Display Preferences
# =============================================================================


class ThemeColor(models.TextChoices):
    DEFAULT = "default", "Default"
    BLACK = "black", "Black"
    BLUE = "blue", "Blue"
    GREEN = "green", "Green"
    PINK = "pink", "Pink"
    VIOLET = "violet", "Violet"
    WHITE = "white", "White"
    YELLOW = "yellow", "Yellow"


class ThemeMode(models.TextChoices):
    LIGHT = "light", "Light"
    DARK = "dark", "Dark"


DEFAULT_GROUP_PICTURE: Final[str] = "https://placehold.co/100x100.png"
