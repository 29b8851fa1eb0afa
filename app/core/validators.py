"""
Custom validators for uploaded files.

Usage:
    from core.validators import validate_file_size

    validate = validate_file_size(max_mb=25)
    validate(uploaded_file)  # raises ValidationError when too large
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.core.exceptions import ValidationError

if TYPE_CHECKING:
    from django.core.files import File


def validate_file_size(max_mb: int = 10):
    """
    Validator factory for file size limits.

    Args:
        max_mb: Maximum file size in megabytes

    Returns:
        Validator function
    """

    def validator(file: File):
        max_bytes = max_mb * 1024 * 1024
        if file.size > max_bytes:
            raise ValidationError(
                f"Le fichier doit faire moins de {max_mb} Mo. "
                f"Taille actuelle : {file.size / 1024 / 1024:.1f} Mo"
            )

    return validator


def validate_not_empty_file(file: File):
    """Reject zero-byte uploads."""
    if not file.size:
        raise ValidationError("Le fichier est vide.")
