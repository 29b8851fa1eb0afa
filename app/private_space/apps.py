"""
Django app configuration for the private space.
"""

from django.apps import AppConfig


class PrivateSpaceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "private_space"
    verbose_name = "Private space"
