"""
Authentication models.

This module defines the account model:
- User: Custom user model with username-based authentication and the
  public profile shown to friends (phone, status, picture, description)

Related files:
    - managers.py: Custom user manager for username-based creation
    - services.py: AccountService business logic
    - chat/services.py: ChatRenameService rewrites chat ids on rename

Security:
    - User passwords hashed with Django's password hashers
    - Usernames never contain ":" (the direct chat id separator)
"""

import re

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models.functions import Lower

from authentication.managers import UserManager
from core.model_mixins import UUIDPrimaryKeyMixin

DEFAULT_PHONE = "Non défini"
DEFAULT_STATUS = "En ligne"
DEFAULT_PROFILE_PIC = "https://placehold.co/100x100.png"

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{3,30}$")

# Reserved usernames that cannot be used
RESERVED_USERNAMES = frozenset([
    "admin", "administrator", "root", "system", "api", "www",
    "support", "help", "auth", "login", "logout", "register",
    "user", "users", "me", "profile", "settings", "null",
    "undefined", "anonymous", "unknown", "group", "groups",
])


def validate_username_not_reserved(value):
    """Validate that username is not in the reserved list."""
    if value.lower() in RESERVED_USERNAMES:
        raise ValidationError(
            f"Le nom d'utilisateur « {value} » est réservé."
        )


def validate_username_format(value):
    """Validate username format: 3-30 chars, alphanumeric + _ + -."""
    if not USERNAME_PATTERN.match(value or ""):
        raise ValidationError(
            "Le nom d'utilisateur doit contenir de 3 à 30 caractères : "
            "lettres, chiffres, tirets ou tirets bas."
        )


class User(UUIDPrimaryKeyMixin, AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using username as the login identifier.

    The username is also part of every direct chat id the user takes part
    in, so renaming goes through AccountService.change_username() which
    rewrites those ids in the same transaction.

    Fields:
        id: UUID primary key
        username: Login identifier, unique regardless of case
        email: Unique contact address
        phone: Free-form phone number shown on the profile
        status: Free-form presence text ("En ligne" by default)
        profile_pic: URL of the profile picture
        description: Free-form "about me" text
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        date_joined: When the user account was created

    Usage:
        user = User.objects.create_user(
            username="alice",
            email="alice@example.com",
            password="securepassword",
        )
    """

    username = models.CharField(
        max_length=30,
        unique=True,
        validators=[validate_username_format, validate_username_not_reserved],
        help_text="Login name (3-30 chars, alphanumeric + _ + -)",
    )
    email = models.EmailField(
        unique=True,
        max_length=254,
        help_text="User's email address",
    )

    # Public profile
    phone = models.CharField(max_length=50, default=DEFAULT_PHONE, blank=True)
    status = models.CharField(max_length=100, default=DEFAULT_STATUS, blank=True)
    profile_pic = models.URLField(max_length=500, default=DEFAULT_PROFILE_PIC, blank=True)
    description = models.TextField(blank=True, default="")

    # Account status flags
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "username"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["email"]

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["username"]
        constraints = [
            models.UniqueConstraint(
                Lower("username"),
                name="user_username_ci_unique",
            ),
        ]

    def __str__(self):
        return self.username

    def get_full_name(self):
        return self.username

    def get_short_name(self):
        return self.username
