"""
Custom user manager for username-based authentication.

Related files:
    - models.py: User model that uses this manager

Security:
    - Passwords are automatically hashed via set_password()
    - Email addresses are normalized (lowercase domain)
"""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Custom manager for the User model.

    Usage:
        user = User.objects.create_user(
            username="alice",
            email="alice@example.com",
            password="securepassword",
        )

        admin = User.objects.create_superuser(
            username="boss",
            email="boss@example.com",
            password="adminpassword",
        )
    """

    def get_by_natural_key(self, username):
        """Look users up by username regardless of case."""
        return self.get(username__iexact=username)

    def username_taken(self, username, exclude=None):
        """Return True if another account already uses ``username`` (any case)."""
        queryset = self.filter(username__iexact=username)
        if exclude is not None:
            queryset = queryset.exclude(pk=exclude.pk)
        return queryset.exists()

    def create_user(self, username, email, password=None, **extra_fields):
        """
        Create and save a regular user.

        Args:
            username: Login name (required)
            email: User's email address (required)
            password: User's password
            **extra_fields: Additional fields to set on the user

        Returns:
            User: The created user instance

        Raises:
            ValueError: If username or email is not provided
        """
        if not username:
            raise ValueError("The Username field must be set")
        if not email:
            raise ValueError("The Email field must be set")

        email = self.normalize_email(email)

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        user = self.model(username=username, email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, username, email, password=None, **extra_fields):
        """
        Create and save a superuser.

        Raises:
            ValueError: If is_staff or is_superuser is not True
        """
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(username, email, password, **extra_fields)
