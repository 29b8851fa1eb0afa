"""
Account services.

This module provides the AccountService class for registration, login,
sessions, profile updates, username changes, and password changes.

Related files:
    - models.py: User
    - chat/services.py: ChatRenameService (direct chat id rewrite on rename)
    - views.py: HTTP layer

Sessions:
    Login issues a simplejwt access/refresh pair. Refresh tokens are recorded
    in the token_blacklist OutstandingToken table, so logout blacklists the
    refresh token server-side and rotation invalidates the previous one.

Error codes:
    - VALIDATION_ERROR: Field-level validation failed (see ``errors``)
    - USER_EXISTS: Username or email already registered
    - EMAIL_TAKEN: Email used by another account
    - USERNAME_TAKEN: Username used by another account (any case)
    - USER_NOT_FOUND: Unknown username at login
    - INVALID_PASSWORD: Wrong password
    - ACCOUNT_DISABLED: Inactive account
    - INVALID_TOKEN: Refresh token malformed, expired, or already revoked
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth import password_validation
from django.contrib.auth.models import update_last_login
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import DatabaseError, IntegrityError
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import (
    User,
    validate_username_format,
    validate_username_not_reserved,
)
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from typing import Any


PROFILE_FIELDS = ("email", "phone", "status", "profile_pic", "description")


def issue_tokens(user: User) -> dict[str, str]:
    """Create a refresh token for ``user`` and return the token pair."""
    refresh = RefreshToken.for_user(user)
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }


class AccountService(BaseService):
    """
    Account lifecycle business logic.

    Usage:
        from authentication.services import AccountService

        result = AccountService.register("alice", "alice@example.com", "secret1")
        result = AccountService.login("alice", "secret1")
        if result:
            tokens = result.data["tokens"]
    """

    @classmethod
    def validate_username(
        cls, username: str, exclude_user: User | None = None
    ) -> ServiceResult | None:
        """
        Validate a username for format, reserved names, and uniqueness.

        Returns:
            A failure result, or None when the username is acceptable
        """
        messages = []
        for validator in (validate_username_format, validate_username_not_reserved):
            try:
                validator(username)
            except ValidationError as exc:
                messages.extend(exc.messages)
        if messages:
            return ServiceResult.failure(
                messages[0],
                error_code="VALIDATION_ERROR",
                errors={"username": messages},
            )

        if User.objects.username_taken(username, exclude=exclude_user):
            return ServiceResult.failure(
                "Ce nom d'utilisateur est déjà pris.",
                error_code="USERNAME_TAKEN",
                errors={"username": ["Ce nom d'utilisateur est déjà pris."]},
            )
        return None

    @classmethod
    def validate_password(
        cls, password: str, user: User | None = None, field: str = "password"
    ) -> ServiceResult | None:
        try:
            password_validation.validate_password(password, user=user)
        except ValidationError as exc:
            return ServiceResult.failure(
                exc.messages[0],
                error_code="VALIDATION_ERROR",
                errors={field: exc.messages},
            )
        return None

    @classmethod
    def register(cls, username: str, email: str, password: str) -> ServiceResult[User]:
        """
        Create an account with default profile values.

        Error codes:
            - VALIDATION_ERROR: Missing or malformed field
            - USER_EXISTS: Username (any case) or email already registered
        """
        validation = cls.validate_required(username=username, email=email, password=password)
        if validation is not None:
            return validation

        username = username.strip()
        email = User.objects.normalize_email(email.strip())

        try:
            validate_email(email)
        except ValidationError:
            return ServiceResult.failure(
                "Adresse e-mail invalide.",
                error_code="VALIDATION_ERROR",
                errors={"email": ["Adresse e-mail invalide."]},
            )

        if (
            User.objects.username_taken(username)
            or User.objects.filter(email__iexact=email).exists()
        ):
            return ServiceResult.failure(
                "Utilisateur ou e-mail déjà enregistré.",
                error_code="USER_EXISTS",
            )

        validation = cls.validate_username(username)
        if validation is not None:
            return validation

        validation = cls.validate_password(password)
        if validation is not None:
            return validation

        try:
            user = User.objects.create_user(username=username, email=email, password=password)
        except IntegrityError:
            # Lost a race against a concurrent registration
            return ServiceResult.failure(
                "Utilisateur ou e-mail déjà enregistré.",
                error_code="USER_EXISTS",
            )

        cls.get_logger().info(f"User registered: {user.username} ({user.id})")
        return ServiceResult.success(user, "Utilisateur enregistré avec succès !")

    @classmethod
    def login(cls, username: str, password: str) -> ServiceResult[dict[str, Any]]:
        """
        Verify credentials and open a session.

        Returns:
            ServiceResult with {"user": User, "tokens": {"access", "refresh"}}

        Error codes:
            - USER_NOT_FOUND: No account with this username
            - INVALID_PASSWORD: Password does not match
            - ACCOUNT_DISABLED: Account is inactive
        """
        validation = cls.validate_required(username=username, password=password)
        if validation is not None:
            return validation

        user = User.objects.filter(username__iexact=username.strip()).first()
        if user is None:
            return ServiceResult.failure("Utilisateur non trouvé.", error_code="USER_NOT_FOUND")

        if not user.check_password(password):
            cls.get_logger().info(f"Failed login for {user.username}")
            return ServiceResult.failure("Mot de passe incorrect.", error_code="INVALID_PASSWORD")

        if not user.is_active:
            return ServiceResult.failure("Ce compte est désactivé.", error_code="ACCOUNT_DISABLED")

        tokens = issue_tokens(user)
        update_last_login(None, user)

        cls.get_logger().info(f"User logged in: {user.username}")
        return ServiceResult.success({"user": user, "tokens": tokens}, "Connexion réussie !")

    @classmethod
    def logout(cls, user: User, refresh_token: str) -> ServiceResult[None]:
        """
        Close a session by blacklisting its refresh token.

        Error codes:
            - VALIDATION_ERROR: No token supplied
            - INVALID_TOKEN: Token malformed, expired, already revoked,
              or issued to another user
        """
        validation = cls.validate_required(refresh=refresh_token)
        if validation is not None:
            return validation

        try:
            token = RefreshToken(refresh_token)
            if str(token.payload.get("user_id")) != str(user.id):
                return ServiceResult.failure("Jeton de session invalide.", error_code="INVALID_TOKEN")
            token.blacklist()
        except TokenError:
            return ServiceResult.failure("Jeton de session invalide.", error_code="INVALID_TOKEN")

        cls.get_logger().info(f"User logged out: {user.username}")
        return ServiceResult.success(None, "Déconnexion réussie.")

    @classmethod
    def list_users(cls):
        """Every active account, ordered by username."""
        return User.objects.filter(is_active=True).order_by("username")

    @classmethod
    def update_profile(cls, user: User, **fields) -> ServiceResult[User]:
        """
        Update profile fields (email, phone, status, profile_pic, description).

        Unknown keys and None values are ignored.

        Error codes:
            - VALIDATION_ERROR: Malformed email
            - EMAIL_TAKEN: Email used by another account
        """
        updates = {
            name: value
            for name, value in fields.items()
            if name in PROFILE_FIELDS and value is not None
        }

        if "email" in updates:
            email = User.objects.normalize_email(updates["email"].strip())
            try:
                validate_email(email)
            except ValidationError:
                return ServiceResult.failure(
                    "Adresse e-mail invalide.",
                    error_code="VALIDATION_ERROR",
                    errors={"email": ["Adresse e-mail invalide."]},
                )
            if User.objects.filter(email__iexact=email).exclude(pk=user.pk).exists():
                return ServiceResult.failure(
                    "Cette adresse e-mail est déjà utilisée.",
                    error_code="EMAIL_TAKEN",
                )
            updates["email"] = email

        if not updates:
            return ServiceResult.success(user, "Profil mis à jour")

        for name, value in updates.items():
            setattr(user, name, value)
        user.save(update_fields=[*updates.keys(), "updated_at"])

        return ServiceResult.success(user, "Profil mis à jour")

    @classmethod
    def change_username(cls, user: User, new_username: str) -> ServiceResult[User]:
        """
        Rename a user and every direct chat id that carries the old name.

        Validation (format, reserved names, case-insensitive uniqueness)
        happens before anything is written. The user row and the chat id
        rewrite then commit together, so history stays reachable under the
        new canonical ids.

        Error codes:
            - VALIDATION_ERROR: Malformed or reserved username
            - USERNAME_TAKEN: Another account uses this name (any case)
        """
        from chat.services import ChatRenameService

        validation = cls.validate_required(username=new_username)
        if validation is not None:
            return validation

        new_username = new_username.strip()
        old_username = user.username
        if new_username == old_username:
            return ServiceResult.success(user, "Nom d'utilisateur inchangé.")

        validation = cls.validate_username(new_username, exclude_user=user)
        if validation is not None:
            return validation

        try:
            with cls.atomic():
                user.username = new_username
                user.save(update_fields=["username", "updated_at"])
                rewritten = ChatRenameService.propagate(old_username, new_username)
        except IntegrityError:
            user.username = old_username
            return ServiceResult.failure(
                "Ce nom d'utilisateur est déjà pris.",
                error_code="USERNAME_TAKEN",
            )
        except DatabaseError as exc:
            user.username = old_username
            return cls.handle_exception(exc, f"Username change {old_username} -> {new_username}")

        cls.get_logger().info(
            f"User {user.id} renamed {old_username} -> {new_username}; "
            f"{rewritten} chat(s) rewritten"
        )
        return ServiceResult.success(user, "Nom d'utilisateur mis à jour.")

    @classmethod
    def change_password(
        cls, user: User, current_password: str, new_password: str
    ) -> ServiceResult[User]:
        """
        Replace the password after verifying the current one.

        Error codes:
            - VALIDATION_ERROR: Missing field or weak new password
            - INVALID_PASSWORD: Current password is wrong
        """
        validation = cls.validate_required(
            current_password=current_password, new_password=new_password
        )
        if validation is not None:
            return validation

        if not user.check_password(current_password):
            return ServiceResult.failure("Mot de passe incorrect.", error_code="INVALID_PASSWORD")

        validation = cls.validate_password(new_password, user=user, field="new_password")
        if validation is not None:
            return validation

        user.set_password(new_password)
        user.save(update_fields=["password", "updated_at"])

        cls.get_logger().info(f"Password changed for {user.username}")
        return ServiceResult.success(user, "Mot de passe mis à jour.")
