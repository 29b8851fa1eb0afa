"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with common service utilities

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Pattern Comparison:
    - ServiceResult: Use for expected failures (validation, business rules)
    - Exceptions: Use for unexpected failures (database errors, bugs)

Messages:
    Every result carries a French, user-facing message. Success results set
    ``message``; failures set ``error`` plus a machine-readable ``error_code``.

Usage:
    from core.services import BaseService, ServiceResult

    class FriendService(BaseService):
        @classmethod
        def send_request(cls, user, username) -> ServiceResult[FriendRequest]:
            if user.username == username:
                return ServiceResult.failure(
                    "Vous ne pouvez pas vous ajouter vous-même.",
                    error_code="SELF_REQUEST",
                )

            with cls.atomic():
                request = FriendRequest.objects.create(...)

            cls.get_logger().info(f"Friend request {request.id} created")
            return ServiceResult.success(request, "Demande d'ami envoyée.")

    # In view
    result = FriendService.send_request(request.user, username)
    if result.success:
        return Response(result.to_response(), status=201)
    return Response(result.to_response(), status=400)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

# Generic type for ServiceResult data
T = TypeVar("T")

INTERNAL_ERROR_MESSAGE = "Une erreur interne est survenue."


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Provides consistent success/failure handling without exceptions.
    Use this for expected failures (validation errors, business rule violations).

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        message: Human-readable success message
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        errors: Field-level errors for validation failures

    Usage:
        # Success case
        return ServiceResult.success(group, "Groupe créé.")

        # Failure case
        return ServiceResult.failure("Groupe non trouvé.", "GROUP_NOT_FOUND")

        # Check result
        result = GroupService.create_group(user, "Famille", [])
        if result:
            group = result.data
        else:
            print(f"Error: {result.error} ({result.error_code})")
    """

    success: bool
    data: T | None = None
    message: str | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T, message: str | None = None) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data
            message: Optional user-facing confirmation

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data, message=message)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors (for validation failures)

        Returns:
            ServiceResult with success=False and error details

        Example:
            return ServiceResult.failure(
                "Nom d'utilisateur invalide.",
                error_code="VALIDATION_ERROR",
                errors={"username": ["Trop court"]},
            )
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
        )

    def to_response(self, data: Any = None) -> dict[str, Any]:
        """
        Convert to API response format.

        Args:
            data: Serialized payload to use instead of ``self.data``
                (views pass serializer output here)

        Returns:
            Dict with success status and data or error details

        Example:
            result = GroupService.get_group(user, group_id)
            if result.success:
                return Response(result.to_response(GroupSerializer(result.data).data))
        """
        if self.success:
            response: dict[str, Any] = {
                "success": True,
                "data": self.data if data is None else data,
            }
            if self.message:
                response["message"] = self.message
            return response

        response = {
            "success": False,
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management
    - Exception handling patterns

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services should be stateless
        - Use ServiceResult for expected failures
        - Raise exceptions for unexpected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation fails, all
        changes are rolled back.

        Example:
            with cls.atomic():
                FriendRequest.objects.filter(...).delete()
                Friendship.objects.create(user=a, friend=b, added_at=now)
                Friendship.objects.create(user=b, friend=a, added_at=now)
                # If the second insert fails, the request deletion is rolled back
        """
        with transaction.atomic():
            yield

    @classmethod
    def handle_exception(
        cls,
        exc: Exception,
        context: str = "",
        log_level: int = logging.ERROR,
    ) -> ServiceResult:
        """
        Convert exception to ServiceResult with logging.

        The exception text goes to the log only. The result carries a
        generic French message.

        Args:
            exc: The caught exception
            context: Additional context for logging
            log_level: Logging level (default ERROR)

        Returns:
            Failed ServiceResult with error_code INTERNAL_ERROR

        Example:
            try:
                with cls.atomic():
                    ...
            except DatabaseError as e:
                return cls.handle_exception(e, "username change")
        """
        logger = cls.get_logger()
        message = f"{context}: {exc}" if context else str(exc)
        logger.log(log_level, message, exc_info=True)
        return ServiceResult.failure(
            INTERNAL_ERROR_MESSAGE,
            error_code="INTERNAL_ERROR",
        )

    @classmethod
    def validate_required(cls, **kwargs) -> ServiceResult | None:
        """
        Validate that required fields are provided.

        Returns a failure result if any required field is None or blank.
        Returns None if all fields are valid.

        Example:
            validation = cls.validate_required(name=name)
            if validation is not None:
                return validation
        """
        errors = {}
        for field_name, value in kwargs.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                errors[field_name] = ["Ce champ est obligatoire."]

        if errors:
            return ServiceResult.failure(
                "Champs obligatoires manquants.",
                error_code="VALIDATION_ERROR",
                errors=errors,
            )
        return None
