"""
Core views providing infrastructure endpoints and response helpers.

This module contains views that are not part of the business domain but are
essential for application infrastructure, such as health checks, plus the
helper every API view uses to turn a ServiceResult into an HTTP response.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import DatabaseError, connection
from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response

if TYPE_CHECKING:
    from typing import Any

    from core.services import ServiceResult

# Error codes that mean "forbidden" rather than "bad request"
FORBIDDEN_ERROR_CODES = frozenset(
    [
        "PERMISSION_DENIED",
        "NOT_PARTICIPANT",
        "NOT_MEMBER",
        "NOT_SENDER",
        "NOT_AUTHOR",
        "LOCKED",
    ]
)


def status_for_error(error_code: str | None) -> int:
    """Map a ServiceResult error code to an HTTP status."""
    if error_code and error_code.endswith("NOT_FOUND"):
        return status.HTTP_404_NOT_FOUND
    if error_code in FORBIDDEN_ERROR_CODES:
        return status.HTTP_403_FORBIDDEN
    return status.HTTP_400_BAD_REQUEST


def result_response(
    result: ServiceResult,
    data: Any = None,
    success_status: int = status.HTTP_200_OK,
) -> Response:
    """
    Convert a ServiceResult to a DRF Response.

    Args:
        result: Outcome of a service call
        data: Serialized payload to return instead of ``result.data``
        success_status: HTTP status for successful results

    Example:
        result = GroupService.create_group(request.user, name, members)
        return result_response(
            result,
            data=GroupSerializer(result.data).data if result else None,
            success_status=status.HTTP_201_CREATED,
        )
    """
    if result.success:
        return Response(result.to_response(data), status=success_status)
    return Response(result.to_response(), status=status_for_error(result.error_code))


def invalid_request_response(serializer) -> Response:
    """
    400 response for a request body that failed serializer validation.

    Uses the same envelope as a failed ServiceResult.
    """
    return Response(
        {
            "success": False,
            "error": "Données invalides.",
            "error_code": "VALIDATION_ERROR",
            "errors": serializer.errors,
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    Returns:
        JsonResponse with status and database connectivity:
        - status: "healthy" or "unhealthy"
        - database: "connected" or "disconnected"

    HTTP Status Codes:
        200: Database reachable
        503: Database unreachable
    """
    health_status = {
        "status": "healthy",
        "database": "unknown",
    }

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        health_status["database"] = "connected"
    except DatabaseError:
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JsonResponse(health_status, status=status_code)
