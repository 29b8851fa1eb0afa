"""
Private space views.

Endpoints:
    POST   /api/v1/private-space/unlock/        - Exchange passcode for an unlock token
    GET    /api/v1/private-space/posts/         - List posts
    POST   /api/v1/private-space/posts/         - Add a post
    DELETE /api/v1/private-space/posts/{id}/    - Delete own post

Feed endpoints expect the unlock token in the X-Private-Space-Token header.
"""

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from core.views import invalid_request_response, result_response
from private_space.serializers import (
    PrivateSpacePostCreateSerializer,
    PrivateSpacePostSerializer,
    UnlockResponseSerializer,
    UnlockSerializer,
)
from private_space.services import PrivateSpaceService

UNLOCK_TOKEN_HEADER = "X-Private-Space-Token"

UNLOCK_TOKEN_PARAMETER = OpenApiParameter(
    name=UNLOCK_TOKEN_HEADER,
    type=OpenApiTypes.STR,
    location=OpenApiParameter.HEADER,
    required=True,
    description="Token returned by /private-space/unlock/",
)


def unlock_token(request) -> str | None:
    return request.headers.get(UNLOCK_TOKEN_HEADER)


class UnlockView(APIView):
    """POST: Unlock the private space with the shared passcode."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="private_space_unlock",
        summary="Unlock private space",
        tags=["Private space"],
        request=UnlockSerializer,
        responses={200: UnlockResponseSerializer},
    )
    def post(self, request):
        serializer = UnlockSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = PrivateSpaceService.unlock(request.user, serializer.validated_data["passcode"])
        return result_response(result)


class PostListView(APIView):
    """
    GET: Posts, oldest first
    POST: Add a post (text and/or uploaded attachment)
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="private_space_posts_list",
        summary="List private posts",
        tags=["Private space"],
        parameters=[UNLOCK_TOKEN_PARAMETER],
        responses={200: PrivateSpacePostSerializer(many=True)},
    )
    def get(self, request):
        result = PrivateSpaceService.list_posts(request.user, unlock_token(request))
        return result_response(
            result,
            data=PrivateSpacePostSerializer(result.data, many=True).data if result else None,
        )

    @extend_schema(
        operation_id="private_space_posts_create",
        summary="Add private post",
        tags=["Private space"],
        parameters=[UNLOCK_TOKEN_PARAMETER],
        request=PrivateSpacePostCreateSerializer,
        responses={201: PrivateSpacePostSerializer},
    )
    def post(self, request):
        serializer = PrivateSpacePostCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = PrivateSpaceService.add_post(
            request.user,
            unlock_token(request),
            text=serializer.validated_data["text"],
            attachment=serializer.validated_data["attachment"],
        )
        return result_response(
            result,
            data=PrivateSpacePostSerializer(result.data).data if result else None,
            success_status=status.HTTP_201_CREATED,
        )


class PostDetailView(APIView):
    """DELETE: Delete one's own post."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="private_space_posts_delete",
        summary="Delete private post",
        tags=["Private space"],
        parameters=[UNLOCK_TOKEN_PARAMETER],
    )
    def delete(self, request, post_id):
        result = PrivateSpaceService.delete_post(request.user, unlock_token(request), post_id)
        return result_response(result)
