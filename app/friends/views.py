"""
Friend graph views.

Endpoints:
    GET  /api/v1/friends/                             - Friend list
    GET  /api/v1/friends/requests/                    - Incoming and outgoing requests
    POST /api/v1/friends/requests/                    - Send a request
    POST /api/v1/friends/requests/{username}/accept/  - Accept
    POST /api/v1/friends/requests/{username}/reject/  - Reject
    POST /api/v1/friends/requests/{username}/cancel/  - Cancel a sent request
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.views import invalid_request_response, result_response
from friends.serializers import (
    FriendRequestCreateSerializer,
    FriendRequestSerializer,
    FriendSerializer,
)
from friends.services import FriendService


class FriendListView(APIView):
    """GET: List the current user's friends."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="friends_list",
        summary="List friends",
        tags=["Friends"],
        responses={200: FriendSerializer(many=True)},
    )
    def get(self, request):
        friends = FriendService.list_friends(request.user)
        return Response({"success": True, "data": FriendSerializer(friends, many=True).data})


class FriendRequestListView(APIView):
    """
    GET: Pending requests, split into incoming and outgoing
    POST: Send a friend request
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="friends_requests_list",
        summary="List pending friend requests",
        tags=["Friends"],
    )
    def get(self, request):
        incoming = FriendService.incoming_requests(request.user)
        outgoing = FriendService.outgoing_requests(request.user)
        return Response(
            {
                "success": True,
                "data": {
                    "incoming": FriendRequestSerializer(incoming, many=True).data,
                    "outgoing": FriendRequestSerializer(outgoing, many=True).data,
                },
            }
        )

    @extend_schema(
        operation_id="friends_requests_create",
        summary="Send a friend request",
        tags=["Friends"],
        request=FriendRequestCreateSerializer,
        responses={201: FriendRequestSerializer},
    )
    def post(self, request):
        serializer = FriendRequestCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = FriendService.send_request(request.user, serializer.validated_data["username"])
        return result_response(
            result,
            data=FriendRequestSerializer(result.data).data if result else None,
            success_status=status.HTTP_201_CREATED,
        )


class FriendRequestAcceptView(APIView):
    """POST: Accept the request sent by {username}."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="friends_requests_accept",
        summary="Accept a friend request",
        tags=["Friends"],
        request=None,
        responses={200: FriendSerializer},
    )
    def post(self, request, username):
        result = FriendService.accept_request(request.user, username)
        return result_response(
            result,
            data=FriendSerializer(result.data).data if result else None,
        )


class FriendRequestRejectView(APIView):
    """POST: Reject the request sent by {username}."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="friends_requests_reject",
        summary="Reject a friend request",
        tags=["Friends"],
        request=None,
    )
    def post(self, request, username):
        return result_response(FriendService.reject_request(request.user, username))


class FriendRequestCancelView(APIView):
    """POST: Withdraw the request sent to {username}."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="friends_requests_cancel",
        summary="Cancel a sent friend request",
        tags=["Friends"],
        request=None,
    )
    def post(self, request, username):
        return result_response(FriendService.cancel_request(request.user, username))
