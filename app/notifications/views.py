"""
Views for push notification API.

Endpoints:
    POST   /api/v1/notifications/push/subscriptions/ - Register a subscription
    DELETE /api/v1/notifications/push/subscriptions/ - Remove a subscription
    GET    /api/v1/notifications/push/public-key/    - VAPID public key
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from core.views import invalid_request_response, result_response
from notifications.serializers import (
    PublicKeySerializer,
    PushSubscriptionSerializer,
    PushUnsubscribeSerializer,
)
from notifications.services import PushNotificationService


class PushSubscriptionView(APIView):
    """
    POST: Register the browser's push subscription
    DELETE: Remove it

    URL: /api/v1/notifications/push/subscriptions/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="push_subscribe",
        summary="Subscribe to push notifications",
        tags=["Notifications"],
        request=PushSubscriptionSerializer,
        responses={201: PushSubscriptionSerializer},
    )
    def post(self, request):
        serializer = PushSubscriptionSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = PushNotificationService.subscribe(request.user, serializer.validated_data)
        return result_response(result, success_status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="push_unsubscribe",
        summary="Unsubscribe from push notifications",
        tags=["Notifications"],
        request=PushUnsubscribeSerializer,
    )
    def delete(self, request):
        serializer = PushUnsubscribeSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = PushNotificationService.unsubscribe(
            request.user, serializer.validated_data["endpoint"]
        )
        return result_response(result)


class PushPublicKeyView(APIView):
    """
    GET: VAPID application server key

    URL: /api/v1/notifications/push/public-key/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="push_public_key",
        summary="Get the VAPID public key",
        tags=["Notifications"],
        responses={200: PublicKeySerializer},
    )
    def get(self, request):
        return result_response(PushNotificationService.public_key())
