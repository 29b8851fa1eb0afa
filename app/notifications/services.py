"""
Push notification service layer.

Services:
    PushNotificationService: Subscription management and new-message fan-out

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure()
    - Subscriptions go through the configured PushSubscriptionStore
    - Delivery happens in Celery tasks, one per recipient

Usage:
    from notifications.services import PushNotificationService

    result = PushNotificationService.subscribe(user, {
        "endpoint": "https://push.example.com/abc",
        "keys": {"p256dh": "...", "auth": "..."},
    })

    PushNotificationService.notify_new_message(message, recipient_ids)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings

from chat.identifiers import is_group_chat_id
from chat.models import Group
from core.services import BaseService, ServiceResult
from notifications import tasks
from notifications.stores import get_subscription_store

if TYPE_CHECKING:
    from authentication.models import User
    from chat.models import Message

logger = logging.getLogger(__name__)

# Characters of message text included in a push body
PUSH_BODY_PREVIEW_LENGTH = 120


class PushNotificationService(BaseService):
    """
    Service for Web Push subscriptions and delivery.

    Methods:
        subscribe: Store a browser subscription for a user
        unsubscribe: Remove one of the user's subscriptions
        public_key: VAPID public key browsers subscribe with
        build_message_payload: Push payload describing a new message
        notify_new_message: Queue a push per recipient

    Error codes:
        VALIDATION_ERROR: Subscription without endpoint or keys
        SUBSCRIPTION_NOT_FOUND: Endpoint not registered for this user
        PUSH_NOT_CONFIGURED: No VAPID public key
    """

    @classmethod
    def subscribe(cls, user: User, subscription: dict) -> ServiceResult[dict]:
        """
        Register a subscription for ``user``.

        Args:
            user: Owner
            subscription: {"endpoint": ..., "keys": {"p256dh": ..., "auth": ...}}

        Returns:
            ServiceResult with the stored subscription
        """
        keys = subscription.get("keys") or {}
        validation = cls.validate_required(
            endpoint=subscription.get("endpoint"),
            p256dh=keys.get("p256dh"),
            auth=keys.get("auth"),
        )
        if validation is not None:
            return validation

        get_subscription_store().save(user, subscription)
        cls.get_logger().info(f"Push subscription saved for {user.username}")
        return ServiceResult.success(subscription, "Abonnement enregistré.")

    @classmethod
    def unsubscribe(cls, user: User, endpoint: str) -> ServiceResult[None]:
        store = get_subscription_store()
        owned = {s["endpoint"] for s in store.for_user(user)}
        if endpoint not in owned:
            return ServiceResult.failure(
                "Abonnement non trouvé.",
                error_code="SUBSCRIPTION_NOT_FOUND",
            )
        store.remove(endpoint)
        return ServiceResult.success(None, "Abonnement supprimé.")

    @classmethod
    def public_key(cls) -> ServiceResult[dict]:
        if not settings.VAPID_PUBLIC_KEY:
            return ServiceResult.failure(
                "Les notifications push ne sont pas configurées.",
                error_code="PUSH_NOT_CONFIGURED",
            )
        return ServiceResult.success({"public_key": settings.VAPID_PUBLIC_KEY})

    @staticmethod
    def build_message_payload(message: Message) -> dict:
        """
        Describe ``message`` for a notification.

        The title is the sender, followed by the group name for group chats;
        the body is a preview of the text, or the attachment name.
        """
        title = message.sender.username
        if is_group_chat_id(message.chat_id):
            group_name = Group.objects.filter(pk=message.chat_id).values_list("name", flat=True).first()
            if group_name:
                title = f"{title} ({group_name})"

        if message.text:
            body = message.text[:PUSH_BODY_PREVIEW_LENGTH]
        elif message.has_attachment:
            body = f"Pièce jointe : {message.attachment_name or message.attachment_type}"
        else:
            body = ""

        return {
            "title": title,
            "body": body,
            "chat_id": message.chat_id,
            "message_id": str(message.id),
        }

    @classmethod
    def notify_new_message(cls, message: Message, recipient_ids: list) -> int:
        """
        Queue one push task per recipient.

        Must be called after the message is committed (MessageService does
        this through transaction.on_commit).

        Returns:
            Number of tasks queued
        """
        payload = cls.build_message_payload(message)
        for recipient_id in recipient_ids:
            tasks.send_push_notification.delay(str(recipient_id), payload)

        cls.get_logger().debug(
            f"Queued push for message {message.id} to {len(recipient_ids)} recipient(s)"
        )
        return len(recipient_ids)
