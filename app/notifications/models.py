"""
Push notification models.

Models:
    PushSubscription: A browser Web Push subscription owned by a user
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from core.models import BaseModel


class PushSubscription(BaseModel):
    """
    A Web Push subscription as produced by the browser's PushManager.

    One user may hold several subscriptions (one per browser/device).
    The endpoint identifies a subscription globally: subscribing again from
    the same browser, even as another user, replaces the row.

    Fields:
        user: Owner of the subscription
        endpoint: Push service URL
        p256dh: Client public key (base64url)
        auth: Client auth secret (base64url)
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="push_subscriptions",
    )
    endpoint = models.URLField(max_length=1000, unique=True)
    p256dh = models.CharField(max_length=255)
    auth = models.CharField(max_length=255)

    class Meta:
        db_table = "notifications_push_subscription"
        ordering = ["created_at"]

    def __str__(self) -> str:
        return f"{self.user_id}: {self.endpoint[:60]}"

    def as_subscription_info(self) -> dict:
        """Subscription in the shape pywebpush expects."""
        return {
            "endpoint": self.endpoint,
            "keys": {"p256dh": self.p256dh, "auth": self.auth},
        }
