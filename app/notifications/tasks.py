"""
Celery tasks for push notification delivery.

Tasks:
    send_push_notification: Deliver one payload to every subscription of a user

Design:
    - Tasks receive the recipient's id (string) and a JSON-serializable payload
    - Subscriptions come from the configured PushSubscriptionStore
    - Subscriptions the push service reports as gone (404/410) are removed
    - Other push failures are raised so Celery retries with backoff
    - Without a VAPID private key nothing is sent (development, tests)

Usage:
    from notifications.tasks import send_push_notification

    # Queued by PushNotificationService.notify_new_message()
    send_push_notification.delay(user_id="uuid-string", payload={...})
"""

from __future__ import annotations

import json
import logging

from celery import shared_task
from django.conf import settings
from pywebpush import WebPushException, webpush

from authentication.models import User
from notifications.stores import get_subscription_store

logger = logging.getLogger(__name__)

# Push service answers meaning the subscription no longer exists
EXPIRED_SUBSCRIPTION_STATUSES = {404, 410}


def _vapid_claims() -> dict:
    # pywebpush adds "aud" and "exp" to the dict it receives
    return {"sub": f"mailto:{settings.VAPID_CLAIMS_EMAIL}"}


@shared_task(
    bind=True,
    autoretry_for=(Exception,),
    retry_backoff=True,
    retry_kwargs={"max_retries": 3},
)
def send_push_notification(self, user_id: str, payload: dict) -> int:
    """
    Send a Web Push payload to every subscription of a user.

    Flow:
        1. Skip when no VAPID private key is configured
        2. Load the user's subscriptions from the store
        3. Sign and send each one with pywebpush
        4. Drop subscriptions answered with 404/410
        5. Raise any other push failure (triggers retry)

    Args:
        user_id: Primary key of the recipient
        payload: Notification body (title, body, chat_id, ...)

    Returns:
        Number of subscriptions the payload was delivered to
    """
    if not settings.VAPID_PRIVATE_KEY:
        logger.info(f"VAPID private key not configured, skipping push to user {user_id}")
        return 0

    user = User.objects.filter(pk=user_id, is_active=True).first()
    if user is None:
        logger.warning(f"Push recipient {user_id} not found")
        return 0

    store = get_subscription_store()
    data = json.dumps(payload)
    sent = 0

    for subscription in store.for_user(user):
        endpoint = subscription["endpoint"]
        try:
            webpush(
                subscription_info=subscription,
                data=data,
                vapid_private_key=settings.VAPID_PRIVATE_KEY,
                vapid_claims=_vapid_claims(),
                ttl=settings.PUSH_TTL_SECONDS,
            )
        except WebPushException as e:
            status_code = getattr(e.response, "status_code", None)
            if status_code in EXPIRED_SUBSCRIPTION_STATUSES:
                store.remove(endpoint)
                logger.info(f"Removed expired push subscription of user {user_id} ({status_code})")
                continue
            logger.warning(f"Push to user {user_id} failed ({status_code}): {e}, will retry")
            raise
        sent += 1

    logger.debug(f"Push delivered to {sent} subscription(s) of user {user_id}")
    return sent
