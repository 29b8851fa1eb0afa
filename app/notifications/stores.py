"""
Push subscription stores.

Stores:
    DatabasePushSubscriptionStore: PushSubscription rows (default)
    InMemoryPushSubscriptionStore: Process-local dict, for tests and
        single-process development servers

The active store is named by the PUSH_SUBSCRIPTION_STORE setting (dotted
path) and built once per path.
"""

from __future__ import annotations

import threading
from functools import lru_cache
from typing import TYPE_CHECKING

from django.conf import settings
from django.utils.module_loading import import_string

from notifications.models import PushSubscription

if TYPE_CHECKING:
    from typing import Any

    from notifications.protocols import PushSubscriptionStore


def _parse(subscription: dict) -> tuple[str, str, str]:
    keys = subscription.get("keys") or {}
    return subscription["endpoint"], keys["p256dh"], keys["auth"]


class DatabasePushSubscriptionStore:
    """Subscriptions persisted in the PushSubscription table."""

    def save(self, user: Any, subscription: dict) -> None:
        endpoint, p256dh, auth = _parse(subscription)
        PushSubscription.objects.update_or_create(
            endpoint=endpoint,
            defaults={"user": user, "p256dh": p256dh, "auth": auth},
        )

    def remove(self, endpoint: str) -> bool:
        deleted, _ = PushSubscription.objects.filter(endpoint=endpoint).delete()
        return deleted > 0

    def for_user(self, user: Any) -> list[dict]:
        return [
            subscription.as_subscription_info()
            for subscription in PushSubscription.objects.filter(user=user).order_by("created_at")
        ]


class InMemoryPushSubscriptionStore:
    """
    Subscriptions kept in a dict keyed by endpoint.

    Contents are lost on restart and are not shared between processes, so
    Celery workers only see them when tasks run eagerly.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._by_endpoint: dict[str, tuple[Any, dict]] = {}

    def save(self, user: Any, subscription: dict) -> None:
        endpoint, p256dh, auth = _parse(subscription)
        with self._lock:
            self._by_endpoint.pop(endpoint, None)
            self._by_endpoint[endpoint] = (
                user.pk,
                {"endpoint": endpoint, "keys": {"p256dh": p256dh, "auth": auth}},
            )

    def remove(self, endpoint: str) -> bool:
        with self._lock:
            return self._by_endpoint.pop(endpoint, None) is not None

    def for_user(self, user: Any) -> list[dict]:
        with self._lock:
            return [info for owner, info in self._by_endpoint.values() if owner == user.pk]

    def clear(self) -> None:
        with self._lock:
            self._by_endpoint.clear()


@lru_cache(maxsize=None)
def _build_store(dotted_path: str) -> PushSubscriptionStore:
    return import_string(dotted_path)()


def get_subscription_store() -> PushSubscriptionStore:
    """Return the store configured by PUSH_SUBSCRIPTION_STORE."""
    return _build_store(settings.PUSH_SUBSCRIPTION_STORE)
