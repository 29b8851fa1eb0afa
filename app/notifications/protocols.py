"""
Protocol definitions for push subscription storage.

Services never talk to a concrete store: they ask
notifications.stores.get_subscription_store() for the one named by the
PUSH_SUBSCRIPTION_STORE setting.

Subscriptions are exchanged as plain dicts in the browser/pywebpush shape:

    {"endpoint": "https://...", "keys": {"p256dh": "...", "auth": "..."}}

Usage:
    from notifications.protocols import PushSubscriptionStore

    def deliver(store: PushSubscriptionStore, user):
        for subscription in store.for_user(user):
            ...

    class RedisSubscriptionStore:
        def save(self, user, subscription): ...
        def remove(self, endpoint): ...
        def for_user(self, user): ...

    # RedisSubscriptionStore is a valid PushSubscriptionStore
    # even without explicit inheritance (duck typing)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import Any


@runtime_checkable
class PushSubscriptionStore(Protocol):
    """Where Web Push subscriptions live."""

    def save(self, user: Any, subscription: dict) -> None:
        """
        Store a subscription for ``user``.

        Saving an endpoint that is already stored replaces it, including
        its owner.
        """
        ...

    def remove(self, endpoint: str) -> bool:
        """
        Forget a subscription.

        Returns:
            True if something was removed
        """
        ...

    def for_user(self, user: Any) -> list[dict]:
        """All subscriptions of ``user``, oldest first."""
        ...
