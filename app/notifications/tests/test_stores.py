"""
Tests for push subscription stores.
"""

import pytest

from notifications.models import PushSubscription
from notifications.protocols import PushSubscriptionStore
from notifications.stores import (
    DatabasePushSubscriptionStore,
    InMemoryPushSubscriptionStore,
    get_subscription_store,
)
from notifications.tests.factories import subscription_info


@pytest.fixture(params=[DatabasePushSubscriptionStore, InMemoryPushSubscriptionStore])
def store(request, db):
    return request.param()


class TestStores:
    def test_implements_protocol(self, store):
        assert isinstance(store, PushSubscriptionStore)

    def test_save_and_list(self, store, alice, bob):
        store.save(alice, subscription_info("https://push.example.com/a"))
        store.save(bob, subscription_info("https://push.example.com/b"))

        assert store.for_user(alice) == [subscription_info("https://push.example.com/a")]

    def test_saving_same_endpoint_moves_it(self, store, alice, bob):
        store.save(alice, subscription_info("https://push.example.com/shared"))
        store.save(bob, subscription_info("https://push.example.com/shared", auth="nouveau"))

        assert store.for_user(alice) == []
        assert store.for_user(bob)[0]["keys"]["auth"] == "nouveau"

    def test_remove(self, store, alice):
        store.save(alice, subscription_info())

        assert store.remove(subscription_info()["endpoint"]) is True
        assert store.remove(subscription_info()["endpoint"]) is False
        assert store.for_user(alice) == []


class TestDatabaseStore:
    def test_rows_are_persisted(self, alice):
        DatabasePushSubscriptionStore().save(alice, subscription_info())

        row = PushSubscription.objects.get()
        assert row.user == alice
        assert row.p256dh == "BPk3"


class TestInMemoryStore:
    def test_clear(self, alice):
        store = InMemoryPushSubscriptionStore()
        store.save(alice, subscription_info())

        store.clear()

        assert store.for_user(alice) == []


class TestGetSubscriptionStore:
    def test_uses_setting(self, settings):
        settings.PUSH_SUBSCRIPTION_STORE = "notifications.stores.InMemoryPushSubscriptionStore"

        assert isinstance(get_subscription_store(), InMemoryPushSubscriptionStore)

    def test_same_instance_per_path(self):
        assert get_subscription_store() is get_subscription_store()
