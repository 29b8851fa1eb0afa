"""
Factory Boy factories for notification models.
"""

import factory

from authentication.tests.factories import UserFactory
from notifications.models import PushSubscription


def subscription_info(endpoint="https://push.example.com/sub/1", p256dh="BPk3", auth="c2VjcmV0"):
    """Browser-style subscription dict, as sent by ``subscription.toJSON()``."""
    return {"endpoint": endpoint, "keys": {"p256dh": p256dh, "auth": auth}}


class PushSubscriptionFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PushSubscription

    user = factory.SubFactory(UserFactory)
    endpoint = factory.Sequence(lambda n: f"https://push.example.com/sub/{n}")
    p256dh = factory.Faker("pystr", min_chars=20, max_chars=20)
    auth = factory.Faker("pystr", min_chars=8, max_chars=8)
