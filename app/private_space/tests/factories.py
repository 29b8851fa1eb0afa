"""
Factory Boy factories for private space models.
"""

import factory
from django.utils import timezone

from authentication.tests.factories import UserFactory
from private_space.models import PrivateSpaceMember, PrivateSpacePost

PASSCODE = "clair-de-lune"


class PrivateSpaceMemberFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PrivateSpaceMember

    user = factory.SubFactory(UserFactory)


class PrivateSpacePostFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PrivateSpacePost

    user = factory.SubFactory(UserFactory)
    text = factory.Faker("sentence")
    timestamp = factory.LazyFunction(timezone.now)
