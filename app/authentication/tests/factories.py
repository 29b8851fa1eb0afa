"""
Factory Boy factories for authentication models.

Usage:
    from authentication.tests.factories import UserFactory

    user = UserFactory()
    alice = UserFactory(username="alice")
    inactive = UserFactory(is_active=False)
"""

import factory

from authentication.models import User

DEFAULT_PASSWORD = "TestPass123!"


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    Every user gets the password ``DEFAULT_PASSWORD`` unless one is given.
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    phone = factory.Faker("numerify", text="06########")
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        password = kwargs.pop("password", DEFAULT_PASSWORD)
        return model_class.objects.create_user(
            username=kwargs.pop("username"),
            email=kwargs.pop("email"),
            password=password,
            **kwargs,
        )
