"""
Test configuration and fixtures for private space tests.

This module provides:
- Two members (alice, bob) and a non-member (carol)
- A fixed passcode and unlock tokens for the members
- API client helpers, with and without the unlock header
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from private_space.services import PrivateSpaceService
from private_space.tests.factories import PASSCODE, PrivateSpaceMemberFactory


@pytest.fixture(autouse=True)
def passcode(settings):
    settings.PRIVATE_SPACE_PASSCODE = PASSCODE
    settings.PRIVATE_SPACE_UNLOCK_MAX_AGE = 600
    return PASSCODE

@pytest.fixture
def alice(db):
    user = UserFactory(username="alice")
    PrivateSpaceMemberFactory(user=user)
    return user

@pytest.fixture
def bob(db):
    user = UserFactory(username="bob")
    PrivateSpaceMemberFactory(user=user)
    return user

@pytest.fixture
def carol(db):
    """Registered user without private space access."""
    return UserFactory(username="carol")

@pytest.fixture
def token_for():
    """Unlock token for a member."""

    def _token_for(user):
        return PrivateSpaceService.unlock(user, PASSCODE).data["token"]

    return _token_for

@pytest.fixture
def client_for(token_for):
    """
    API client authenticated as ``user``.

    Pass ``unlocked=True`` to also send the member's unlock token.
    """

    def _client_for(user, unlocked=False):
        client = APIClient()
        headers = {"HTTP_AUTHORIZATION": f"Bearer {RefreshToken.for_user(user).access_token}"}
        if unlocked:
            headers["HTTP_X_PRIVATE_SPACE_TOKEN"] = token_for(user)
        client.credentials(**headers)
        return client

    return _client_for


@pytest.fixture
def api_client():
    return APIClient()
