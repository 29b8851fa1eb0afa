"""
Test configuration and fixtures for friends tests.

Usage:
    def test_example(alice, bob, client_for):
        response = client_for(alice).get("/api/v1/friends/")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory


@pytest.fixture
def alice(db):
    return UserFactory(username="alice")


@pytest.fixture
def bob(db):
    return UserFactory(username="bob")


@pytest.fixture
def carol(db):
    return UserFactory(username="carol")


@pytest.fixture
def client_for():
    """Build an API client authenticated as the given user."""

    def _client_for(user):
        client = APIClient()
        client.credentials(
            HTTP_AUTHORIZATION=f"Bearer {RefreshToken.for_user(user).access_token}"
        )
        return client

    return _client_for


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()
