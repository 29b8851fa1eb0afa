"""
Test configuration and fixtures for notification tests.

This module provides:
- Two users (alice, bob)
- VAPID settings that enable delivery
- API client helpers for authenticated requests

Usage:
    def test_example(alice, client_for):
        response = client_for(alice).get("/api/v1/notifications/push/public-key/")
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
def vapid(settings):
    """Configure a VAPID key pair so tasks try to deliver."""
    settings.VAPID_PUBLIC_KEY = "BPublicKeyForTests"
    settings.VAPID_PRIVATE_KEY = "private-key-for-tests"
    settings.VAPID_CLAIMS_EMAIL = "push@example.com"
    return settings


@pytest.fixture
def api_client():
    return APIClient()


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
