"""
Test configuration and fixtures for chat tests.

This module provides:
- Three users (alice, bob, carol) and an outsider (dave)
- A "Famille" group with alice, bob and carol
- The alice/bob direct chat id
- API client helpers for authenticated requests

Usage:
    def test_example(alice, family_group, client_for):
        response = client_for(alice).get(f"/api/v1/chat/groups/{family_group.id}/")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from chat.identifiers import direct_chat_id
from chat.tests.factories import GroupFactory


# =============================================================================
# User Fixtures
# =============================================================================


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
def dave(db):
    """A user outside every test chat."""
    return UserFactory(username="dave")


# =============================================================================
# Chat Fixtures
# =============================================================================


@pytest.fixture
def family_group(alice, bob, carol):
    """Group created by alice with bob and carol as members."""
    return GroupFactory(name="Famille", creator=alice, members=[bob, carol])


@pytest.fixture
def direct_chat(alice, bob):
    """Chat id of the alice/bob direct chat."""
    return direct_chat_id("alice", "bob")


# =============================================================================
# API Client Fixtures
# =============================================================================


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
