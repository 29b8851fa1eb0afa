"""
Test configuration and fixtures for authentication tests.

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get("/api/v1/auth/me/")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import User
from authentication.tests.factories import DEFAULT_PASSWORD, UserFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def password():
    return DEFAULT_PASSWORD


@pytest.fixture
def user(db):
    """Create a basic active user named 'alice'."""
    return UserFactory(username="alice")


@pytest.fixture
def other_user(db):
    """Create a second active user named 'bob'."""
    return UserFactory(username="bob")


@pytest.fixture
def deactivated_user(db):
    """Create a deactivated user (is_active=False)."""
    return UserFactory(username="ghost", is_active=False)


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        username="boss", email="boss@example.com", password="AdminPass123!"
    )


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def refresh_token(user):
    """A refresh token issued to ``user`` (recorded as outstanding)."""
    return RefreshToken.for_user(user)


@pytest.fixture
def authenticated_client(user, refresh_token):
    """API client authenticated as ``user`` with a JWT access token."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh_token.access_token}")
    return client
