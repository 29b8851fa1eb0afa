"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/register/        - Create an account
    /api/v1/auth/login/           - Username/password login (JWT pair)
    /api/v1/auth/token/refresh/   - Rotate refresh token (simplejwt)
    /api/v1/auth/logout/          - Blacklist refresh token
    /api/v1/auth/me/              - Current profile (GET/PATCH)
    /api/v1/auth/me/username/     - Change username
    /api/v1/auth/me/password/     - Change password
    /api/v1/auth/users/           - List users
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.views import (
    LoginView,
    LogoutView,
    MeView,
    PasswordChangeView,
    RegisterView,
    UserListView,
    UsernameChangeView,
)

app_name = "authentication"

urlpatterns = [
    # Registration & sessions
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("logout/", LogoutView.as_view(), name="logout"),
    # Current user
    path("me/", MeView.as_view(), name="me"),
    path("me/username/", UsernameChangeView.as_view(), name="username-change"),
    path("me/password/", PasswordChangeView.as_view(), name="password-change"),
    # Directory
    path("users/", UserListView.as_view(), name="user-list"),
]
