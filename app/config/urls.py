"""
URL configuration for the family chat backend.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Accounts and sessions
        register/                  - Create an account
        login/                     - Username/password login (JWT pair)
        token/refresh/             - Rotate refresh token
        logout/                    - Blacklist refresh token
        me/                        - Current profile (GET/PATCH)
        me/username/               - Change username
        me/password/               - Change password
        users/                     - List users
    /api/v1/friends/               - Friend list
        requests/                  - Incoming/outgoing requests, send request
        requests/{username}/accept|reject|cancel/
    /api/v1/chat/                  - Chat endpoints
        snapshot/                  - Everything a client needs at start-up
        groups/                    - Create group
        groups/{id}/               - Group detail/update
        groups/{id}/members/       - Add members
        groups/{id}/leave/         - Leave group
        chats/{chat_id}/messages/  - Message list/send
        chats/{chat_id}/read/      - Clear unread counter
        chats/{chat_id}/theme/     - Set theme
        chats/{chat_id}/wallpaper/ - Set wallpaper
        messages/{id}/             - Edit/delete message
        messages/{id}/forward/     - Forward message
        attachments/               - Upload attachment
    /api/v1/private-space/         - Two-person private feed
        unlock/                    - Exchange passcode for unlock token
        posts/                     - List/add posts
        posts/{id}/                - Delete post
    /api/v1/notifications/         - Web Push
        push/subscriptions/        - Subscribe/unsubscribe
        push/public-key/           - VAPID public key
    /uploads/                      - Stored attachments (DEBUG only)

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    path("auth/", include("authentication.urls")),
    path("friends/", include("friends.urls")),
    path("chat/", include("chat.urls")),
    path("private-space/", include("private_space.urls")),
    path("notifications/", include("notifications.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# Attachments are served by the web server in production
urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Family Chat Admin"
admin.site.site_title = "Family Chat"
admin.site.index_title = "Administration"
