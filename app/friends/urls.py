"""
URL configuration for the friends app.

URL structure:
    /api/v1/friends/                             - Friend list
    /api/v1/friends/requests/                    - List/send requests
    /api/v1/friends/requests/{username}/accept/  - Accept
    /api/v1/friends/requests/{username}/reject/  - Reject
    /api/v1/friends/requests/{username}/cancel/  - Cancel
"""

from django.urls import path

from friends.views import (
    FriendListView,
    FriendRequestAcceptView,
    FriendRequestCancelView,
    FriendRequestListView,
    FriendRequestRejectView,
)

app_name = "friends"

urlpatterns = [
    path("", FriendListView.as_view(), name="friend-list"),
    path("requests/", FriendRequestListView.as_view(), name="request-list"),
    path(
        "requests/<str:username>/accept/",
        FriendRequestAcceptView.as_view(),
        name="request-accept",
    ),
    path(
        "requests/<str:username>/reject/",
        FriendRequestRejectView.as_view(),
        name="request-reject",
    ),
    path(
        "requests/<str:username>/cancel/",
        FriendRequestCancelView.as_view(),
        name="request-cancel",
    ),
]
