"""
URL configuration for the private space.

Routes:
    /unlock/          - Unlock (POST)
    /posts/           - List (GET), add (POST)
    /posts/{id}/      - Delete (DELETE)
"""

from django.urls import path

from private_space.views import PostDetailView, PostListView, UnlockView

app_name = "private_space"

urlpatterns = [
    path("unlock/", UnlockView.as_view(), name="unlock"),
    path("posts/", PostListView.as_view(), name="posts"),
    path("posts/<uuid:post_id>/", PostDetailView.as_view(), name="post-detail"),
]
