"""
URL configuration for chat API.

URL Structure:
    Snapshot:
        /snapshot/                          GET

    Groups:
        /groups/                            POST
        /groups/{id}/                       GET, PATCH
        /groups/{id}/members/               POST
        /groups/{id}/leave/                 POST

    Chats:
        /chats/{chat_id}/messages/          GET, POST
        /chats/{chat_id}/read/              POST
        /chats/{chat_id}/theme/             PUT
        /chats/{chat_id}/wallpaper/         PUT

    Messages:
        /messages/{id}/                     PATCH, DELETE
        /messages/{id}/forward/             POST

    Attachments:
        /attachments/                       POST
"""

from django.urls import path

from chat.views import (
    AttachmentUploadView,
    ChatMessagesView,
    ChatReadView,
    ChatThemeView,
    ChatWallpaperView,
    GroupCreateView,
    GroupDetailView,
    GroupLeaveView,
    GroupMembersView,
    MessageDetailView,
    MessageForwardView,
    SnapshotView,
)

app_name = "chat"

urlpatterns = [
    path("snapshot/", SnapshotView.as_view(), name="snapshot"),
    # Groups
    path("groups/", GroupCreateView.as_view(), name="group-create"),
    path("groups/<str:group_id>/", GroupDetailView.as_view(), name="group-detail"),
    path("groups/<str:group_id>/members/", GroupMembersView.as_view(), name="group-members"),
    path("groups/<str:group_id>/leave/", GroupLeaveView.as_view(), name="group-leave"),
    # Chats
    path("chats/<str:chat_id>/messages/", ChatMessagesView.as_view(), name="chat-messages"),
    path("chats/<str:chat_id>/read/", ChatReadView.as_view(), name="chat-read"),
    path("chats/<str:chat_id>/theme/", ChatThemeView.as_view(), name="chat-theme"),
    path("chats/<str:chat_id>/wallpaper/", ChatWallpaperView.as_view(), name="chat-wallpaper"),
    # Messages
    path("messages/<uuid:message_id>/", MessageDetailView.as_view(), name="message-detail"),
    path(
        "messages/<uuid:message_id>/forward/",
        MessageForwardView.as_view(),
        name="message-forward",
    ),
    # Attachments
    path("attachments/", AttachmentUploadView.as_view(), name="attachment-upload"),
]
