"""
Views for chat API.

This module provides the API views for groups, messages, per-chat display
preferences, attachment upload and the start-up snapshot.

Endpoints:
    Snapshot:
        GET    /api/v1/chat/snapshot/                      - Everything for start-up

    Groups:
        POST   /api/v1/chat/groups/                        - Create group
        GET    /api/v1/chat/groups/{id}/                   - Group detail
        PATCH  /api/v1/chat/groups/{id}/                   - Update group
        POST   /api/v1/chat/groups/{id}/members/           - Add members
        POST   /api/v1/chat/groups/{id}/leave/             - Leave group

    Chats (direct "alice:bob" or group "group_<uuid>"):
        GET    /api/v1/chat/chats/{chat_id}/messages/      - Message history
        POST   /api/v1/chat/chats/{chat_id}/messages/      - Send message
        POST   /api/v1/chat/chats/{chat_id}/read/          - Clear unread counter
        PUT    /api/v1/chat/chats/{chat_id}/theme/         - Set theme
        PUT    /api/v1/chat/chats/{chat_id}/wallpaper/     - Set wallpaper

    Messages:
        PATCH  /api/v1/chat/messages/{id}/                 - Edit text
        DELETE /api/v1/chat/messages/{id}/                 - Delete
        POST   /api/v1/chat/messages/{id}/forward/         - Forward

    Attachments:
        POST   /api/v1/chat/attachments/                   - Upload a file

Permission Model:
    - Every endpoint requires authentication
    - Chat endpoints require participation (checked in chat.services)
    - Only the sender may edit or delete a message
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from chat.serializers import (
    AttachmentSerializer,
    AttachmentUploadSerializer,
    ChatThemeSerializer,
    ChatWallpaperSerializer,
    GroupCreateSerializer,
    GroupLeaveResponseSerializer,
    GroupMembersSerializer,
    GroupSerializer,
    GroupUpdateSerializer,
    MessageCreateSerializer,
    MessageForwardSerializer,
    MessageSerializer,
    MessageUpdateSerializer,
    SnapshotSerializer,
)
from chat.services import (
    GroupService,
    MessageService,
    PreferenceService,
    SnapshotService,
)
from core.views import invalid_request_response, result_response


# =============================================================================
# Snapshot
# =============================================================================


class SnapshotView(APIView):
    """
    GET: Profile, friends, requests, groups, messages, unread counts,
    themes and wallpapers of the current user.

    URL: /api/v1/chat/snapshot/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="chat_snapshot",
        summary="Get start-up snapshot",
        description=(
            "Everything the client needs at start-up. Messages are keyed by "
            "chat id and include every group chat and every friend chat."
        ),
        tags=["Chat"],
        responses={200: SnapshotSerializer},
    )
    def get(self, request):
        result = SnapshotService.get_snapshot(request.user)
        return result_response(result, data=SnapshotSerializer(result.data).data)


# =============================================================================
# Groups
# =============================================================================


class GroupCreateView(APIView):
    """
    POST: Create a group

    URL: /api/v1/chat/groups/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="chat_group_create",
        summary="Create group",
        description="Create a group. Unknown usernames are skipped.",
        tags=["Groups"],
        request=GroupCreateSerializer,
        responses={201: GroupSerializer},
    )
    def post(self, request):
        serializer = GroupCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        data = serializer.validated_data
        result = GroupService.create_group(
            request.user,
            data["name"],
            data["members"],
            profile_pic=data.get("profile_pic"),
            description=data["description"],
        )
        return result_response(
            result,
            data=GroupSerializer(result.data).data if result else None,
            success_status=status.HTTP_201_CREATED,
        )


class GroupDetailView(APIView):
    """
    GET: Group detail
    PATCH: Update name, picture or description

    URL: /api/v1/chat/groups/{group_id}/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="chat_group_retrieve",
        summary="Get group",
        tags=["Groups"],
        responses={200: GroupSerializer},
    )
    def get(self, request, group_id):
        result = GroupService.get_group(request.user, group_id)
        return result_response(result, data=GroupSerializer(result.data).data if result else None)

    @extend_schema(
        operation_id="chat_group_update",
        summary="Update group",
        description="Any member may update the group.",
        tags=["Groups"],
        request=GroupUpdateSerializer,
        responses={200: GroupSerializer},
    )
    def patch(self, request, group_id):
        serializer = GroupUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = GroupService.update_group(request.user, group_id, **serializer.validated_data)
        return result_response(result, data=GroupSerializer(result.data).data if result else None)


class GroupMembersView(APIView):
    """
    POST: Add members to a group

    URL: /api/v1/chat/groups/{group_id}/members/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="chat_group_add_members",
        summary="Add members",
        description="Returns the usernames actually added.",
        tags=["Groups"],
        request=GroupMembersSerializer,
    )
    def post(self, request, group_id):
        serializer = GroupMembersSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = GroupService.add_members(
            request.user, group_id, serializer.validated_data["usernames"]
        )
        return result_response(result, data={"added": result.data} if result else None)


class GroupLeaveView(APIView):
    """
    POST: Leave a group

    URL: /api/v1/chat/groups/{group_id}/leave/

    The last member leaving deletes the group with its messages.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="chat_group_leave",
        summary="Leave group",
        tags=["Groups"],
        request=None,
        responses={200: GroupLeaveResponseSerializer},
    )
    def post(self, request, group_id):
        return result_response(GroupService.leave_group(request.user, group_id))


# =============================================================================
# Chats
# =============================================================================


class ChatMessagesView(APIView):
    """
    GET: Messages of a chat, oldest first
    POST: Send a message

    URL: /api/v1/chat/chats/{chat_id}/messages/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="chat_messages_list",
        summary="List messages",
        tags=["Messages"],
        responses={200: MessageSerializer(many=True)},
    )
    def get(self, request, chat_id):
        result = MessageService.list_messages(request.user, chat_id)
        return result_response(
            result,
            data=MessageSerializer(result.data, many=True).data if result else None,
        )

    @extend_schema(
        operation_id="chat_messages_create",
        summary="Send message",
        description=(
            "Send text and/or an attachment previously uploaded to "
            "/chat/attachments/. Increments every other participant's unread counter."
        ),
        tags=["Messages"],
        request=MessageCreateSerializer,
        responses={201: MessageSerializer},
    )
    def post(self, request, chat_id):
        serializer = MessageCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = MessageService.send_message(
            request.user,
            chat_id,
            text=serializer.validated_data["text"],
            attachment=serializer.validated_data["attachment"],
        )
        return result_response(
            result,
            data=MessageSerializer(result.data).data if result else None,
            success_status=status.HTTP_201_CREATED,
        )


class ChatReadView(APIView):
    """
    POST: Reset the current user's unread counter for a chat

    URL: /api/v1/chat/chats/{chat_id}/read/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="chat_mark_read",
        summary="Mark chat as read",
        tags=["Chat"],
        request=None,
    )
    def post(self, request, chat_id):
        result = MessageService.clear_unread(request.user, chat_id)
        return result_response(result, data={"chat_id": chat_id, "count": 0} if result else None)


class ChatThemeView(APIView):
    """
    PUT: Set the current user's theme for a chat

    URL: /api/v1/chat/chats/{chat_id}/theme/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="chat_theme_update",
        summary="Set chat theme",
        tags=["Chat"],
        request=ChatThemeSerializer,
        responses={200: ChatThemeSerializer},
    )
    def put(self, request, chat_id):
        serializer = ChatThemeSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = PreferenceService.set_theme(
            request.user,
            chat_id,
            serializer.validated_data["theme_color"],
            serializer.validated_data["theme_mode"],
        )
        return result_response(
            result,
            data=ChatThemeSerializer(result.data).data if result else None,
        )


class ChatWallpaperView(APIView):
    """
    PUT: Set or clear the current user's wallpaper for a chat

    URL: /api/v1/chat/chats/{chat_id}/wallpaper/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="chat_wallpaper_update",
        summary="Set chat wallpaper",
        description="An empty wallpaper_url removes the wallpaper.",
        tags=["Chat"],
        request=ChatWallpaperSerializer,
        responses={200: ChatWallpaperSerializer},
    )
    def put(self, request, chat_id):
        serializer = ChatWallpaperSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = PreferenceService.set_wallpaper(
            request.user, chat_id, serializer.validated_data["wallpaper_url"]
        )
        data = None
        if result:
            data = (
                ChatWallpaperSerializer(result.data).data
                if result.data is not None
                else {"chat_id": chat_id, "wallpaper_url": ""}
            )
        return result_response(result, data=data)


# =============================================================================
# Messages
# =============================================================================


class MessageDetailView(APIView):
    """
    PATCH: Edit a message's text (sender only)
    DELETE: Delete a message (sender only)

    URL: /api/v1/chat/messages/{message_id}/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="chat_message_update",
        summary="Edit message",
        tags=["Messages"],
        request=MessageUpdateSerializer,
        responses={200: MessageSerializer},
    )
    def patch(self, request, message_id):
        serializer = MessageUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = MessageService.edit_message(
            request.user, message_id, serializer.validated_data["text"]
        )
        return result_response(result, data=MessageSerializer(result.data).data if result else None)

    @extend_schema(
        operation_id="chat_message_delete",
        summary="Delete message",
        description="The message stays in the history with placeholder text.",
        tags=["Messages"],
        responses={200: MessageSerializer},
    )
    def delete(self, request, message_id):
        result = MessageService.delete_message(request.user, message_id)
        return result_response(result, data=MessageSerializer(result.data).data if result else None)


class MessageForwardView(APIView):
    """
    POST: Forward a message to other chats

    URL: /api/v1/chat/messages/{message_id}/forward/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="chat_message_forward",
        summary="Forward message",
        tags=["Messages"],
        request=MessageForwardSerializer,
        responses={201: MessageSerializer(many=True)},
    )
    def post(self, request, message_id):
        serializer = MessageForwardSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = MessageService.forward_message(
            request.user, message_id, serializer.validated_data["chat_ids"]
        )
        return result_response(
            result,
            data=MessageSerializer(result.data, many=True).data if result else None,
            success_status=status.HTTP_201_CREATED,
        )


# =============================================================================
# Attachments
# =============================================================================


class AttachmentUploadView(APIView):
    """
    POST: Upload a file to attach to a message

    URL: /api/v1/chat/attachments/

    Returns {type, url, name} to pass as ``attachment`` when sending.
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        operation_id="chat_attachment_upload",
        summary="Upload attachment",
        tags=["Messages"],
        request={"multipart/form-data": AttachmentUploadSerializer},
        responses={201: AttachmentSerializer},
    )
    def post(self, request):
        serializer = AttachmentUploadSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer)

        result = MessageService.store_attachment(request.user, serializer.validated_data["file"])
        return result_response(result, success_status=status.HTTP_201_CREATED)
