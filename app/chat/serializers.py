"""
Serializers for chat API.

This module provides serializers for the chat system:
- Group serializers (read, create, update, add members)
- Message serializers (read, send, edit, forward)
- Display preference serializers (theme, wallpaper)
- Attachment upload and the start-up snapshot

Serializer Hierarchy:
    GroupSerializer: Group with member usernames
    GroupCreateSerializer / GroupUpdateSerializer / GroupMembersSerializer

    MessageSerializer: Message with sender username and attachment
    MessageCreateSerializer: Send a message (text and/or attachment)
    MessageUpdateSerializer: Edit text
    MessageForwardSerializer: Target chat ids

    ChatThemeSerializer / ChatWallpaperSerializer
    AttachmentSerializer / AttachmentUploadSerializer
    SnapshotSerializer: Everything the client loads at start-up

Design Decisions:
    - Read and write serializers are separate for clarity
    - Users are referenced by username, chats by chat id
    - Business rules live in chat.services; serializers only check shape
"""

from __future__ import annotations

from rest_framework import serializers

from authentication.serializers import CurrentUserSerializer
from chat.constants import MESSAGE_CONFIG, AttachmentType, ThemeColor, ThemeMode
from chat.models import ChatTheme, ChatWallpaper, Group, Message
from friends.serializers import FriendSerializer


# =============================================================================
# Attachments
# =============================================================================


class AttachmentSerializer(serializers.Serializer):
    """An uploaded file as referenced from a message."""

    type = serializers.ChoiceField(choices=AttachmentType.choices)
    url = serializers.CharField(max_length=500)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class AttachmentUploadSerializer(serializers.Serializer):
    file = serializers.FileField(
        allow_empty_file=True,
        help_text="File to upload (multipart/form-data)",
    )


# =============================================================================
# Message Serializers
# =============================================================================


class MessageSerializer(serializers.ModelSerializer):
    """
    Message as shown in a chat.

    Deleted messages already carry the placeholder text and no attachment.
    """

    sender = serializers.CharField(source="sender.username", read_only=True)
    attachment = AttachmentSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "chat_id",
            "sender",
            "text",
            "timestamp",
            "edited_timestamp",
            "is_transferred",
            "is_deleted",
            "attachment",
        ]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    """
    Serializer for sending messages.

    Either ``text`` or ``attachment`` must be provided.
    """

    text = serializers.CharField(
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
        required=False,
        allow_blank=True,
        trim_whitespace=False,
        default="",
        help_text="Message content (max 10,000 characters)",
    )
    attachment = AttachmentSerializer(
        required=False,
        allow_null=True,
        default=None,
        help_text="Attachment returned by the upload endpoint",
    )

    def validate(self, attrs: dict) -> dict:
        if not attrs.get("text", "").strip() and not attrs.get("attachment"):
            raise serializers.ValidationError(
                {"text": "Un texte ou une pièce jointe est requis."}
            )
        return attrs


class MessageUpdateSerializer(serializers.Serializer):
    text = serializers.CharField(
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
        trim_whitespace=False,
    )


class MessageForwardSerializer(serializers.Serializer):
    chat_ids = serializers.ListField(
        child=serializers.CharField(max_length=64),
        min_length=1,
        help_text="Chat ids to forward the message to",
    )


# =============================================================================
# Group Serializers
# =============================================================================


class GroupSerializer(serializers.ModelSerializer):
    """Group with its creator and member usernames."""

    creator = serializers.CharField(source="creator.username", read_only=True, allow_null=True)
    members = serializers.SerializerMethodField(help_text="Member usernames")

    class Meta:
        model = Group
        fields = [
            "id",
            "name",
            "creator",
            "members",
            "profile_pic",
            "description",
            "created_at",
        ]
        read_only_fields = fields

    def get_members(self, obj: Group) -> list[str]:
        # SnapshotService preloads member_list for every group at once
        member_list = getattr(obj, "member_list", None)
        if member_list is not None:
            return member_list
        return obj.member_usernames()


class GroupCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    members = serializers.ListField(
        child=serializers.CharField(max_length=30),
        required=False,
        default=list,
        help_text="Usernames of the initial members (creator is added automatically)",
    )
    profile_pic = serializers.URLField(max_length=500, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, default="")


class GroupUpdateSerializer(serializers.Serializer):
    """Partial update: only the fields present are changed."""

    name = serializers.CharField(max_length=100, required=False)
    profile_pic = serializers.URLField(max_length=500, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs: dict) -> dict:
        if not attrs:
            raise serializers.ValidationError("Aucune modification fournie.")
        return attrs


class GroupMembersSerializer(serializers.Serializer):
    usernames = serializers.ListField(
        child=serializers.CharField(max_length=30),
        min_length=1,
    )


class GroupLeaveResponseSerializer(serializers.Serializer):
    group_id = serializers.CharField()
    group_deleted = serializers.BooleanField()


# =============================================================================
# Display Preferences
# =============================================================================


class ChatThemeSerializer(serializers.ModelSerializer):
    theme_color = serializers.ChoiceField(choices=ThemeColor.choices)
    theme_mode = serializers.ChoiceField(choices=ThemeMode.choices)

    class Meta:
        model = ChatTheme
        fields = ["chat_id", "theme_color", "theme_mode"]
        read_only_fields = ["chat_id"]


class ChatWallpaperSerializer(serializers.ModelSerializer):
    """An empty ``wallpaper_url`` removes the wallpaper."""

    wallpaper_url = serializers.CharField(max_length=500, allow_blank=True)

    class Meta:
        model = ChatWallpaper
        fields = ["chat_id", "wallpaper_url"]
        read_only_fields = ["chat_id"]


# =============================================================================
# Snapshot
# =============================================================================


class SnapshotSerializer(serializers.Serializer):
    """
    Render SnapshotService.get_snapshot() output.

    ``messages`` maps chat ids to message lists; ``themes`` maps chat ids to
    {theme_color, theme_mode}; ``wallpapers`` maps chat ids to URLs.
    """

    profile = CurrentUserSerializer()
    friends = FriendSerializer(many=True)
    friend_requests = serializers.ListField(child=serializers.CharField())
    sent_requests = serializers.ListField(child=serializers.CharField())
    groups = GroupSerializer(many=True)
    messages = serializers.SerializerMethodField()
    unread_counts = serializers.DictField(child=serializers.IntegerField())
    themes = serializers.SerializerMethodField()
    wallpapers = serializers.DictField(child=serializers.CharField())

    def get_messages(self, obj: dict) -> dict[str, list]:
        return {
            chat_id: MessageSerializer(messages, many=True).data
            for chat_id, messages in obj["messages"].items()
        }

    def get_themes(self, obj: dict) -> dict[str, dict]:
        return {
            chat_id: {"theme_color": theme.theme_color, "theme_mode": theme.theme_mode}
            for chat_id, theme in obj["themes"].items()
        }
