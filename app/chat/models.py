"""
Chat system models.

This module defines the data models for the chat system supporting:
- Direct (1:1) conversations between two users
- Group conversations

Models:
    Group: A named group conversation
    GroupMember: Membership of a user in a group
    Message: A message in a direct or group chat
    UnreadCount: Per-user, per-chat unread counter
    ChatTheme: Per-user, per-chat color theme
    ChatWallpaper: Per-user, per-chat wallpaper

Design Decisions:
    - Conversations have no table of their own. Every chat is addressed by a
      string chat id (see chat.identifiers): "alice:bob" for direct chats,
      the Group primary key ("group_<uuid>") for groups.
    - Message, UnreadCount, ChatTheme and ChatWallpaper reference chats by
      chat_id rather than by foreign key. Deleting a group therefore deletes
      these rows explicitly (GroupService.leave_group), and a username change
      rewrites the direct chat ids (ChatRenameService.propagate).
    - Deleted messages are kept with placeholder text so history stays
      readable.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone

from chat.constants import (
    DEFAULT_GROUP_PICTURE,
    AttachmentType,
    ThemeColor,
    ThemeMode,
)
from chat.identifiers import new_group_id
from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

CHAT_ID_MAX_LENGTH = 64


class Group(BaseModel):
    """
    A group conversation.

    The primary key doubles as the chat id of the group's messages.

    Fields:
        id: "group_<uuid4>"
        name: Display name
        creator: User who created the group (kept NULL if that account is deleted)
        profile_pic: URL of the group picture
        description: Free-form text
    """

    id = models.CharField(
        primary_key=True,
        max_length=CHAT_ID_MAX_LENGTH,
        default=new_group_id,
        editable=False,
    )
    name = models.CharField(max_length=100)
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_groups",
    )
    profile_pic = models.URLField(max_length=500, default=DEFAULT_GROUP_PICTURE, blank=True)
    description = models.TextField(blank=True, default="")

    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="GroupMember",
        related_name="chat_groups",
    )

    class Meta:
        db_table = "chat_group"
        ordering = ["created_at"]

    def __str__(self) -> str:
        return f"Group: {self.name}"

    @property
    def chat_id(self) -> str:
        return self.id

    def member_usernames(self) -> list[str]:
        return list(
            self.memberships.order_by("joined_at", "user__username").values_list(
                "user__username", flat=True
            )
        )


class GroupMember(models.Model):
    """Membership of a user in a group."""

    group = models.ForeignKey(
        Group,
        on_delete=models.CASCADE,
        related_name="memberships",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="group_memberships",
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "chat_group_member"
        constraints = [
            models.UniqueConstraint(
                fields=["group", "user"],
                name="chat_group_member_unique",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} in {self.group_id}"


class Message(UUIDPrimaryKeyMixin, models.Model):
    """
    A message in a direct or group chat.

    Delete Behavior:
        Deleting a message keeps the row: text becomes
        MESSAGE_CONFIG.DELETED_TEXT, the attachment is cleared and
        is_deleted is set.

    Fields:
        chat_id: Canonical chat id (see chat.identifiers)
        sender: Author
        text: Message body (may be empty when an attachment is present)
        timestamp: When the message was sent
        edited_timestamp: When the text was last edited (NULL if never)
        is_transferred: True for forwarded copies
        is_deleted: True once deleted by its sender
        attachment_type / attachment_url / attachment_name: Optional file
    """

    chat_id = models.CharField(max_length=CHAT_ID_MAX_LENGTH)
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    text = models.TextField(blank=True, default="")
    timestamp = models.DateTimeField(default=timezone.now)
    edited_timestamp = models.DateTimeField(null=True, blank=True)
    is_transferred = models.BooleanField(default=False)
    is_deleted = models.BooleanField(default=False)

    attachment_type = models.CharField(
        max_length=10,
        choices=AttachmentType.choices,
        blank=True,
        default="",
    )
    attachment_url = models.CharField(max_length=500, blank=True, default="")
    attachment_name = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "chat_message"
        ordering = ["timestamp", "id"]
        indexes = [
            models.Index(
                fields=["chat_id", "timestamp"],
                name="chat_msg_chat_ts_idx",
            ),
        ]

    def __str__(self) -> str:
        preview = self.text[:50] + "..." if len(self.text) > 50 else self.text
        return f"{self.chat_id} / {self.sender_id}: {preview}"

    @property
    def has_attachment(self) -> bool:
        return bool(self.attachment_url)

    @property
    def attachment(self) -> dict | None:
        if not self.has_attachment:
            return None
        return {
            "type": self.attachment_type,
            "url": self.attachment_url,
            "name": self.attachment_name,
        }


class UnreadCount(models.Model):
    """Number of messages in ``chat_id`` that ``user`` has not read yet."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="unread_counts",
    )
    chat_id = models.CharField(max_length=CHAT_ID_MAX_LENGTH)
    count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "chat_unread_count"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "chat_id"],
                name="chat_unread_count_unique",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} / {self.chat_id}: {self.count}"


class ChatTheme(models.Model):
    """Color theme ``user`` picked for ``chat_id``."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_themes",
    )
    chat_id = models.CharField(max_length=CHAT_ID_MAX_LENGTH)
    theme_color = models.CharField(
        max_length=10,
        choices=ThemeColor.choices,
        default=ThemeColor.DEFAULT,
    )
    theme_mode = models.CharField(
        max_length=5,
        choices=ThemeMode.choices,
        default=ThemeMode.LIGHT,
    )

    class Meta:
        db_table = "chat_theme"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "chat_id"],
                name="chat_theme_unique",
            ),
        ]


class ChatWallpaper(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_wallpapers",
    )
    chat_id = models.CharField(max_length=CHAT_ID_MAX_LENGTH)
    wallpaper_url = models.CharField(max_length=500)

    class Meta:
        db_table = "chat_wallpaper"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "chat_id"],
                name="chat_wallpaper_unique",
            ),
        ]
