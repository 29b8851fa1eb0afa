"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Group management with inline members
- Message moderation
- Unread counters and display preferences (read-mostly)

Deleting a group here does not remove rows keyed by its chat id; leave
groups through the API to get the full cleanup.
"""

from django.contrib import admin

from chat.models import ChatTheme, ChatWallpaper, Group, GroupMember, Message, UnreadCount


class GroupMemberInline(admin.TabularInline):
    """Inline display of members in group admin."""

    model = GroupMember
    extra = 0
    readonly_fields = ["joined_at"]
    raw_id_fields = ["user"]


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Admin interface for Group model."""

    list_display = ["id", "name", "creator", "member_count", "created_at"]
    search_fields = ["name", "id"]
    readonly_fields = ["id", "created_at", "updated_at"]
    raw_id_fields = ["creator"]
    inlines = [GroupMemberInline]
    ordering = ["-created_at"]

    @admin.display(description="Members")
    def member_count(self, obj: Group) -> int:
        return obj.memberships.count()


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = [
        "id",
        "chat_id",
        "sender",
        "text_preview",
        "attachment_type",
        "is_transferred",
        "is_deleted",
        "timestamp",
    ]
    list_filter = ["attachment_type", "is_transferred", "is_deleted", "timestamp"]
    search_fields = ["text", "chat_id", "sender__username"]
    readonly_fields = ["chat_id", "timestamp", "edited_timestamp"]
    raw_id_fields = ["sender"]
    ordering = ["-timestamp"]

    @admin.display(description="Text Preview")
    def text_preview(self, obj: Message) -> str:
        """Return truncated text for list display."""
        max_length = 50
        if len(obj.text) > max_length:
            return obj.text[:max_length] + "..."
        return obj.text


@admin.register(UnreadCount)
class UnreadCountAdmin(admin.ModelAdmin):
    list_display = ["user", "chat_id", "count"]
    search_fields = ["user__username", "chat_id"]
    raw_id_fields = ["user"]


@admin.register(ChatTheme)
class ChatThemeAdmin(admin.ModelAdmin):
    list_display = ["user", "chat_id", "theme_color", "theme_mode"]
    list_filter = ["theme_color", "theme_mode"]
    search_fields = ["user__username", "chat_id"]
    raw_id_fields = ["user"]


@admin.register(ChatWallpaper)
class ChatWallpaperAdmin(admin.ModelAdmin):
    list_display = ["user", "chat_id", "wallpaper_url"]
    search_fields = ["user__username", "chat_id"]
    raw_id_fields = ["user"]
