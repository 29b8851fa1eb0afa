"""
Chat application configuration.

This app provides the chat system with:
- Direct (1:1) chats addressed by "alice:bob" chat ids
- Group chats with membership and cascading cleanup
- Message sending, forwarding, editing and deletion
- Unread counters, per-chat themes and wallpapers
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
