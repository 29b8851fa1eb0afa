"""
Chat app for family and friends messaging.

This app handles:
- Direct chats between two users and group chats
- Message history, forwarding, edits and deletion
- Unread counters and per-chat display preferences
- Attachment upload to local storage
- The start-up snapshot clients load before polling

Related apps:
    - authentication: User model; username changes rewrite direct chat ids
    - friends: Friend chats included in the snapshot
    - notifications: Web Push for new messages

Usage:
    from chat.identifiers import direct_chat_id
    from chat.services import MessageService

    result = MessageService.send_message(
        sender=alice,
        chat_id=direct_chat_id("alice", "bob"),
        text="Coucou !",
    )
"""
