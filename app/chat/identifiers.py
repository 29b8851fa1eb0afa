"""
Chat identifier helpers.

Every conversation is addressed by a plain string chat id:

- Direct chats: the two usernames, sorted, joined with ``":"``
  (``"alice:bob"``). The id is canonical: both participants compute the same
  value regardless of who opens the chat.
- Group chats: the group's primary key, ``"group_<uuid4>"``.

Usernames are restricted to ``[A-Za-z0-9_-]`` so they never contain the
separator, which keeps the two forms unambiguous.

Usage:
    from chat.identifiers import direct_chat_id, is_group_chat_id

    chat_id = direct_chat_id("bob", "alice")   # "alice:bob"
    is_group_chat_id(chat_id)                  # False
"""

from __future__ import annotations

import uuid

DIRECT_CHAT_SEPARATOR = ":"
GROUP_CHAT_PREFIX = "group_"


class InvalidChatId(ValueError):
    """Raised when a string is not a well-formed chat id."""


def direct_chat_id(username1: str, username2: str) -> str:
    """
    Build the canonical chat id for a direct conversation.

    Returns an empty string if either username is empty.
    """
    if not username1 or not username2:
        return ""
    return DIRECT_CHAT_SEPARATOR.join(sorted([username1, username2]))


def is_group_chat_id(chat_id: str) -> bool:
    return chat_id.startswith(GROUP_CHAT_PREFIX) and DIRECT_CHAT_SEPARATOR not in chat_id


def is_direct_chat_id(chat_id: str) -> bool:
    return chat_id.count(DIRECT_CHAT_SEPARATOR) == 1 and all(
        chat_id.split(DIRECT_CHAT_SEPARATOR)
    )


def new_group_id() -> str:
    return f"{GROUP_CHAT_PREFIX}{uuid.uuid4()}"


def split_direct_chat_id(chat_id: str) -> tuple[str, str]:
    """
    Return the two usernames of a direct chat id.

    Raises:
        InvalidChatId: If chat_id is not a direct chat id
    """
    if not is_direct_chat_id(chat_id):
        raise InvalidChatId(f"Not a direct chat id: {chat_id!r}")
    first, second = chat_id.split(DIRECT_CHAT_SEPARATOR)
    return first, second


def other_participant(chat_id: str, username: str) -> str | None:
    """
    Return the other party of a direct chat.

    Returns None when chat_id is not a direct chat id or when ``username``
    is not one of its two parties.
    """
    try:
        first, second = split_direct_chat_id(chat_id)
    except InvalidChatId:
        return None
    if username == first:
        return second
    if username == second:
        return first
    return None


def rename_in_direct_chat_id(chat_id: str, old_username: str, new_username: str) -> str:
    """
    Recompute a direct chat id after one party changes username.

    Ids that do not involve ``old_username`` are returned unchanged.

    Example:
        rename_in_direct_chat_id("alice:bob", "alice", "zoe")  # "bob:zoe"
    """
    other = other_participant(chat_id, old_username)
    if other is None:
        return chat_id
    if other == old_username:
        # Self-chat: both sides carry the old name
        return direct_chat_id(new_username, new_username)
    return direct_chat_id(new_username, other)
