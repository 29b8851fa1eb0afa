"""
Chat system service layer.

This module provides the business logic for the chat system, encapsulating
all operations on groups, messages, unread counters and display preferences.

Services:
    ChatAccessService: Resolve a chat id to its participants and check access
    GroupService: Group lifecycle (create, update, add members, leave)
    MessageService: Message operations (send, forward, edit, delete, list, read)
    PreferenceService: Per-chat theme and wallpaper
    ChatRenameService: Rewrite direct chat ids after a username change
    SnapshotService: Everything a client needs at start-up

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure()
    - Unexpected failures raise exceptions
    - Multi-row writes run in one transaction (BaseService.atomic)
    - Rows keyed by chat id (messages, unread counts, themes, wallpapers)
      are cleaned up explicitly, there is no foreign key to cascade from

Usage:
    from chat.identifiers import direct_chat_id
    from chat.services import GroupService, MessageService

    result = MessageService.send_message(alice, direct_chat_id("alice", "bob"), "Salut !")

    result = GroupService.create_group(alice, "Famille", ["bob", "carol"])
    if result.success:
        group = result.data
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F, Q
from django.utils import timezone

from authentication.models import User
from chat.constants import MESSAGE_CONFIG, AttachmentType, ThemeColor, ThemeMode
from chat.identifiers import (
    DIRECT_CHAT_SEPARATOR,
    InvalidChatId,
    direct_chat_id,
    is_group_chat_id,
    other_participant,
    rename_in_direct_chat_id,
    split_direct_chat_id,
)
from chat.models import ChatTheme, ChatWallpaper, Group, GroupMember, Message, UnreadCount
from chat.storage import store_uploaded_file, validate_upload
from core.services import BaseService, ServiceResult
from friends.services import FriendService
from notifications.services import PushNotificationService

if TYPE_CHECKING:
    from typing import Any

    from django.core.files.uploadedfile import UploadedFile

logger = logging.getLogger(__name__)

# Tables whose rows are keyed by chat id
CHAT_SCOPED_MODELS = (Message, UnreadCount, ChatTheme, ChatWallpaper)

# Chat-scoped tables with one row per (user, chat_id)
USER_CHAT_MODELS = (UnreadCount, ChatTheme, ChatWallpaper)


def purge_chat(chat_id: str) -> dict[str, int]:
    """
    Delete every row keyed by ``chat_id``.

    Returns:
        Number of rows deleted per table
    """
    return {
        model._meta.db_table: model.objects.filter(chat_id=chat_id).delete()[0]
        for model in CHAT_SCOPED_MODELS
    }


# =============================================================================
# Access
# =============================================================================


class ChatAccessService(BaseService):
    """
    Resolve chat ids and check who may use them.

    A user participates in a group chat while they are a member, and in a
    direct chat when their username is one side of the id and the other
    side is an existing, active account. Friendship is not required.

    Error codes:
        INVALID_CHAT_ID: Neither a group nor a direct chat id
        CHAT_NOT_FOUND: Group does not exist, or the other party does not
        NOT_PARTICIPANT: User is not part of this chat
    """

    @staticmethod
    def participants(chat_id: str) -> list[User] | None:
        """
        Users taking part in a chat, or None when the chat does not exist.

        Raises:
            InvalidChatId: If ``chat_id`` is malformed
        """
        if is_group_chat_id(chat_id):
            if not Group.objects.filter(pk=chat_id).exists():
                return None
            return list(
                User.objects.filter(group_memberships__group_id=chat_id).order_by("username")
            )

        first, second = split_direct_chat_id(chat_id)
        users = list(User.objects.filter(username__in={first, second}, is_active=True))
        found = {u.username for u in users}
        if first not in found or second not in found:
            return None
        return users

    @classmethod
    def check(cls, user: User, chat_id: str) -> ServiceResult[list[User]]:
        """
        Check ``user`` may read and write ``chat_id``.

        Returns:
            ServiceResult with the chat's participants (including ``user``)
        """
        try:
            participants = cls.participants(chat_id)
        except InvalidChatId:
            return ServiceResult.failure(
                "Identifiant de conversation invalide.",
                error_code="INVALID_CHAT_ID",
            )

        if participants is None:
            if not is_group_chat_id(chat_id) and other_participant(chat_id, user.username) is None:
                return ServiceResult.failure(
                    "Vous ne participez pas à cette conversation.",
                    error_code="NOT_PARTICIPANT",
                )
            return ServiceResult.failure(
                "Conversation non trouvée.",
                error_code="CHAT_NOT_FOUND",
            )

        if all(p.pk != user.pk for p in participants):
            return ServiceResult.failure(
                "Vous ne participez pas à cette conversation.",
                error_code="NOT_PARTICIPANT",
            )
        return ServiceResult.success(participants)


# =============================================================================
# Groups
# =============================================================================


class GroupService(BaseService):
    """
    Service for group lifecycle operations.

    Methods:
        create_group: Create a group with its initial members
        get_group: Group detail for a member
        update_group: Rename, change picture or description
        add_members: Add users to a group
        leave_group: Leave; the last member out deletes the group

    Error codes:
        GROUP_NOT_FOUND: No group with this id
        NOT_MEMBER: User is not a member of the group
        VALIDATION_ERROR: Missing or blank name
    """

    @classmethod
    def _get_membership(cls, user: User, group_id: str) -> ServiceResult[Group]:
        group = Group.objects.filter(pk=group_id).select_related("creator").first()
        if group is None:
            return ServiceResult.failure("Groupe non trouvé.", error_code="GROUP_NOT_FOUND")
        if not GroupMember.objects.filter(group=group, user=user).exists():
            return ServiceResult.failure(
                "Vous n'êtes pas membre de ce groupe.",
                error_code="NOT_MEMBER",
            )
        return ServiceResult.success(group)

    @classmethod
    def create_group(
        cls,
        creator: User,
        name: str,
        member_usernames: list[str] | None = None,
        profile_pic: str | None = None,
        description: str = "",
    ) -> ServiceResult[Group]:
        """
        Create a group with ``creator`` and the given members.

        Usernames are deduplicated; unknown or inactive ones are skipped.
        The group row and every membership row are written together.

        Args:
            creator: User creating the group (always a member)
            name: Group name (required)
            member_usernames: Usernames of the other initial members
            profile_pic: Optional picture URL (placeholder otherwise)
            description: Optional description

        Returns:
            ServiceResult with the new Group
        """
        validation = cls.validate_required(name=name)
        if validation is not None:
            return validation

        usernames = {u.strip() for u in (member_usernames or []) if u and u.strip()}
        usernames.discard(creator.username)
        members = list(User.objects.filter(username__in=usernames, is_active=True))

        with cls.atomic():
            group = Group(name=name.strip(), creator=creator, description=description or "")
            if profile_pic:
                group.profile_pic = profile_pic
            group.save(force_insert=True)
            GroupMember.objects.bulk_create(
                [GroupMember(group=group, user=creator)]
                + [GroupMember(group=group, user=member) for member in members]
            )

        cls.get_logger().info(
            f"Group {group.id} created by {creator.username} with {len(members) + 1} member(s)"
        )
        return ServiceResult.success(group, "Groupe créé.")

    @classmethod
    def get_group(cls, user: User, group_id: str) -> ServiceResult[Group]:
        """Return a group the user belongs to."""
        return cls._get_membership(user, group_id)

    @classmethod
    def update_group(
        cls,
        user: User,
        group_id: str,
        name: str | None = None,
        profile_pic: str | None = None,
        description: str | None = None,
    ) -> ServiceResult[Group]:
        """
        Update group details. Any member may do this.

        Fields left as None are unchanged.
        """
        result = cls._get_membership(user, group_id)
        if not result:
            return result
        group = result.data

        update_fields = []
        if name is not None:
            if not name.strip():
                return ServiceResult.failure(
                    "Le nom du groupe est obligatoire.",
                    error_code="VALIDATION_ERROR",
                    errors={"name": ["Ce champ est obligatoire."]},
                )
            group.name = name.strip()
            update_fields.append("name")
        if profile_pic is not None:
            group.profile_pic = profile_pic
            update_fields.append("profile_pic")
        if description is not None:
            group.description = description
            update_fields.append("description")

        if update_fields:
            group.save(update_fields=[*update_fields, "updated_at"])

        return ServiceResult.success(group, "Groupe mis à jour")

    @classmethod
    def add_members(
        cls, user: User, group_id: str, usernames: list[str]
    ) -> ServiceResult[list[str]]:
        """
        Add users to a group.

        Unknown usernames and existing members are ignored.

        Returns:
            ServiceResult with the usernames actually added
        """
        result = cls._get_membership(user, group_id)
        if not result:
            return result
        group = result.data

        wanted = {u.strip() for u in usernames if u and u.strip()}
        existing = set(group.memberships.values_list("user_id", flat=True))
        new_members = list(
            User.objects.filter(username__in=wanted, is_active=True)
            .exclude(pk__in=existing)
            .order_by("username")
        )

        with cls.atomic():
            GroupMember.objects.bulk_create(
                [GroupMember(group=group, user=member) for member in new_members],
                ignore_conflicts=True,
            )

        added = [member.username for member in new_members]
        if added:
            cls.get_logger().info(f"{user.username} added {added} to group {group.id}")
        return ServiceResult.success(added, "Membres ajoutés")

    @classmethod
    def leave_group(cls, user: User, group_id: str) -> ServiceResult[dict[str, Any]]:
        """
        Remove ``user`` from a group.

        The leaver's unread counter, theme and wallpaper for the group are
        removed with the membership. When nobody is left, the group and
        everything keyed by its chat id (messages, unread counts, themes,
        wallpapers) are deleted in the same transaction.

        Returns:
            ServiceResult with {"group_id": ..., "group_deleted": bool}
        """
        result = cls._get_membership(user, group_id)
        if not result:
            return result
        group = result.data

        with cls.atomic():
            GroupMember.objects.filter(group=group, user=user).delete()
            for model in USER_CHAT_MODELS:
                model.objects.filter(user=user, chat_id=group.id).delete()

            group_deleted = not GroupMember.objects.filter(group=group).exists()
            if group_deleted:
                purged = purge_chat(group.id)
                group.delete()

        if group_deleted:
            cls.get_logger().info(f"Group {group_id} deleted after last member left ({purged})")
            message = "Vous avez quitté le groupe. Le groupe a été supprimé."
        else:
            cls.get_logger().info(f"{user.username} left group {group_id}")
            message = "Vous avez quitté le groupe."

        return ServiceResult.success({"group_id": group_id, "group_deleted": group_deleted}, message)


# =============================================================================
# Messages
# =============================================================================


@dataclass
class OutgoingMessage:
    """A message written in the current transaction and who must hear about it."""

    message: Message
    recipient_ids: list = field(default_factory=list)


class MessageService(BaseService):
    """
    Service for message operations.

    Methods:
        send_message: Post a message and bump recipients' unread counters
        forward_message: Copy a message into other chats
        edit_message: Change the text of one's own message
        delete_message: Blank out one's own message
        list_messages: Chat history in timestamp order
        clear_unread: Reset the caller's counter for a chat
        store_attachment: Save an upload for later use in a message

    Error codes:
        MESSAGE_NOT_FOUND: No message with this id
        NOT_SENDER: Only the sender may edit or delete a message
        MESSAGE_DELETED: The message was deleted
        ALREADY_DELETED: Deleting a deleted message
        EMPTY_CONTENT: Neither text nor attachment
        INVALID_ATTACHMENT: Malformed attachment description
        plus the ChatAccessService codes
    """

    @staticmethod
    def _clean_attachment(attachment: dict | None) -> ServiceResult[dict | None]:
        if not attachment:
            return ServiceResult.success(None)
        url = (attachment.get("url") or "").strip()
        kind = attachment.get("type") or AttachmentType.FILE
        if not url or kind not in AttachmentType.values:
            return ServiceResult.failure(
                "Pièce jointe invalide.",
                error_code="INVALID_ATTACHMENT",
            )
        return ServiceResult.success(
            {"type": kind, "url": url, "name": (attachment.get("name") or "")[:255]}
        )

    @staticmethod
    def _increment_unread(user_id, chat_id: str) -> None:
        counter, created = UnreadCount.objects.get_or_create(
            user_id=user_id, chat_id=chat_id, defaults={"count": 1}
        )
        if not created:
            UnreadCount.objects.filter(pk=counter.pk).update(count=F("count") + 1)

    @classmethod
    def _write_message(
        cls,
        sender: User,
        chat_id: str,
        participants: list[User],
        text: str,
        attachment: dict | None,
        is_transferred: bool = False,
    ) -> OutgoingMessage:
        """Insert a message and bump every other participant's counter. Caller owns the transaction."""
        attachment = attachment or {}
        message = Message.objects.create(
            chat_id=chat_id,
            sender=sender,
            text=text,
            is_transferred=is_transferred,
            attachment_type=attachment.get("type", ""),
            attachment_url=attachment.get("url", ""),
            attachment_name=attachment.get("name", ""),
        )
        recipient_ids = [p.pk for p in participants if p.pk != sender.pk]
        for recipient_id in recipient_ids:
            cls._increment_unread(recipient_id, chat_id)
        return OutgoingMessage(message=message, recipient_ids=recipient_ids)

    @staticmethod
    def _schedule_push(outgoing: list[OutgoingMessage]) -> None:
        for item in outgoing:
            if item.recipient_ids:
                # Push errors are logged by Django, the message stays sent
                transaction.on_commit(
                    lambda item=item: PushNotificationService.notify_new_message(
                        item.message, item.recipient_ids
                    ),
                    robust=True,
                )

    @classmethod
    def send_message(
        cls,
        sender: User,
        chat_id: str,
        text: str = "",
        attachment: dict | None = None,
        is_transferred: bool = False,
    ) -> ServiceResult[Message]:
        """
        Post a message to a direct or group chat.

        The message insert and the unread counter increments for every other
        participant commit together. Push notifications are queued once the
        transaction commits.

        Args:
            sender: Author (must participate in the chat)
            chat_id: Target chat
            text: Message body
            attachment: Optional {"type", "url", "name"} from store_attachment
            is_transferred: Mark the message as forwarded

        Returns:
            ServiceResult with the new Message
        """
        text = text or ""
        cleaned = cls._clean_attachment(attachment)
        if not cleaned:
            return cleaned
        attachment = cleaned.data

        if not text.strip() and attachment is None:
            return ServiceResult.failure(
                "Le message ne peut pas être vide.",
                error_code="EMPTY_CONTENT",
            )
        if len(text) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            return ServiceResult.failure(
                "Le message est trop long.",
                error_code="VALIDATION_ERROR",
                errors={"text": [f"{MESSAGE_CONFIG.MAX_CONTENT_LENGTH} caractères maximum."]},
            )

        with cls.atomic():
            # Membership is read in the same transaction as the writes
            access = ChatAccessService.check(sender, chat_id)
            if not access:
                return access
            outgoing = cls._write_message(
                sender, chat_id, access.data, text, attachment, is_transferred
            )
            cls._schedule_push([outgoing])

        cls.get_logger().debug(
            f"{sender.username} sent message {outgoing.message.id} to {chat_id}"
        )
        return ServiceResult.success(outgoing.message, "Message envoyé")

    @classmethod
    def forward_message(
        cls, user: User, message_id, chat_ids: list[str]
    ) -> ServiceResult[list[Message]]:
        """
        Copy a message (text and attachment) into other chats.

        Every target is checked before anything is written, in the same
        transaction as the inserts. Copies are flagged ``is_transferred``.
        The chat the message comes from is skipped.

        Returns:
            ServiceResult with the new messages, in target order
        """
        source = Message.objects.filter(pk=message_id).first()
        if source is None:
            return ServiceResult.failure("Message non trouvé.", error_code="MESSAGE_NOT_FOUND")

        access = ChatAccessService.check(user, source.chat_id)
        if not access:
            return access
        if source.is_deleted:
            return ServiceResult.failure(
                "Impossible de transférer un message supprimé.",
                error_code="MESSAGE_DELETED",
            )

        targets = []
        for chat_id in chat_ids or []:
            if chat_id and chat_id != source.chat_id and chat_id not in targets:
                targets.append(chat_id)
        if not targets:
            return ServiceResult.failure(
                "Aucune conversation de destination.",
                error_code="VALIDATION_ERROR",
                errors={"chat_ids": ["Ce champ est obligatoire."]},
            )

        with cls.atomic():
            participants_by_chat = {}
            for chat_id in targets:
                target_access = ChatAccessService.check(user, chat_id)
                if not target_access:
                    return target_access
                participants_by_chat[chat_id] = target_access.data

            outgoing = [
                cls._write_message(
                    user,
                    chat_id,
                    participants,
                    source.text,
                    source.attachment,
                    is_transferred=True,
                )
                for chat_id, participants in participants_by_chat.items()
            ]
            cls._schedule_push(outgoing)

        cls.get_logger().info(
            f"{user.username} forwarded message {source.id} to {len(outgoing)} chat(s)"
        )
        return ServiceResult.success([item.message for item in outgoing], "Message transféré")

    @classmethod
    def _get_own_message(cls, user: User, message_id, action: str) -> ServiceResult[Message]:
        message = Message.objects.filter(pk=message_id).select_related("sender").first()
        if message is None:
            return ServiceResult.failure("Message non trouvé.", error_code="MESSAGE_NOT_FOUND")
        if message.sender_id != user.pk:
            return ServiceResult.failure(
                f"Vous n'êtes pas autorisé à {action} ce message.",
                error_code="NOT_SENDER",
            )
        return ServiceResult.success(message)

    @classmethod
    def edit_message(cls, user: User, message_id, text: str) -> ServiceResult[Message]:
        """
        Replace the text of one's own message and stamp ``edited_timestamp``.

        Deleted messages cannot be edited.
        """
        result = cls._get_own_message(user, message_id, "modifier")
        if not result:
            return result
        message = result.data

        if message.is_deleted:
            return ServiceResult.failure(
                "Vous ne pouvez pas modifier un message supprimé.",
                error_code="MESSAGE_DELETED",
            )
        text = text or ""
        if not text.strip():
            return ServiceResult.failure(
                "Le message ne peut pas être vide.",
                error_code="EMPTY_CONTENT",
            )
        if len(text) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            return ServiceResult.failure(
                "Le message est trop long.",
                error_code="VALIDATION_ERROR",
                errors={"text": [f"{MESSAGE_CONFIG.MAX_CONTENT_LENGTH} caractères maximum."]},
            )

        message.text = text
        message.edited_timestamp = timezone.now()
        message.save(update_fields=["text", "edited_timestamp"])
        return ServiceResult.success(message, "Message modifié.")

    @classmethod
    def delete_message(cls, user: User, message_id) -> ServiceResult[Message]:
        """
        Delete one's own message.

        The row stays: its text becomes the deleted placeholder and the
        attachment reference is cleared. The stored file is kept because
        forwarded copies may point at it.
        """
        result = cls._get_own_message(user, message_id, "supprimer")
        if not result:
            return result
        message = result.data

        if message.is_deleted:
            return ServiceResult.failure(
                "Le message est déjà supprimé.",
                error_code="ALREADY_DELETED",
            )

        message.text = MESSAGE_CONFIG.DELETED_TEXT
        message.is_deleted = True
        message.attachment_type = ""
        message.attachment_url = ""
        message.attachment_name = ""
        message.save(
            update_fields=[
                "text",
                "is_deleted",
                "attachment_type",
                "attachment_url",
                "attachment_name",
            ]
        )
        return ServiceResult.success(message, "Message supprimé.")

    @classmethod
    def list_messages(cls, user: User, chat_id: str) -> ServiceResult:
        """Messages of a chat the user takes part in, oldest first."""
        access = ChatAccessService.check(user, chat_id)
        if not access:
            return access
        messages = (
            Message.objects.filter(chat_id=chat_id)
            .select_related("sender")
            .order_by("timestamp", "id")
        )
        return ServiceResult.success(messages)

    @classmethod
    def clear_unread(cls, user: User, chat_id: str) -> ServiceResult[None]:
        """Reset the user's unread counter for ``chat_id`` to zero."""
        if not is_group_chat_id(chat_id) and other_participant(chat_id, user.username) is None:
            return ServiceResult.failure(
                "Identifiant de conversation invalide.",
                error_code="INVALID_CHAT_ID",
            )
        UnreadCount.objects.filter(user=user, chat_id=chat_id).update(count=0)
        return ServiceResult.success(None)

    @classmethod
    def store_attachment(
        cls, user: User, uploaded_file: UploadedFile | None
    ) -> ServiceResult[dict[str, str]]:
        """
        Save an uploaded file under MEDIA_ROOT.

        Returns:
            ServiceResult with {"type": "image"|"video"|"file", "url", "name"}
        """
        if uploaded_file is None:
            return ServiceResult.failure(
                "Aucun fichier reçu.",
                error_code="VALIDATION_ERROR",
                errors={"file": ["Ce champ est obligatoire."]},
            )
        try:
            validate_upload(uploaded_file)
        except ValidationError as exc:
            return ServiceResult.failure(
                exc.messages[0],
                error_code="VALIDATION_ERROR",
                errors={"file": exc.messages},
            )

        attachment = store_uploaded_file(uploaded_file)
        cls.get_logger().info(
            f"{user.username} uploaded {attachment['type']} {attachment['url']}"
        )
        return ServiceResult.success(attachment, "Fichier envoyé.")


# =============================================================================
# Display Preferences
# =============================================================================


class PreferenceService(BaseService):
    """
    Per-user, per-chat theme and wallpaper.

    Both require the user to take part in the chat.
    """

    @classmethod
    def set_theme(
        cls, user: User, chat_id: str, color: str, mode: str
    ) -> ServiceResult[ChatTheme]:
        errors = {}
        if color not in ThemeColor.values:
            errors["theme_color"] = [f"Couleur inconnue : {color}."]
        if mode not in ThemeMode.values:
            errors["theme_mode"] = [f"Mode inconnu : {mode}."]
        if errors:
            return ServiceResult.failure(
                "Thème invalide.",
                error_code="VALIDATION_ERROR",
                errors=errors,
            )

        access = ChatAccessService.check(user, chat_id)
        if not access:
            return access

        theme, _ = ChatTheme.objects.update_or_create(
            user=user,
            chat_id=chat_id,
            defaults={"theme_color": color, "theme_mode": mode},
        )
        return ServiceResult.success(theme, "Thème mis à jour.")

    @classmethod
    def set_wallpaper(
        cls, user: User, chat_id: str, url: str | None
    ) -> ServiceResult[ChatWallpaper | None]:
        """Set the wallpaper; an empty url removes it."""
        access = ChatAccessService.check(user, chat_id)
        if not access:
            return access

        url = (url or "").strip()
        if not url:
            ChatWallpaper.objects.filter(user=user, chat_id=chat_id).delete()
            return ServiceResult.success(None, "Fond d'écran supprimé.")

        wallpaper, _ = ChatWallpaper.objects.update_or_create(
            user=user,
            chat_id=chat_id,
            defaults={"wallpaper_url": url},
        )
        return ServiceResult.success(wallpaper, "Fond d'écran mis à jour.")


# =============================================================================
# Username Rename Propagation
# =============================================================================


class ChatRenameService(BaseService):
    """
    Keep direct chat ids in step with usernames.

    Direct chat ids embed both usernames, so a rename must rewrite every id
    containing the old name in messages, unread counts, themes and
    wallpapers. Group ids are untouched and message senders follow by
    foreign key.
    """

    @staticmethod
    def direct_chat_ids_for(username: str) -> set[str]:
        """Every stored direct chat id that has ``username`` as one side."""
        lookup = Q(chat_id__startswith=f"{username}{DIRECT_CHAT_SEPARATOR}") | Q(
            chat_id__endswith=f"{DIRECT_CHAT_SEPARATOR}{username}"
        )
        chat_ids = set()
        for model in CHAT_SCOPED_MODELS:
            chat_ids.update(
                model.objects.filter(lookup).values_list("chat_id", flat=True).distinct()
            )
        # LIKE is case-insensitive on SQLite; keep exact matches only
        return {c for c in chat_ids if other_participant(c, username) is not None}

    @classmethod
    def propagate(cls, old_username: str, new_username: str) -> int:
        """
        Rewrite direct chat ids after ``old_username`` became ``new_username``.

        Must run inside the transaction that saves the renamed user. Rows
        already sitting at a target id in the per-user tables are discarded
        so the (user, chat_id) constraints hold.

        Returns:
            Number of chat ids rewritten
        """
        rewritten = 0
        for old_id in sorted(cls.direct_chat_ids_for(old_username)):
            new_id = rename_in_direct_chat_id(old_id, old_username, new_username)
            if new_id == old_id:
                continue

            Message.objects.filter(chat_id=old_id).update(chat_id=new_id)
            for model in USER_CHAT_MODELS:
                moving_users = model.objects.filter(chat_id=old_id).values("user_id")
                model.objects.filter(chat_id=new_id, user_id__in=moving_users).delete()
                model.objects.filter(chat_id=old_id).update(chat_id=new_id)
            rewritten += 1

        if rewritten:
            cls.get_logger().info(
                f"Rewrote {rewritten} direct chat id(s): {old_username} -> {new_username}"
            )
        return rewritten


# =============================================================================
# Snapshot
# =============================================================================


class SnapshotService(BaseService):
    """Everything a client needs to render its chat list at start-up."""

    @classmethod
    def get_snapshot(cls, user: User) -> ServiceResult[dict[str, Any]]:
        """
        Collect the user's state in one pass.

        Returns:
            ServiceResult with:
                profile: the User
                friends: Friendship rows (friend preloaded)
                friend_requests: usernames of incoming requests
                sent_requests: usernames of outgoing requests
                groups: the user's Groups with ``member_list`` set
                messages: {chat_id: [Message, ...]} for every group and
                    friend chat, oldest first
                unread_counts: {chat_id: count}
                themes: {chat_id: ChatTheme}
                wallpapers: {chat_id: url}
        """
        friends = list(FriendService.list_friends(user))
        incoming = [r.sender.username for r in FriendService.incoming_requests(user)]
        outgoing = [r.receiver.username for r in FriendService.outgoing_requests(user)]

        groups = list(
            Group.objects.filter(memberships__user=user)
            .select_related("creator")
            .order_by("created_at")
        )
        memberships = (
            GroupMember.objects.filter(group__in=groups)
            .select_related("user")
            .order_by("joined_at", "user__username")
        )
        members_by_group: dict[str, list[str]] = {g.id: [] for g in groups}
        for membership in memberships:
            members_by_group[membership.group_id].append(membership.user.username)
        for group in groups:
            group.member_list = members_by_group[group.id]

        chat_ids = [g.id for g in groups] + [
            direct_chat_id(user.username, f.friend.username) for f in friends
        ]
        messages: dict[str, list[Message]] = {chat_id: [] for chat_id in chat_ids}
        for message in (
            Message.objects.filter(chat_id__in=chat_ids)
            .select_related("sender")
            .order_by("timestamp", "id")
        ):
            messages[message.chat_id].append(message)

        unread_counts = dict(
            UnreadCount.objects.filter(user=user).values_list("chat_id", "count")
        )
        themes = {t.chat_id: t for t in ChatTheme.objects.filter(user=user)}
        wallpapers = dict(
            ChatWallpaper.objects.filter(user=user).values_list("chat_id", "wallpaper_url")
        )

        return ServiceResult.success(
            {
                "profile": user,
                "friends": friends,
                "friend_requests": incoming,
                "sent_requests": outgoing,
                "groups": groups,
                "messages": messages,
                "unread_counts": unread_counts,
                "themes": themes,
                "wallpapers": wallpapers,
            }
        )
