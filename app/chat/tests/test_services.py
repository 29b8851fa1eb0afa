"""
Tests for chat service layer business logic.

This module tests the chat services:
- ChatAccessService: Who may use a chat id
- GroupService: Group lifecycle (create, update, add members, leave)
- MessageService: Send, forward, edit, delete, list, unread, attachments
- PreferenceService: Themes and wallpapers
- SnapshotService: Start-up state

Test Organization:
    - Each service method has its own test class
    - Tests use descriptive names following: test_<scenario>_<expected_outcome>

Testing Philosophy:
    Tests focus on observable behavior:
    - ServiceResult success/failure states and error codes
    - Database state changes (or their absence on failure)
"""

import uuid
from datetime import timedelta
from unittest import mock

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError, connection
from django.utils import timezone

from authentication.tests.factories import UserFactory
from chat.constants import MESSAGE_CONFIG, AttachmentType
from chat.models import ChatTheme, ChatWallpaper, Group, GroupMember, Message, UnreadCount
from chat.services import (
    ChatAccessService,
    GroupService,
    MessageService,
    PreferenceService,
    SnapshotService,
)
from chat.tests.factories import (
    ChatThemeFactory,
    ChatWallpaperFactory,
    GroupFactory,
    MessageFactory,
    PNG_BYTES,
    UnreadCountFactory,
)
from friends.tests.factories import FriendRequestFactory, make_friends


def unread(user, chat_id):
    counter = UnreadCount.objects.filter(user=user, chat_id=chat_id).first()
    return counter.count if counter else 0


# =============================================================================
# ChatAccessService
# =============================================================================


class TestChatAccess:
    def test_direct_chat_party_has_access(self, alice, bob, direct_chat):
        result = ChatAccessService.check(alice, direct_chat)

        assert result.success is True
        assert {u.username for u in result.data} == {"alice", "bob"}

    def test_direct_chat_does_not_require_friendship(self, alice, carol):
        assert ChatAccessService.check(alice, "alice:carol").success is True

    def test_direct_chat_outsider_denied(self, dave, direct_chat):
        result = ChatAccessService.check(dave, direct_chat)

        assert result.error_code == "NOT_PARTICIPANT"

    def test_direct_chat_with_unknown_user(self, alice):
        result = ChatAccessService.check(alice, "alice:nobody")

        assert result.error_code == "CHAT_NOT_FOUND"

    def test_direct_chat_with_inactive_user(self, alice):
        UserFactory(username="ghost", is_active=False)

        result = ChatAccessService.check(alice, "alice:ghost")

        assert result.error_code == "CHAT_NOT_FOUND"

    def test_malformed_chat_id(self, alice):
        result = ChatAccessService.check(alice, "alice:bob:carol")

        assert result.error_code == "INVALID_CHAT_ID"

    def test_group_member_has_access(self, bob, family_group):
        assert ChatAccessService.check(bob, family_group.id).success is True

    def test_group_outsider_denied(self, dave, family_group):
        assert ChatAccessService.check(dave, family_group.id).error_code == "NOT_PARTICIPANT"

    def test_missing_group(self, alice):
        result = ChatAccessService.check(alice, "group_00000000-0000-0000-0000-000000000000")

        assert result.error_code == "CHAT_NOT_FOUND"


# =============================================================================
# GroupService
# =============================================================================


class TestCreateGroup:
    def test_creates_group_with_creator_and_members(self, alice, bob, carol):
        result = GroupService.create_group(alice, "Famille", ["bob", "carol"])

        assert result.success is True
        group = result.data
        assert group.id.startswith("group_")
        assert group.creator == alice
        assert sorted(group.member_usernames()) == ["alice", "bob", "carol"]

    def test_deduplicates_and_skips_unknown_usernames(self, alice, bob):
        result = GroupService.create_group(alice, "Duo", ["bob", "bob", "alice", "nobody"])

        assert sorted(result.data.member_usernames()) == ["alice", "bob"]
        assert GroupMember.objects.count() == 2

    def test_blank_name_fails_without_writes(self, alice, bob):
        result = GroupService.create_group(alice, "   ", ["bob"])

        assert result.error_code == "VALIDATION_ERROR"
        assert not Group.objects.exists()
        assert not GroupMember.objects.exists()

    def test_default_picture(self, alice):
        group = GroupService.create_group(alice, "Solo").data

        assert group.profile_pic.startswith("https://")


class TestGetAndUpdateGroup:
    def test_member_gets_group(self, bob, family_group):
        assert GroupService.get_group(bob, family_group.id).data == family_group

    def test_non_member_denied(self, dave, family_group):
        assert GroupService.get_group(dave, family_group.id).error_code == "NOT_MEMBER"

    def test_unknown_group(self, alice):
        assert GroupService.get_group(alice, "group_nope").error_code == "GROUP_NOT_FOUND"

    def test_any_member_updates(self, carol, family_group):
        result = GroupService.update_group(
            carol, family_group.id, name="Famille Martin", description="Les cousins"
        )

        assert result.success is True
        family_group.refresh_from_db()
        assert family_group.name == "Famille Martin"
        assert family_group.description == "Les cousins"

    def test_blank_name_rejected(self, alice, family_group):
        result = GroupService.update_group(alice, family_group.id, name="")

        assert result.error_code == "VALIDATION_ERROR"
        family_group.refresh_from_db()
        assert family_group.name == "Famille"

    def test_non_member_cannot_update(self, dave, family_group):
        result = GroupService.update_group(dave, family_group.id, name="Pirates")

        assert result.error_code == "NOT_MEMBER"


class TestAddMembers:
    def test_returns_only_added_usernames(self, alice, bob, dave):
        group = GroupFactory(creator=alice, members=[bob])

        result = GroupService.add_members(alice, group.id, ["bob", "dave", "nobody"])

        assert result.data == ["dave"]
        assert sorted(group.member_usernames()) == ["alice", "bob", "dave"]

    def test_non_member_cannot_add(self, dave, family_group):
        result = GroupService.add_members(dave, family_group.id, ["dave"])

        assert result.error_code == "NOT_MEMBER"
        assert not family_group.memberships.filter(user=dave).exists()


class TestLeaveGroup:
    def test_leaving_removes_membership_and_own_chat_state(self, alice, bob, family_group):
        UnreadCountFactory(user=bob, chat_id=family_group.id, count=3)
        ChatThemeFactory(user=bob, chat_id=family_group.id)
        ChatWallpaperFactory(user=bob, chat_id=family_group.id)
        UnreadCountFactory(user=alice, chat_id=family_group.id, count=2)
        MessageFactory(chat_id=family_group.id, sender=bob)

        result = GroupService.leave_group(bob, family_group.id)

        assert result.data == {"group_id": family_group.id, "group_deleted": False}
        assert not family_group.memberships.filter(user=bob).exists()
        assert not UnreadCount.objects.filter(user=bob).exists()
        assert not ChatTheme.objects.filter(user=bob).exists()
        assert not ChatWallpaper.objects.filter(user=bob).exists()
        # Other members and history are kept
        assert unread(alice, family_group.id) == 2
        assert Message.objects.filter(chat_id=family_group.id).count() == 1

    def test_last_member_leaving_deletes_group_and_orphans_nothing(self, alice, bob):
        group = GroupFactory(creator=alice, members=[bob])
        MessageFactory.create_batch(3, chat_id=group.id, sender=alice)
        UnreadCountFactory(user=alice, chat_id=group.id)
        ChatThemeFactory(user=alice, chat_id=group.id)
        ChatWallpaperFactory(user=alice, chat_id=group.id)
        MessageFactory(chat_id="alice:bob", sender=alice)

        GroupService.leave_group(bob, group.id)
        result = GroupService.leave_group(alice, group.id)

        assert result.data["group_deleted"] is True
        assert not Group.objects.filter(pk=group.id).exists()
        assert not GroupMember.objects.exists()
        for model in (Message, UnreadCount, ChatTheme, ChatWallpaper):
            assert not model.objects.filter(chat_id=group.id).exists()
        # Unrelated chats untouched
        assert Message.objects.filter(chat_id="alice:bob").count() == 1

    def test_non_member_cannot_leave(self, dave, family_group):
        assert GroupService.leave_group(dave, family_group.id).error_code == "NOT_MEMBER"

    def test_unknown_group(self, alice):
        assert GroupService.leave_group(alice, "group_nope").error_code == "GROUP_NOT_FOUND"


# =============================================================================
# MessageService.send_message
# =============================================================================


class TestSendMessage:
    def test_direct_message_increments_recipient_only(self, alice, bob, direct_chat):
        result = MessageService.send_message(alice, direct_chat, "Coucou")

        assert result.success is True
        assert result.data.chat_id == "alice:bob"
        assert result.data.sender == alice
        assert unread(bob, direct_chat) == 1
        assert unread(alice, direct_chat) == 0

    def test_group_message_increments_every_other_member_by_one(
        self, alice, bob, carol, family_group
    ):
        UnreadCountFactory(user=carol, chat_id=family_group.id, count=4)

        MessageService.send_message(alice, family_group.id, "À table !")

        assert unread(bob, family_group.id) == 1
        assert unread(carol, family_group.id) == 5
        assert unread(alice, family_group.id) == 0

    def test_repeated_sends_count_each_message(self, alice, bob, direct_chat):
        for text in ("un", "deux", "trois"):
            MessageService.send_message(alice, direct_chat, text)

        assert unread(bob, direct_chat) == 3

    def test_empty_message_rejected(self, alice, bob, direct_chat):
        result = MessageService.send_message(alice, direct_chat, "   ")

        assert result.error_code == "EMPTY_CONTENT"
        assert not Message.objects.exists()

    def test_attachment_only_message(self, alice, bob, direct_chat):
        attachment = {"type": "image", "url": "/uploads/attachments/x/photo.png", "name": "photo.png"}

        result = MessageService.send_message(alice, direct_chat, "", attachment=attachment)

        assert result.success is True
        assert result.data.attachment == attachment

    def test_malformed_attachment_rejected(self, alice, bob, direct_chat):
        result = MessageService.send_message(
            alice, direct_chat, "voir pièce jointe", attachment={"type": "audio", "url": "/x"}
        )

        assert result.error_code == "INVALID_ATTACHMENT"

    def test_too_long_rejected(self, alice, bob, direct_chat):
        text = "x" * (MESSAGE_CONFIG.MAX_CONTENT_LENGTH + 1)

        assert MessageService.send_message(alice, direct_chat, text).error_code == "VALIDATION_ERROR"

    def test_outsider_cannot_send_and_nothing_is_written(self, dave, family_group):
        result = MessageService.send_message(dave, family_group.id, "Salut")

        assert result.error_code == "NOT_PARTICIPANT"
        assert not Message.objects.exists()
        assert not UnreadCount.objects.exists()

    def test_push_is_queued_after_commit(
        self, alice, bob, direct_chat, django_capture_on_commit_callbacks
    ):
        with mock.patch(
            "chat.services.PushNotificationService.notify_new_message"
        ) as notify:
            with django_capture_on_commit_callbacks(execute=True) as callbacks:
                result = MessageService.send_message(alice, direct_chat, "Coucou")

        assert len(callbacks) == 1
        notify.assert_called_once_with(result.data, [bob.pk])

    def test_counter_failure_rolls_back_message(self, alice, bob, carol, family_group):
        real_increment = MessageService._increment_unread
        calls = []

        def failing_increment(user_id, chat_id):
            calls.append(user_id)
            if len(calls) == 2:
                raise DatabaseError("database is locked")
            real_increment(user_id, chat_id)

        with mock.patch.object(
            MessageService, "_increment_unread", side_effect=failing_increment
        ):
            with pytest.raises(DatabaseError):
                MessageService.send_message(alice, family_group.id, "À table !")

        assert len(calls) == 2
        assert not Message.objects.exists()
        assert not UnreadCount.objects.exists()

    def test_membership_is_checked_inside_the_transaction(self, alice, bob, direct_chat):
        outer_depth = len(connection.atomic_blocks)
        depths = []
        real_check = ChatAccessService.check

        def recording_check(user, chat_id):
            depths.append(len(connection.atomic_blocks))
            return real_check(user, chat_id)

        with mock.patch.object(ChatAccessService, "check", side_effect=recording_check):
            MessageService.send_message(alice, direct_chat, "Coucou")

        assert depths == [outer_depth + 1]


# =============================================================================
# MessageService.forward_message
# =============================================================================


class TestForwardMessage:
    def test_copies_to_each_target(self, alice, bob, carol, family_group, direct_chat):
        source = MessageFactory(
            chat_id=direct_chat,
            sender=bob,
            text="Photo de vacances",
            attachment_type=AttachmentType.IMAGE,
            attachment_url="/uploads/attachments/a/plage.jpg",
            attachment_name="plage.jpg",
        )

        result = MessageService.forward_message(
            alice, source.id, [family_group.id, "alice:carol", direct_chat]
        )

        assert result.success is True
        copies = result.data
        assert [c.chat_id for c in copies] == [family_group.id, "alice:carol"]
        for copy in copies:
            assert copy.sender == alice
            assert copy.is_transferred is True
            assert copy.text == "Photo de vacances"
            assert copy.attachment == source.attachment
        assert unread(carol, "alice:carol") == 1
        assert unread(bob, family_group.id) == 1

    def test_invalid_target_writes_nothing(self, alice, bob, family_group, direct_chat):
        source = MessageFactory(chat_id=direct_chat, sender=bob)
        outsider_group = GroupFactory()

        result = MessageService.forward_message(
            alice, source.id, [family_group.id, outsider_group.id]
        )

        assert result.error_code == "NOT_PARTICIPANT"
        assert Message.objects.count() == 1
        assert not UnreadCount.objects.exists()

    def test_deleted_source_rejected(self, alice, bob, family_group, direct_chat):
        source = MessageFactory(chat_id=direct_chat, sender=bob, is_deleted=True)

        result = MessageService.forward_message(alice, source.id, [family_group.id])

        assert result.error_code == "MESSAGE_DELETED"

    def test_unreadable_source_rejected(self, dave, alice, bob, direct_chat):
        source = MessageFactory(chat_id=direct_chat, sender=bob)

        result = MessageService.forward_message(dave, source.id, ["alice:dave"])

        assert result.error_code == "NOT_PARTICIPANT"

    def test_only_source_chat_as_target(self, alice, bob, direct_chat):
        source = MessageFactory(chat_id=direct_chat, sender=bob)

        result = MessageService.forward_message(alice, source.id, [direct_chat])

        assert result.error_code == "VALIDATION_ERROR"


# =============================================================================
# MessageService.edit_message / delete_message
# =============================================================================


class TestEditMessage:
    def test_sender_edits(self, alice, bob, direct_chat):
        message = MessageFactory(chat_id=direct_chat, sender=alice, text="Bonjuor")

        result = MessageService.edit_message(alice, message.id, "Bonjour")

        assert result.success is True
        message.refresh_from_db()
        assert message.text == "Bonjour"
        assert message.edited_timestamp is not None

    def test_other_user_cannot_edit(self, alice, bob, direct_chat):
        message = MessageFactory(chat_id=direct_chat, sender=alice)

        result = MessageService.edit_message(bob, message.id, "Piraté")

        assert result.error_code == "NOT_SENDER"
        assert result.error == "Vous n'êtes pas autorisé à modifier ce message."

    def test_deleted_message_cannot_be_edited(self, alice, direct_chat):
        message = MessageFactory(chat_id=direct_chat, sender=alice, is_deleted=True)

        result = MessageService.edit_message(alice, message.id, "Retour")

        assert result.error_code == "MESSAGE_DELETED"

    def test_empty_text_rejected(self, alice, direct_chat):
        message = MessageFactory(chat_id=direct_chat, sender=alice)

        assert MessageService.edit_message(alice, message.id, " ").error_code == "EMPTY_CONTENT"

    def test_unknown_message(self, alice):
        result = MessageService.edit_message(alice, uuid.uuid4(), "?")

        assert result.error_code == "MESSAGE_NOT_FOUND"


class TestDeleteMessage:
    def test_soft_deletes_with_placeholder(self, alice, direct_chat):
        message = MessageFactory(
            chat_id=direct_chat,
            sender=alice,
            attachment_type=AttachmentType.FILE,
            attachment_url="/uploads/attachments/b/doc.pdf",
            attachment_name="doc.pdf",
        )

        result = MessageService.delete_message(alice, message.id)

        assert result.message == "Message supprimé."
        message.refresh_from_db()
        assert message.is_deleted is True
        assert message.text == "message supprimé"
        assert message.attachment is None

    def test_deleting_twice_fails(self, alice, direct_chat):
        message = MessageFactory(chat_id=direct_chat, sender=alice)
        MessageService.delete_message(alice, message.id)

        result = MessageService.delete_message(alice, message.id)

        assert result.error_code == "ALREADY_DELETED"
        assert result.error == "Le message est déjà supprimé."

    def test_other_user_cannot_delete(self, alice, bob, direct_chat):
        message = MessageFactory(chat_id=direct_chat, sender=alice)

        result = MessageService.delete_message(bob, message.id)

        assert result.error == "Vous n'êtes pas autorisé à supprimer ce message."
        message.refresh_from_db()
        assert message.is_deleted is False


# =============================================================================
# MessageService: listing, unread, attachments
# =============================================================================


class TestListMessages:
    def test_ordered_by_timestamp(self, alice, bob, direct_chat):
        now = timezone.now()
        late = MessageFactory(chat_id=direct_chat, sender=bob, timestamp=now)
        early = MessageFactory(chat_id=direct_chat, sender=alice, timestamp=now - timedelta(minutes=5))
        MessageFactory(chat_id="alice:carol", sender=alice)

        result = MessageService.list_messages(alice, direct_chat)

        assert list(result.data) == [early, late]

    def test_outsider_denied(self, dave, direct_chat, alice, bob):
        assert MessageService.list_messages(dave, direct_chat).error_code == "NOT_PARTICIPANT"


class TestClearUnread:
    def test_resets_own_counter_only(self, alice, bob, direct_chat):
        UnreadCountFactory(user=alice, chat_id=direct_chat, count=7)
        UnreadCountFactory(user=bob, chat_id=direct_chat, count=2)

        result = MessageService.clear_unread(alice, direct_chat)

        assert result.success is True
        assert unread(alice, direct_chat) == 0
        assert unread(bob, direct_chat) == 2

    def test_rejects_foreign_direct_chat(self, dave, direct_chat):
        assert MessageService.clear_unread(dave, direct_chat).error_code == "INVALID_CHAT_ID"


class TestStoreAttachment:
    def test_stores_image(self, alice, settings):
        upload = SimpleUploadedFile("photo.png", PNG_BYTES, content_type="image/png")

        result = MessageService.store_attachment(alice, upload)

        assert result.success is True
        assert result.data["type"] == "image"
        assert result.data["name"] == "photo.png"
        assert result.data["url"].startswith(settings.MEDIA_URL)

    def test_empty_file_rejected(self, alice):
        upload = SimpleUploadedFile("vide.txt", b"", content_type="text/plain")

        assert MessageService.store_attachment(alice, upload).error_code == "VALIDATION_ERROR"

    def test_too_large_rejected(self, alice, settings):
        settings.MAX_ATTACHMENT_SIZE_MB = 0
        upload = SimpleUploadedFile("gros.bin", b"12345", content_type="application/octet-stream")

        result = MessageService.store_attachment(alice, upload)

        assert result.error_code == "VALIDATION_ERROR"
        assert "file" in result.errors

    def test_missing_file(self, alice):
        assert MessageService.store_attachment(alice, None).error_code == "VALIDATION_ERROR"


# =============================================================================
# PreferenceService
# =============================================================================


class TestPreferences:
    def test_set_theme_upserts(self, alice, bob, direct_chat):
        PreferenceService.set_theme(alice, direct_chat, "blue", "dark")
        result = PreferenceService.set_theme(alice, direct_chat, "pink", "light")

        assert result.success is True
        theme = ChatTheme.objects.get(user=alice, chat_id=direct_chat)
        assert (theme.theme_color, theme.theme_mode) == ("pink", "light")

    def test_unknown_color_rejected(self, alice, bob, direct_chat):
        result = PreferenceService.set_theme(alice, direct_chat, "orange", "dark")

        assert result.error_code == "VALIDATION_ERROR"
        assert "theme_color" in result.errors

    def test_theme_requires_participation(self, dave, family_group):
        result = PreferenceService.set_theme(dave, family_group.id, "blue", "dark")

        assert result.error_code == "NOT_PARTICIPANT"

    def test_wallpaper_set_and_cleared(self, alice, bob, direct_chat):
        PreferenceService.set_wallpaper(alice, direct_chat, "https://example.com/a.png")
        PreferenceService.set_wallpaper(alice, direct_chat, "https://example.com/b.png")

        assert ChatWallpaper.objects.get(user=alice).wallpaper_url == "https://example.com/b.png"

        result = PreferenceService.set_wallpaper(alice, direct_chat, "")

        assert result.success is True
        assert result.data is None
        assert not ChatWallpaper.objects.exists()


# =============================================================================
# SnapshotService
# =============================================================================


class TestSnapshot:
    def test_collects_user_state(self, alice, bob, carol, dave, family_group):
        make_friends(alice, bob)
        FriendRequestFactory(sender=dave, receiver=alice)
        FriendRequestFactory(sender=alice, receiver=carol)
        MessageFactory(chat_id="alice:bob", sender=bob, text="Salut")
        MessageFactory(chat_id=family_group.id, sender=carol, text="Bonjour")
        MessageFactory(chat_id="bob:carol", sender=bob, text="Secret")
        UnreadCountFactory(user=alice, chat_id="alice:bob", count=1)
        ChatThemeFactory(user=alice, chat_id=family_group.id, theme_color="green")
        ChatWallpaperFactory(user=alice, chat_id="alice:bob", wallpaper_url="https://example.com/w.png")

        snapshot = SnapshotService.get_snapshot(alice).data

        assert snapshot["profile"] == alice
        assert [f.friend.username for f in snapshot["friends"]] == ["bob"]
        assert snapshot["friend_requests"] == ["dave"]
        assert snapshot["sent_requests"] == ["carol"]
        assert [g.id for g in snapshot["groups"]] == [family_group.id]
        assert sorted(snapshot["groups"][0].member_list) == ["alice", "bob", "carol"]
        assert set(snapshot["messages"]) == {family_group.id, "alice:bob"}
        assert [m.text for m in snapshot["messages"]["alice:bob"]] == ["Salut"]
        assert snapshot["unread_counts"] == {"alice:bob": 1}
        assert snapshot["themes"][family_group.id].theme_color == "green"
        assert snapshot["wallpapers"] == {"alice:bob": "https://example.com/w.png"}

    def test_friend_chat_without_messages_is_present(self, alice, bob):
        make_friends(alice, bob)

        snapshot = SnapshotService.get_snapshot(alice).data

        assert snapshot["messages"] == {"alice:bob": []}
