"""
Factory Boy factories for chat models.

Provides test data generation for:
- Group: Group with creator membership (and optional extra members)
- GroupMember: Membership row
- Message: Message in a direct or group chat
- UnreadCount, ChatTheme, ChatWallpaper: Per-user chat state

Usage:
    from chat.tests.factories import GroupFactory, MessageFactory

    # Group created by alice, with bob and carol as members
    group = GroupFactory(creator=alice, members=[bob, carol])

    # Message in a direct chat
    message = MessageFactory(chat_id="alice:bob", sender=alice)
"""

import factory
from django.utils import timezone

from authentication.tests.factories import UserFactory
from chat.constants import ThemeColor, ThemeMode
from chat.models import ChatTheme, ChatWallpaper, Group, GroupMember, Message, UnreadCount

# Leading bytes of real files, enough for libmagic to recognize them
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
    b"\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"
)
GIF_BYTES = b"GIF89a\x01\x00\x01\x00\x80\x00\x00\xff\xff\xff\x00\x00\x00!\xf9\x04\x01\x00\x00\x00\x00,"
MP4_BYTES = b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00mp42isom\x00\x00\x00\x08free"
PDF_BYTES = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\n%%EOF\n"


class GroupFactory(factory.django.DjangoModelFactory):
    """
    Factory for Group model.

    The creator is always a member. Pass ``members=[...]`` to add others.
    """

    class Meta:
        model = Group
        skip_postgeneration_save = True

    name = factory.Faker("word")
    creator = factory.SubFactory(UserFactory)
    description = ""

    @factory.post_generation
    def members(self, create, extracted, **kwargs):
        if not create:
            return
        users = [self.creator] if self.creator else []
        users += [u for u in (extracted or []) if u != self.creator]
        for user in users:
            GroupMember.objects.create(group=self, user=user)


class GroupMemberFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = GroupMember

    group = factory.SubFactory(GroupFactory)
    user = factory.SubFactory(UserFactory)


class MessageFactory(factory.django.DjangoModelFactory):
    """
    Factory for Message model.

    Pass ``chat_id``; the default only suits tests that ignore it.
    """

    class Meta:
        model = Message

    sender = factory.SubFactory(UserFactory)
    chat_id = "alice:bob"
    text = factory.Faker("sentence")
    timestamp = factory.LazyFunction(timezone.now)


class UnreadCountFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = UnreadCount

    user = factory.SubFactory(UserFactory)
    chat_id = "alice:bob"
    count = 1


class ChatThemeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ChatTheme

    user = factory.SubFactory(UserFactory)
    chat_id = "alice:bob"
    theme_color = ThemeColor.BLUE
    theme_mode = ThemeMode.DARK


class ChatWallpaperFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ChatWallpaper

    user = factory.SubFactory(UserFactory)
    chat_id = "alice:bob"
    wallpaper_url = factory.Faker("image_url")
