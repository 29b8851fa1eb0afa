"""
Tests for PushNotificationService.
"""

from unittest import mock

from chat.tests.factories import GroupFactory, MessageFactory
from notifications.models import PushSubscription
from notifications.services import PushNotificationService
from notifications.tests.factories import PushSubscriptionFactory, subscription_info


class TestSubscribe:
    def test_stores_subscription(self, alice):
        result = PushNotificationService.subscribe(alice, subscription_info())

        assert result
        assert PushSubscription.objects.get().user == alice

    def test_missing_keys(self, alice):
        result = PushNotificationService.subscribe(alice, {"endpoint": "https://push.example.com/x"})

        assert result.error_code == "VALIDATION_ERROR"
        assert not PushSubscription.objects.exists()


class TestUnsubscribe:
    def test_removes_own_subscription(self, alice):
        subscription = PushSubscriptionFactory(user=alice)

        result = PushNotificationService.unsubscribe(alice, subscription.endpoint)

        assert result
        assert not PushSubscription.objects.exists()

    def test_cannot_remove_someone_elses(self, alice, bob):
        subscription = PushSubscriptionFactory(user=bob)

        result = PushNotificationService.unsubscribe(alice, subscription.endpoint)

        assert result.error_code == "SUBSCRIPTION_NOT_FOUND"
        assert PushSubscription.objects.exists()


class TestPublicKey:
    def test_not_configured(self, settings):
        settings.VAPID_PUBLIC_KEY = ""

        assert PushNotificationService.public_key().error_code == "PUSH_NOT_CONFIGURED"

    def test_configured(self, vapid):
        assert PushNotificationService.public_key().data == {"public_key": "BPublicKeyForTests"}


class TestBuildMessagePayload:
    def test_direct_message(self, alice, bob):
        message = MessageFactory(chat_id="alice:bob", sender=bob, text="Salut")

        payload = PushNotificationService.build_message_payload(message)

        assert payload == {
            "title": "bob",
            "body": "Salut",
            "chat_id": "alice:bob",
            "message_id": str(message.id),
        }

    def test_group_message_title(self, alice, bob):
        group = GroupFactory(name="Famille", creator=alice, members=[bob])
        message = MessageFactory(chat_id=group.id, sender=bob, text="Ce soir ?")

        payload = PushNotificationService.build_message_payload(message)

        assert payload["title"] == "bob (Famille)"

    def test_long_text_is_truncated(self, bob):
        message = MessageFactory(sender=bob, text="x" * 500)

        payload = PushNotificationService.build_message_payload(message)

        assert len(payload["body"]) == 120

    def test_attachment_only(self, bob):
        message = MessageFactory(
            sender=bob,
            text="",
            attachment_type="image",
            attachment_url="/uploads/attachments/a/photo.png",
            attachment_name="photo.png",
        )

        payload = PushNotificationService.build_message_payload(message)

        assert payload["body"] == "Pièce jointe : photo.png"


class TestNotifyNewMessage:
    @mock.patch("notifications.services.tasks.send_push_notification")
    def test_queues_one_task_per_recipient(self, send_task, alice, bob):
        message = MessageFactory(chat_id="alice:bob", sender=bob, text="Coucou")

        queued = PushNotificationService.notify_new_message(message, [alice.pk])

        assert queued == 1
        send_task.delay.assert_called_once_with(
            str(alice.pk), PushNotificationService.build_message_payload(message)
        )
