"""
Notifications app for Web Push delivery.

This app provides:
- PushSubscription model holding browser push subscriptions
- PushSubscriptionStore protocol with database and in-memory stores
- PushNotificationService for subscribing and fanning out new-message pushes
- A Celery task signing and sending Web Push payloads (pywebpush, VAPID)
- REST API for subscriptions and the VAPID public key

Usage:
    from notifications.services import PushNotificationService

    # Called by MessageService once a message is committed
    PushNotificationService.notify_new_message(message, recipient_ids)
"""
