"""
URL configuration for notifications API.

Routes:
    /push/subscriptions/  - Subscribe (POST), unsubscribe (DELETE)
    /push/public-key/     - VAPID public key (GET)
"""

from django.urls import path

from notifications.views import PushPublicKeyView, PushSubscriptionView

app_name = "notifications"

urlpatterns = [
    path("push/subscriptions/", PushSubscriptionView.as_view(), name="push-subscriptions"),
    path("push/public-key/", PushPublicKeyView.as_view(), name="push-public-key"),
]
