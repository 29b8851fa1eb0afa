"""
Tests for notifications app.

This package contains test modules for:
- test_stores.py: Push subscription store tests
- test_services.py: PushNotificationService tests
- test_tasks.py: Web Push delivery task tests
- test_views.py: API endpoint tests

Usage:
    pytest notifications/tests/
    pytest notifications/tests/test_tasks.py
"""
