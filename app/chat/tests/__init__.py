"""
Tests for chat app.

This package contains test modules for:
- test_identifiers.py: Chat id helpers
- test_models.py: Group, Message and per-user chat state models
- test_services.py: Group, message, preference and snapshot services
- test_storage.py: Attachment storage helpers
- test_views.py: REST API endpoint tests

Usage:
    pytest chat/tests/
    pytest chat/tests/test_services.py
"""
