"""
Tests for authentication app.

This package contains test modules for:
- test_models.py: User model, validators and manager
- test_services.py: AccountService tests (including username propagation)
- test_views.py: API endpoint tests

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_models.py
"""
