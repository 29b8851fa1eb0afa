"""
Authentication application.

Accounts and sessions for the chat: registration, username/password login
with JWT tokens, logout, the public profile, and username changes that
carry direct conversations along.

Key components:
    - User model: Username-based account with profile fields
    - AccountService: Business logic for account operations

Usage:
    from authentication.models import User
    from authentication.services import AccountService
"""
