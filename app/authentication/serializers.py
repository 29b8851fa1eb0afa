"""
Serializers for authentication.

This module provides DRF serializers for:
- User model (public profile, read operations)
- Request bodies for register, login, logout, profile update,
  username change and password change

Related files:
    - models.py: User model
    - views.py: Views that use these serializers
    - services.py: AccountService enforces the business rules

Security:
    - Password fields are write-only
"""

from rest_framework import serializers

from authentication.models import User


class UserSerializer(serializers.ModelSerializer):
    """Public profile of a user, as listed to other users."""

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "phone",
            "status",
            "profile_pic",
            "description",
        ]
        read_only_fields = fields


class CurrentUserSerializer(UserSerializer):
    """Profile of the authenticated user."""

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ["date_joined", "last_login"]
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=30)
    email = serializers.CharField(max_length=254)
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=30)
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class TokenPairSerializer(serializers.Serializer):
    access = serializers.CharField()
    refresh = serializers.CharField()


class LoginResponseSerializer(serializers.Serializer):
    """Response body of a successful login."""

    user = CurrentUserSerializer()
    tokens = TokenPairSerializer()


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class ProfileUpdateSerializer(serializers.Serializer):
    """
    Partial profile update.

    Every field is optional; omitted fields keep their value.
    """

    email = serializers.CharField(max_length=254, required=False)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)
    status = serializers.CharField(max_length=100, required=False, allow_blank=True)
    profile_pic = serializers.URLField(max_length=500, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)


class UsernameChangeSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=30)


class PasswordChangeSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True, trim_whitespace=False)
    new_password = serializers.CharField(write_only=True, trim_whitespace=False)
