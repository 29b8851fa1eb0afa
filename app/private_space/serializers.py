"""
Serializers for the private space.
"""

from rest_framework import serializers

from chat.constants import MESSAGE_CONFIG
from chat.serializers import AttachmentSerializer
from private_space.models import PrivateSpacePost


class UnlockSerializer(serializers.Serializer):
    passcode = serializers.CharField(write_only=True, trim_whitespace=False)


class UnlockResponseSerializer(serializers.Serializer):
    token = serializers.CharField()
    expires_in = serializers.IntegerField(help_text="Token lifetime in seconds")


class PrivateSpacePostSerializer(serializers.ModelSerializer):
    sender = serializers.CharField(source="user.username", read_only=True)
    sender_profile_pic = serializers.CharField(source="user.profile_pic", read_only=True)
    attachment = AttachmentSerializer(read_only=True, allow_null=True)

    class Meta:
        model = PrivateSpacePost
        fields = ["id", "sender", "sender_profile_pic", "text", "timestamp", "attachment"]
        read_only_fields = fields


class PrivateSpacePostCreateSerializer(serializers.Serializer):
    text = serializers.CharField(
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
        required=False,
        allow_blank=True,
        trim_whitespace=False,
        default="",
    )
    attachment = AttachmentSerializer(required=False, allow_null=True, default=None)
