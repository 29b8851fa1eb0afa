"""
Serializers for the friend graph.
"""

from rest_framework import serializers

from friends.models import Friendship, FriendRequest


class FriendSerializer(serializers.ModelSerializer):
    """A friend as shown in the friend list: username and since when."""

    username = serializers.CharField(source="friend.username", read_only=True)
    profile_pic = serializers.CharField(source="friend.profile_pic", read_only=True)
    status = serializers.CharField(source="friend.status", read_only=True)

    class Meta:
        model = Friendship
        fields = ["username", "profile_pic", "status", "added_at"]
        read_only_fields = fields


class FriendRequestSerializer(serializers.ModelSerializer):
    sender = serializers.CharField(source="sender.username", read_only=True)
    receiver = serializers.CharField(source="receiver.username", read_only=True)

    class Meta:
        model = FriendRequest
        fields = ["sender", "receiver", "created_at"]
        read_only_fields = fields


class FriendRequestCreateSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=30)
