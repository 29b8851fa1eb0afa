"""
Friend graph models.

Models:
    Friendship: One row per direction of an accepted friendship
    FriendRequest: A pending request from sender to receiver

Design Decisions:
    - Friendship is stored twice (alice->bob and bob->alice) so "my friends"
      is a single indexed lookup. Both rows are written together with the
      request deletion in FriendService.accept_request().
    - Accepted or rejected requests are deleted, not flagged.
"""

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from core.models import BaseModel


class Friendship(models.Model):
    """
    One direction of an accepted friendship.

    Fields:
        user: Owner of this friend list entry
        friend: The friend
        added_at: When the request was accepted (same on both rows)
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="friendships",
    )
    friend = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
    )
    added_at = models.DateTimeField()

    class Meta:
        db_table = "friends_friendship"
        ordering = ["added_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "friend"],
                name="friends_friendship_unique_pair",
            ),
            models.CheckConstraint(
                condition=~Q(user=F("friend")),
                name="friends_friendship_not_self",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} -> {self.friend_id}"


class FriendRequest(BaseModel):
    """
    A pending friend request.

    Fields:
        sender: User who asked
        receiver: User who can accept or reject
    """

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_friend_requests",
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_friend_requests",
    )

    class Meta:
        db_table = "friends_request"
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["sender", "receiver"],
                name="friends_request_unique_pair",
            ),
            models.CheckConstraint(
                condition=~Q(sender=F("receiver")),
                name="friends_request_not_self",
            ),
        ]

    def __str__(self) -> str:
        return f"FriendRequest({self.sender_id} -> {self.receiver_id})"
