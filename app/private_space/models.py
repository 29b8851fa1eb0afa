"""
Private space models.

Models:
    PrivateSpaceMember: One of the (at most two) users allowed in the space
    PrivateSpacePost: A post in the shared feed
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone

from chat.constants import AttachmentType
from core.model_mixins import UUIDPrimaryKeyMixin


class PrivateSpaceMember(models.Model):
    """
    Access grant to the private space.

    The two-member limit is enforced by PrivateSpaceService.grant_access.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="private_space_membership",
    )
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "private_space_member"
        ordering = ["added_at"]

    def __str__(self) -> str:
        return f"Private space member: {self.user_id}"


class PrivateSpacePost(UUIDPrimaryKeyMixin, models.Model):
    """
    A post in the private feed.

    Posts are never edited; their author may delete them.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="private_posts",
    )
    text = models.TextField(blank=True, default="")
    timestamp = models.DateTimeField(default=timezone.now)

    attachment_type = models.CharField(
        max_length=10,
        choices=AttachmentType.choices,
        blank=True,
        default="",
    )
    attachment_url = models.CharField(max_length=500, blank=True, default="")
    attachment_name = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "private_space_post"
        ordering = ["timestamp", "id"]

    def __str__(self) -> str:
        return f"{self.user_id} @ {self.timestamp:%Y-%m-%d %H:%M}"

    @property
    def attachment(self) -> dict | None:
        if not self.attachment_url:
            return None
        return {
            "type": self.attachment_type,
            "url": self.attachment_url,
            "name": self.attachment_name,
        }
