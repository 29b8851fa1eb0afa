"""
Private space service layer.

Services:
    PrivateSpaceService: Membership, passcode unlock and the shared feed

Access Model:
    1. An administrator grants access to at most two users
       (manage.py grant_private_space <username>)
    2. A member exchanges the shared passcode for an unlock token
    3. Feed operations require the member's own, unexpired token

Usage:
    from private_space.services import PrivateSpaceService

    result = PrivateSpaceService.unlock(user, passcode)
    if result:
        token = result.data["token"]
        posts = PrivateSpaceService.list_posts(user, token).data
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings
from django.core import signing
from django.db import IntegrityError
from django.utils.crypto import constant_time_compare

from chat.constants import MESSAGE_CONFIG, AttachmentType
from core.services import BaseService, ServiceResult
from private_space.models import PrivateSpaceMember, PrivateSpacePost

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from authentication.models import User

MAX_MEMBERS = 2

UNLOCK_TOKEN_SALT = "private_space.unlock"


class PrivateSpaceService(BaseService):
    """
    Service for the two-person private feed.

    Error codes:
        ALREADY_MEMBER: User already has access
        SPACE_FULL: Two members already
        PERMISSION_DENIED: User is not a member
        WRONG_PASSCODE: Passcode mismatch
        LOCKED: Missing, invalid, expired or foreign unlock token
        EMPTY_CONTENT: Neither text nor attachment
        POST_NOT_FOUND: No post with this id
        NOT_AUTHOR: Only the author may delete a post
    """

    @staticmethod
    def is_member(user: User) -> bool:
        return PrivateSpaceMember.objects.filter(user=user).exists()

    @classmethod
    def grant_access(cls, user: User) -> ServiceResult[PrivateSpaceMember]:
        """Add ``user`` as a member, unless two members already exist."""
        if cls.is_member(user):
            return ServiceResult.failure(
                "Cet utilisateur a déjà accès à l'espace privé.",
                error_code="ALREADY_MEMBER",
            )

        with cls.atomic():
            if PrivateSpaceMember.objects.count() >= MAX_MEMBERS:
                return ServiceResult.failure(
                    "L'espace privé a déjà deux membres.",
                    error_code="SPACE_FULL",
                )
            try:
                member = PrivateSpaceMember.objects.create(user=user)
            except IntegrityError:
                return ServiceResult.failure(
                    "Cet utilisateur a déjà accès à l'espace privé.",
                    error_code="ALREADY_MEMBER",
                )

        cls.get_logger().info(f"Private space access granted to {user.username}")
        return ServiceResult.success(member, "Accès accordé.")

    @classmethod
    def unlock(cls, user: User, passcode: str) -> ServiceResult[dict]:
        """
        Exchange the shared passcode for an unlock token.

        Returns:
            ServiceResult with {"token": ..., "expires_in": seconds}
        """
        if not cls.is_member(user):
            return ServiceResult.failure(
                "Vous n'avez pas accès à l'espace privé.",
                error_code="PERMISSION_DENIED",
            )
        if not constant_time_compare(passcode or "", settings.PRIVATE_SPACE_PASSCODE):
            cls.get_logger().warning(f"Wrong private space passcode from {user.username}")
            return ServiceResult.failure(
                "Mot de passe incorrect.",
                error_code="WRONG_PASSCODE",
            )

        token = signing.TimestampSigner(salt=UNLOCK_TOKEN_SALT).sign(str(user.pk))
        return ServiceResult.success(
            {"token": token, "expires_in": settings.PRIVATE_SPACE_UNLOCK_MAX_AGE},
            "Espace privé déverrouillé.",
        )

    @classmethod
    def check_unlocked(cls, user: User, token: str | None) -> ServiceResult[None]:
        """Check ``token`` is a live unlock token issued to member ``user``."""
        if not cls.is_member(user):
            return ServiceResult.failure(
                "Vous n'avez pas accès à l'espace privé.",
                error_code="PERMISSION_DENIED",
            )

        locked = ServiceResult.failure(
            "L'espace privé est verrouillé.",
            error_code="LOCKED",
        )
        if not token:
            return locked
        try:
            owner = signing.TimestampSigner(salt=UNLOCK_TOKEN_SALT).unsign(
                token, max_age=settings.PRIVATE_SPACE_UNLOCK_MAX_AGE
            )
        except signing.BadSignature:
            # SignatureExpired is a BadSignature
            return locked
        if owner != str(user.pk):
            return locked
        return ServiceResult.success(None)

    @classmethod
    def list_posts(cls, user: User, token: str | None) -> ServiceResult[QuerySet]:
        """All posts, oldest first."""
        unlocked = cls.check_unlocked(user, token)
        if not unlocked:
            return unlocked
        return ServiceResult.success(
            PrivateSpacePost.objects.select_related("user").order_by("timestamp", "id")
        )

    @classmethod
    def add_post(
        cls,
        user: User,
        token: str | None,
        text: str = "",
        attachment: dict | None = None,
    ) -> ServiceResult[PrivateSpacePost]:
        """
        Publish a post. Text or attachment required.

        Args:
            attachment: {"type", "url", "name"} from the attachment upload endpoint
        """
        unlocked = cls.check_unlocked(user, token)
        if not unlocked:
            return unlocked

        text = text or ""
        attachment = attachment or {}
        if not text.strip() and not attachment.get("url"):
            return ServiceResult.failure(
                "Le message ne peut pas être vide.",
                error_code="EMPTY_CONTENT",
            )
        if len(text) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            return ServiceResult.failure(
                "Le message est trop long.",
                error_code="VALIDATION_ERROR",
                errors={"text": [f"{MESSAGE_CONFIG.MAX_CONTENT_LENGTH} caractères maximum."]},
            )

        post = PrivateSpacePost.objects.create(
            user=user,
            text=text,
            attachment_type=attachment.get("type", AttachmentType.FILE) if attachment.get("url") else "",
            attachment_url=attachment.get("url", ""),
            attachment_name=attachment.get("name", ""),
        )
        return ServiceResult.success(post, "Publication ajoutée.")

    @classmethod
    def delete_post(cls, user: User, token: str | None, post_id) -> ServiceResult[None]:
        unlocked = cls.check_unlocked(user, token)
        if not unlocked:
            return unlocked

        post = PrivateSpacePost.objects.filter(pk=post_id).first()
        if post is None:
            return ServiceResult.failure("Publication non trouvée.", error_code="POST_NOT_FOUND")
        if post.user_id != user.pk:
            return ServiceResult.failure(
                "Vous n'êtes pas autorisé à supprimer cette publication.",
                error_code="NOT_AUTHOR",
            )

        post.delete()
        return ServiceResult.success(None, "Publication supprimée.")
