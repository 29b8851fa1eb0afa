"""
Friend graph services.

This module provides FriendService: sending, accepting, rejecting and
cancelling friend requests, and listing friends and pending requests.

Related files:
    - models.py: Friendship, FriendRequest
    - chat/services.py: direct chats are addressed by friends' usernames

Error codes:
    - USER_NOT_FOUND: Target username does not exist
    - SELF_REQUEST: A user cannot befriend themselves
    - REQUEST_EXISTS: A pending request already exists (either direction)
    - ALREADY_FRIENDS: The two users are already friends
    - REQUEST_NOT_FOUND: No matching pending request
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import IntegrityError
from django.db.models import Q
from django.utils import timezone

from core.services import BaseService, ServiceResult
from friends.models import Friendship, FriendRequest

if TYPE_CHECKING:
    from authentication.models import User


def find_user(username: str):
    """Active user with this exact username, or None."""
    from authentication.models import User

    if not username:
        return None
    return User.objects.filter(username=username, is_active=True).first()


def are_friends(user: User, other: User) -> bool:
    return Friendship.objects.filter(user=user, friend=other).exists()


class FriendService(BaseService):
    """
    Friend request lifecycle.

    Usage:
        from friends.services import FriendService

        FriendService.send_request(alice, "bob")
        FriendService.accept_request(bob, "alice")
        FriendService.list_friends(alice)
    """

    @classmethod
    def send_request(cls, user: User, username: str) -> ServiceResult[FriendRequest]:
        """
        Ask ``username`` to become a friend.

        Error codes:
            - USER_NOT_FOUND, SELF_REQUEST, REQUEST_EXISTS, ALREADY_FRIENDS
        """
        target = find_user(username)
        if target is None:
            return ServiceResult.failure("Utilisateur non trouvé", error_code="USER_NOT_FOUND")
        if target.pk == user.pk:
            return ServiceResult.failure(
                "Vous ne pouvez pas vous ajouter vous-même.",
                error_code="SELF_REQUEST",
            )

        pending = FriendRequest.objects.filter(
            Q(sender=user, receiver=target) | Q(sender=target, receiver=user)
        )
        if pending.exists():
            return ServiceResult.failure(
                "Une demande d'ami existe déjà.",
                error_code="REQUEST_EXISTS",
            )
        if are_friends(user, target):
            return ServiceResult.failure("Vous êtes déjà amis.", error_code="ALREADY_FRIENDS")

        try:
            friend_request = FriendRequest.objects.create(sender=user, receiver=target)
        except IntegrityError:
            return ServiceResult.failure(
                "Une demande d'ami existe déjà.",
                error_code="REQUEST_EXISTS",
            )

        cls.get_logger().info(f"Friend request {user.username} -> {target.username}")
        return ServiceResult.success(friend_request, "Demande d'ami envoyée.")

    @classmethod
    def accept_request(cls, user: User, username: str) -> ServiceResult[Friendship]:
        """
        Accept the pending request sent by ``username``.

        The request is deleted and both friendship rows are inserted in one
        transaction.

        Returns:
            ServiceResult with the new Friendship row owned by ``user``
            (``friend`` is the requester, ``added_at`` the acceptance time)

        Error codes:
            - USER_NOT_FOUND, REQUEST_NOT_FOUND
        """
        requester = find_user(username)
        if requester is None:
            return ServiceResult.failure("Utilisateur non trouvé", error_code="USER_NOT_FOUND")

        added_at = timezone.now()
        with cls.atomic():
            deleted, _ = FriendRequest.objects.filter(sender=requester, receiver=user).delete()
            if not deleted:
                return ServiceResult.failure(
                    "Aucune demande d'ami trouvée.",
                    error_code="REQUEST_NOT_FOUND",
                )
            friendship, _ = Friendship.objects.get_or_create(
                user=user, friend=requester, defaults={"added_at": added_at}
            )
            Friendship.objects.get_or_create(
                user=requester, friend=user, defaults={"added_at": friendship.added_at}
            )

        cls.get_logger().info(f"Friendship created: {user.username} <-> {requester.username}")
        return ServiceResult.success(friendship, "Demande d'ami acceptée.")

    @classmethod
    def reject_request(cls, user: User, username: str) -> ServiceResult[None]:
        """
        Reject the pending request sent by ``username``.

        Error codes:
            - USER_NOT_FOUND, REQUEST_NOT_FOUND
        """
        requester = find_user(username)
        if requester is None:
            return ServiceResult.failure("Utilisateur non trouvé", error_code="USER_NOT_FOUND")

        deleted, _ = FriendRequest.objects.filter(sender=requester, receiver=user).delete()
        if not deleted:
            return ServiceResult.failure(
                "Aucune demande d'ami trouvée.",
                error_code="REQUEST_NOT_FOUND",
            )
        return ServiceResult.success(None, "Demande d'ami rejetée.")

    @classmethod
    def cancel_request(cls, user: User, username: str) -> ServiceResult[None]:
        """
        Withdraw a request ``user`` sent to ``username``.

        Error codes:
            - USER_NOT_FOUND, REQUEST_NOT_FOUND
        """
        target = find_user(username)
        if target is None:
            return ServiceResult.failure("Utilisateur non trouvé", error_code="USER_NOT_FOUND")

        deleted, _ = FriendRequest.objects.filter(sender=user, receiver=target).delete()
        if not deleted:
            return ServiceResult.failure(
                "Aucune demande d'ami trouvée.",
                error_code="REQUEST_NOT_FOUND",
            )
        return ServiceResult.success(None, "Demande d'ami annulée.")

    @staticmethod
    def list_friends(user: User):
        """Friendship rows owned by ``user``, oldest first, friend preloaded."""
        return (
            Friendship.objects.filter(user=user, friend__is_active=True)
            .select_related("friend")
            .order_by("added_at", "friend__username")
        )

    @staticmethod
    def incoming_requests(user: User):
        return (
            FriendRequest.objects.filter(receiver=user)
            .select_related("sender")
            .order_by("created_at")
        )

    @staticmethod
    def outgoing_requests(user: User):
        return (
            FriendRequest.objects.filter(sender=user)
            .select_related("receiver")
            .order_by("created_at")
        )
