from django.contrib import admin

from friends.models import Friendship, FriendRequest


@admin.register(Friendship)
class FriendshipAdmin(admin.ModelAdmin):
    list_display = ("user", "friend", "added_at")
    search_fields = ("user__username", "friend__username")
    raw_id_fields = ("user", "friend")


@admin.register(FriendRequest)
class FriendRequestAdmin(admin.ModelAdmin):
    list_display = ("sender", "receiver", "created_at")
    search_fields = ("sender__username", "receiver__username")
    raw_id_fields = ("sender", "receiver")
