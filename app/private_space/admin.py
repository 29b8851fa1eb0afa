from django.contrib import admin

from private_space.models import PrivateSpaceMember, PrivateSpacePost


@admin.register(PrivateSpaceMember)
class PrivateSpaceMemberAdmin(admin.ModelAdmin):
    list_display = ("user", "added_at")
    raw_id_fields = ("user",)

    def has_add_permission(self, request):
        # Use the grant_private_space command, which enforces the limit
        return False


@admin.register(PrivateSpacePost)
class PrivateSpacePostAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "timestamp", "attachment_type")
    list_filter = ("attachment_type",)
    raw_id_fields = ("user",)
    ordering = ("-timestamp",)
