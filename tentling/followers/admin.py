from django.contrib import admin

from .models import Follower, NotificationSubscription


class NotificationSubscriptionInline(admin.TabularInline):
    model = NotificationSubscription
    extra = 0


@admin.register(Follower)
class FollowerAdmin(admin.ModelAdmin):
    inlines = [
        NotificationSubscriptionInline,
    ]
    list_display = ["entity", "type", "mac_key_id", "created"]
    list_filter = ["type"]
    search_fields = ["entity", "mac_key_id"]
    readonly_fields = [
        "entity",
        "profile",
        "mac_key_id",
        "mac_key",
        "mac_algorithm",
        "mac_timestamp_delta",
        "created",
        "modified",
    ]

    def has_add_permission(self, request):
        """Followers are only created by negotiation with the follower’s server."""
        return False
