from django.contrib import admin

from ..credentials import issue_mac_credentials
from .models import App


@admin.register(App)
class AppAdmin(admin.ModelAdmin):
    list_display = ["name", "public_id", "url", "created"]
    search_fields = ["name", "public_id", "url"]
    readonly_fields = ["public_id", "mac_key_id", "mac_key", "mac_algorithm", "created", "modified"]

    def save_model(self, request, obj, form, change):
        """New apps need credentials."""
        if not change and not obj.mac_key_id:
            obj.mac_key_id, obj.mac_key, obj.mac_algorithm = issue_mac_credentials()
        super().save_model(request, obj, form, change)
