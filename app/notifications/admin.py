"""
Django admin and customizations for models of notifications app.
"""

from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """Read-mostly view of the notification queue."""

    list_display = (
        "recipient",
        "event_type",
        "entity_type",
        "entity_id",
        "method",
        "status",
        "is_read",
        "created_at",
    )
    list_filter = ("status", "method", "event_type", "is_read")
    list_select_related = ("recipient",)
    search_fields = ("recipient__phone", "message")
    date_hierarchy = "created_at"
    readonly_fields = ("created_at", "sent_at", "read_at")
