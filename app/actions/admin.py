"""
Django admin and customizations for models of actions app.
"""

from django.contrib import admin

from .models import Action


@admin.register(Action)
class ActionAdmin(admin.ModelAdmin):
    list_display = (
        "post",
        "status",
        "assignee",
        "due_date",
        "completed_at",
        "created_by",
    )
    list_filter = ("due_date", "post__action_status")
    search_fields = ("completion_note", "assignee__phone")
    list_select_related = ("post", "assignee", "created_by")
