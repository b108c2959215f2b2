"""
Django admin customization for custom user model.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from sites.models import SiteMembership
from users.models import User


class SiteMembershipInline(admin.TabularInline):
    """The sites a user belongs to, edited from the user page."""

    model = SiteMembership
    fk_name = "user"
    extra = 0
    fields = ("site", "role", "status", "left_at", "left_reason")


class UserAdmin(BaseUserAdmin):
    """Define the admin pages for users."""

    ordering = ["id"]
    list_display = ["phone", "name", "role", "is_active", "date_joined"]
    list_filter = ["role", "is_active", "is_staff"]
    search_fields = ["phone", "name"]
    inlines = [SiteMembershipInline]

    fieldsets = (
        (None, {"fields": ("phone", "password")}),
        (_("Profile"), {"fields": ("name", "role")}),
        (
            _("Access"),
            {"fields": ("is_active", "is_staff", "is_superuser", "groups")},
        ),
        (_("Activity"), {"fields": ("last_login", "date_joined")}),
    )
    readonly_fields = ["last_login", "date_joined"]
    # Phone and password are enough to log in; the rest can follow
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("phone", "password1", "password2", "name", "role"),
            },
        ),
    )


admin.site.register(User, UserAdmin)
