"""
Django admin and customizations for models of sites app.
"""

from django.contrib import admin

from .models import Site, SiteMembership


class SiteMembershipInline(admin.TabularInline):
    model = SiteMembership
    extra = 0
    fields = ("user", "role", "status", "left_at")


@admin.register(Site)
class SiteAdmin(admin.ModelAdmin):
    list_display = ("name", "join_code", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "join_code")
    inlines = [SiteMembershipInline]


@admin.register(SiteMembership)
class SiteMembershipAdmin(admin.ModelAdmin):
    list_display = ("user", "site", "role", "status", "joined_at")
    list_filter = ("role", "status", "site")
    search_fields = ("user__phone", "user__name", "site__name")
