"""
Django admin and customizations for models of posts app.
"""

from django.contrib import admin

from .models import Post, Review


class ReviewInline(admin.TabularInline):
    model = Review
    extra = 0
    can_delete = False
    readonly_fields = (
        "admin",
        "action",
        "comment",
        "reason_code",
        "from_review_status",
        "to_review_status",
        "created_at",
    )

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = (
        "__str__",
        "site",
        "category",
        "review_status",
        "action_status",
        "is_urgent",
        "created_by",
        "created_at",
    )
    list_filter = ("review_status", "action_status", "category", "is_urgent")
    search_fields = ("content", "created_by__phone")
    # Status fields move only through the review workflow
    readonly_fields = ("review_status", "action_status", "is_urgent")
    inlines = [ReviewInline]


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = (
        "post",
        "action",
        "admin",
        "from_review_status",
        "to_review_status",
        "created_at",
    )
    list_filter = ("action",)
    search_fields = ("comment", "admin__phone")
