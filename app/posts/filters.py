"""
Filters for the posts API.
"""

import django_filters
from django.db.models import Q

from .models import Post, REVIEW_STATUS_CHOICES, ACTION_STATUS_CHOICES


class PostFilter(django_filters.FilterSet):
    site = django_filters.NumberFilter(field_name="site_id")
    review_status = django_filters.MultipleChoiceFilter(
        choices=REVIEW_STATUS_CHOICES
    )
    action_status = django_filters.MultipleChoiceFilter(
        choices=ACTION_STATUS_CHOICES
    )
    category = django_filters.ChoiceFilter(choices=Post.Category.choices)
    is_urgent = django_filters.BooleanFilter()
    created_by = django_filters.CharFilter(method="filter_by_created_by")
    created_after = django_filters.DateFilter(
        field_name="created_at", lookup_expr="date__gte"
    )
    created_before = django_filters.DateFilter(
        field_name="created_at", lookup_expr="date__lte"
    )

    search = django_filters.CharFilter(
        field_name="content", lookup_expr="icontains"
    )

    ordering = django_filters.OrderingFilter(
        fields=(
            ("created_at", "created_at"),
            ("updated_at", "updated_at"),
        )
    )

    class Meta:
        model = Post
        fields = [
            "site",
            "review_status",
            "action_status",
            "category",
            "is_urgent",
            "created_by",
            "search",
        ]

    def filter_by_created_by(self, queryset, name, value):
        if value == "me":
            return queryset.filter(created_by=self.request.user)
        if not value.isdigit():
            return queryset.none()
        # Anonymous posts only match their own author
        return queryset.filter(created_by_id=value).exclude(
            Q(is_anonymous=True) & ~Q(created_by=self.request.user)
        )
