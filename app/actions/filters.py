"""
Filters for the actions API.
"""

import django_filters
from django.utils import timezone

from posts.models import ACTION_STATUS_CHOICES
from posts.workflows import ActionStatus
from .models import Action


class ActionFilter(django_filters.FilterSet):
    post = django_filters.NumberFilter(field_name="post_id")
    site = django_filters.NumberFilter(field_name="post__site_id")
    status = django_filters.MultipleChoiceFilter(
        field_name="post__action_status", choices=ACTION_STATUS_CHOICES
    )
    assignee = django_filters.CharFilter(method="filter_by_assignee")
    due_before = django_filters.DateFilter(
        field_name="due_date", lookup_expr="lte"
    )
    is_overdue = django_filters.BooleanFilter(method="filter_by_is_overdue")

    class Meta:
        model = Action
        fields = ["post", "site", "status", "assignee", "is_overdue"]

    def filter_by_assignee(self, queryset, name, value):
        if value == "me":
            return queryset.filter(assignee=self.request.user)
        if not value.isdigit():
            return queryset.none()
        return queryset.filter(assignee_id=value)

    def filter_by_is_overdue(self, queryset, name, value):
        if value:
            return queryset.exclude(
                post__action_status=ActionStatus.DONE.value
            ).filter(due_date__lt=timezone.localdate())
        return queryset
