"""
Filters for the points API.
"""

import django_filters

from .models import PointsLedger


class PointsLedgerFilter(django_filters.FilterSet):
    site = django_filters.NumberFilter(field_name="site_id")
    settle_month = django_filters.CharFilter()
    reason_code = django_filters.ChoiceFilter(
        choices=PointsLedger.ReasonCode.choices
    )

    class Meta:
        model = PointsLedger
        fields = ["site", "settle_month", "reason_code"]
