"""
Django admin and customizations for models of points app.
"""

from django.contrib import admin

from .models import PointsLedger


@admin.register(PointsLedger)
class PointsLedgerAdmin(admin.ModelAdmin):
    list_display = (
        "user",
        "site",
        "amount",
        "reason_code",
        "settle_month",
        "occurred_at",
    )
    list_filter = ("reason_code", "settle_month", "site")
    search_fields = ("user__phone", "user__name", "reason_text")
