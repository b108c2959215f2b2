"""
Data models for the points app.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import SiteScopedModel


class PointsLedger(SiteScopedModel):
    """
    Append-only ledger of points earned (or clawed back) by a user at a site.
    Balances are always derived by summing rows; corrections are new rows
    pointing at the row they correct via ref_ledger.
    """

    class ReasonCode(models.TextChoices):
        POST_APPROVED = "POST_APPROVED", "Post approved"
        MANUAL = "MANUAL", "Manual adjustment"
        REVOCATION = "REVOCATION", "Revocation"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="points_entries",
    )
    post = models.ForeignKey(
        "posts.Post",
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="points_entries",
    )
    ref_ledger = models.ForeignKey(
        "self", on_delete=models.SET_NULL, blank=True, null=True
    )
    amount = models.IntegerField()
    reason_code = models.CharField(max_length=30, choices=ReasonCode.choices)
    reason_text = models.TextField(blank=True, default="")
    admin = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="points_awarded",
    )
    settle_month = models.CharField(max_length=7)  # YYYY-MM
    occurred_at = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-occurred_at", "-id"]
        verbose_name = "Points Ledger Entry"
        verbose_name_plural = "Points Ledger"
        indexes = [
            models.Index(
                fields=["user", "site", "settle_month"],
                name="points_user_site_month_idx",
            ),
            models.Index(
                fields=["site", "settle_month"], name="points_site_month_idx"
            ),
        ]

    def __str__(self):
        return f"{self.amount:+d} {self.reason_code} ({self.settle_month})"
