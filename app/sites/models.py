"""
Construction sites (tenants) and their memberships.
"""

from django.conf import settings
from django.db import models

from core.models import TimestampedModel


class Site(TimestampedModel):
    """A construction site; posts, actions and ledger rows belong to one."""

    name = models.CharField(max_length=255)
    join_code = models.CharField(max_length=20, unique=True)
    is_active = models.BooleanField(default=True)

    def __str__(self):
        return self.name


class SiteMembership(models.Model):
    """
    A user's membership of a site. The membership role is what makes a
    user a SITE_ADMIN for that site; global roles are kept on the user.
    """

    class Role(models.TextChoices):
        WORKER = "WORKER", "Worker"
        SITE_ADMIN = "SITE_ADMIN", "Site Admin"

    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        ACTIVE = "ACTIVE", "Active"
        LEFT = "LEFT", "Left"
        REMOVED = "REMOVED", "Removed"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="site_memberships",
    )
    site = models.ForeignKey(
        Site, on_delete=models.CASCADE, related_name="memberships"
    )
    role = models.CharField(
        max_length=20, choices=Role.choices, default=Role.WORKER
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING
    )
    joined_at = models.DateTimeField(auto_now_add=True)
    left_at = models.DateTimeField(blank=True, null=True)
    left_reason = models.TextField(blank=True, default="")

    class Meta:
        unique_together = ("user", "site")
        indexes = [
            models.Index(
                fields=["site", "status"], name="membership_site_status_idx"
            )
        ]

    def __str__(self):
        return f"{self.user} @ {self.site} ({self.role}, {self.status})"
