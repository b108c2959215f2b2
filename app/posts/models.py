"""
Data models for the posts app: safety reports and their review log.
"""

from django.conf import settings
from django.db import models

from core.models import TimestampedModel, AuthoredModel, SiteScopedModel
from .workflows import ReviewStatus, ActionStatus, ReviewAction


def _choices(enum_cls):
    return [
        (member.value, member.value.replace("_", " ").title())
        for member in enum_cls
    ]


REVIEW_STATUS_CHOICES = _choices(ReviewStatus)
ACTION_STATUS_CHOICES = _choices(ActionStatus)
REVIEW_ACTION_CHOICES = _choices(ReviewAction)


class Post(TimestampedModel, AuthoredModel, SiteScopedModel):
    """
    A worker-submitted safety observation. Review and remedial-action
    progress are tracked by review_status and action_status; both are only
    changed through the services, which consult posts.workflows.
    """

    class Category(models.TextChoices):
        HAZARD = "HAZARD", "Hazard"
        UNSAFE_BEHAVIOR = "UNSAFE_BEHAVIOR", "Unsafe Behavior"
        INCONVENIENCE = "INCONVENIENCE", "Inconvenience"
        SUGGESTION = "SUGGESTION", "Suggestion"
        BEST_PRACTICE = "BEST_PRACTICE", "Best Practice"

    class RiskLevel(models.TextChoices):
        HIGH = "HIGH", "High"
        MEDIUM = "MEDIUM", "Medium"
        LOW = "LOW", "Low"

    class Visibility(models.TextChoices):
        WORKER_PUBLIC = "WORKER_PUBLIC", "Visible to workers"
        ADMIN_ONLY = "ADMIN_ONLY", "Admins only"

    category = models.CharField(max_length=30, choices=Category.choices)
    hazard_type = models.CharField(max_length=100, blank=True, default="")
    risk_level = models.CharField(
        max_length=10, choices=RiskLevel.choices, blank=True, null=True
    )
    location_floor = models.CharField(max_length=50, blank=True, default="")
    location_zone = models.CharField(max_length=50, blank=True, default="")
    location_detail = models.CharField(max_length=255, blank=True, default="")
    content = models.TextField()
    visibility = models.CharField(
        max_length=20,
        choices=Visibility.choices,
        default=Visibility.WORKER_PUBLIC,
    )
    is_anonymous = models.BooleanField(default=False)

    review_status = models.CharField(
        max_length=20,
        choices=REVIEW_STATUS_CHOICES,
        default=ReviewStatus.RECEIVED.value,
    )
    action_status = models.CharField(
        max_length=20,
        choices=ACTION_STATUS_CHOICES,
        default=ActionStatus.NONE.value,
    )
    is_urgent = models.BooleanField(default=False)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["site", "review_status"],
                name="posts_site_review_status_idx",
            ),
            models.Index(
                fields=["site", "created_at"], name="posts_site_created_at_idx"
            ),
        ]

    def __str__(self):
        return self.content[:50]


class Review(models.Model):
    """Append-only log of admin review actions taken on a post."""

    post = models.ForeignKey(
        Post, on_delete=models.CASCADE, related_name="reviews"
    )
    admin = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="reviews_given",
    )
    action = models.CharField(max_length=20, choices=REVIEW_ACTION_CHOICES)
    comment = models.TextField(blank=True, default="")
    reason_code = models.CharField(max_length=50, blank=True, default="")
    from_review_status = models.CharField(
        max_length=20, choices=REVIEW_STATUS_CHOICES
    )
    to_review_status = models.CharField(
        max_length=20, choices=REVIEW_STATUS_CHOICES
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.action} on post {self.post_id}"
