"""
Data models for the notifications app.
Unified - used by all apps (posts, actions) to queue in-app notifications.
Delivery (push, SMS) is handled outside this service.
"""

from django.db import models
from django.conf import settings


# To prevent circular dependencies - No direct import of other apps' models


class Notification(models.Model):
    """A queued notification for a single recipient."""

    class EntityType(models.TextChoices):
        POST = "POST", "Post"
        ACTION = "ACTION", "Action"

    class EventType(models.TextChoices):
        POST_APPROVED = "POST_APPROVED", "Post Approved"
        POST_REJECTED = "POST_REJECTED", "Post Rejected"
        POST_NEED_INFO = "POST_NEED_INFO", "More Information Requested"
        ACTION_ASSIGNED = "ACTION_ASSIGNED", "Action Assigned"
        ACTION_REOPENED = "ACTION_REOPENED", "Action Reopened"
        CUSTOM = "CUSTOM", "Custom"

    class Method(models.TextChoices):
        SYSTEM = "SYSTEM", "System (in-app)"
        PUSH = "PUSH", "Web Push"
        SMS = "SMS", "SMS"

    class Status(models.TextChoices):
        QUEUED = "queued", "Queued"
        SENT = "sent", "Sent"
        FAILED = "failed", "Failed"
        CANCELED = "canceled", "Canceled"

    # Polymorphic link to the source entity (e.g., a Post)
    entity_type = models.CharField(max_length=30, choices=EntityType.choices)
    entity_id = models.IntegerField()

    # What triggered this?
    event_type = models.CharField(max_length=50, choices=EventType.choices)
    triggered_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,  # User who caused it might be deleted
        null=True,
        blank=True,
        related_name="triggered_notifications",
    )

    # Who is this for?
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )

    message = models.TextField(blank=True, default="")
    payload = models.JSONField(blank=True, null=True)  # Extra context
    method = models.CharField(
        max_length=30, choices=Method.choices, default=Method.SYSTEM
    )

    # State
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.QUEUED
    )
    created_at = models.DateTimeField(auto_now_add=True)
    sent_at = models.DateTimeField(blank=True, null=True)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.event_type} for {self.entity_type} {self.entity_id}"
