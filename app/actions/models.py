"""
Data models for the actions app.
"""

from django.db import models
from django.conf import settings
from django.utils import timezone

from core.models import TimestampedModel, AuthoredModel
from posts.workflows import ActionStatus


class Action(TimestampedModel, AuthoredModel):
    """
    The remedial action tracked against a post: who should fix the reported
    hazard and by when. A post owns at most one action; the lifecycle
    status lives on the post (Post.action_status) so that review actions
    and action transitions update the same field.
    """

    post = models.OneToOneField(
        "posts.Post", on_delete=models.CASCADE, related_name="action"
    )
    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="assigned_actions",
    )
    due_date = models.DateField(blank=True, null=True)
    completed_at = models.DateTimeField(blank=True, null=True)

    # Unified log for completion notes and reopen reasons
    completion_note = models.TextField(blank=True, default="")

    def __str__(self):
        return f"Action for post {self.post_id}"

    @property
    def status(self):
        return self.post.action_status

    @property
    def is_overdue(self):
        if not self.due_date or self.status == ActionStatus.DONE.value:
            return False
        return self.due_date < timezone.localdate()
