"""
Application layer - queues notifications for other apps.
"""

import logging

from django.utils import timezone

from .models import Notification

logger = logging.getLogger(__name__)


def notify(
    *,
    recipient,
    entity_type: str,
    entity_id: int,
    event_type: str,
    message: str = "",
    triggered_by=None,
    payload=None,
) -> Notification:
    """Queues an in-app notification for a single recipient."""
    notification = Notification.objects.create(
        recipient=recipient,
        entity_type=entity_type,
        entity_id=entity_id,
        event_type=event_type,
        message=message,
        triggered_by=triggered_by,
        payload=payload,
    )
    logger.debug(
        "Queued %s notification for user %s (%s %s)",
        event_type,
        recipient.pk,
        entity_type,
        entity_id,
    )
    return notification


def mark_read(*, notification: Notification) -> Notification:
    if not notification.is_read:
        notification.is_read = True
        notification.read_at = timezone.now()
        notification.save(update_fields=["is_read", "read_at"])
    return notification
