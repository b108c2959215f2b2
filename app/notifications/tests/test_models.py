"""
Tests for the models of the notifications app.
"""

from django.test import TestCase
from django.contrib.auth import get_user_model

from notifications.models import Notification
from notifications.services import mark_read, notify

User = get_user_model()


class NotificationModelTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        """Set up data for testing notification models."""
        cls.user = User.objects.create_user(
            phone="01012120001", password="testpsw123"
        )
        cls.admin = User.objects.create_user(
            phone="01012120002", password="testpsw123"
        )

    def test_notify_defaults(self):
        """Test notify() queues an unread in-app notification."""
        notification = notify(
            recipient=self.user,
            entity_type=Notification.EntityType.POST,
            entity_id=42,
            event_type=Notification.EventType.POST_REJECTED,
            triggered_by=self.admin,
        )

        self.assertEqual(notification.method, Notification.Method.SYSTEM)
        self.assertEqual(notification.status, Notification.Status.QUEUED)
        self.assertFalse(notification.is_read)
        self.assertIsNone(notification.read_at)
        self.assertIsNone(notification.payload)
        self.assertEqual(str(notification), "POST_REJECTED for POST 42")

    def test_mark_read_sets_timestamp_once(self):
        notification = notify(
            recipient=self.user,
            entity_type=Notification.EntityType.ACTION,
            entity_id=7,
            event_type=Notification.EventType.ACTION_ASSIGNED,
        )
        mark_read(notification=notification)
        first_read_at = notification.read_at

        mark_read(notification=notification)
        notification.refresh_from_db()
        self.assertTrue(notification.is_read)
        self.assertEqual(notification.read_at, first_read_at)

    def test_trigger_user_deletion_keeps_notification(self):
        notification = notify(
            recipient=self.user,
            entity_type=Notification.EntityType.POST,
            entity_id=1,
            event_type=Notification.EventType.POST_APPROVED,
            triggered_by=self.admin,
        )
        self.admin.delete()
        notification.refresh_from_db()

        self.assertIsNone(notification.triggered_by)

    def test_recipient_deletion_removes_notifications(self):
        notify(
            recipient=self.user,
            entity_type=Notification.EntityType.POST,
            entity_id=1,
            event_type=Notification.EventType.CUSTOM,
            message="hello",
        )
        self.user.delete()

        self.assertFalse(Notification.objects.exists())
