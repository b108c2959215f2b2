"""
Serializers for the notifications API.
"""

from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = [
            "id",
            "entity_type",
            "entity_id",
            "event_type",
            "message",
            "payload",
            "is_read",
            "read_at",
            "created_at",
        ]
        read_only_fields = fields
