"""
Serializers for the actions API.
"""

from datetime import date

from django.contrib.auth import get_user_model
from rest_framework import serializers

from posts.models import Post
from users.serializers import UserNestedSerializer
from .models import Action

# --- Re-usable Action Payload Serializers ---


class ActionReasonSerializer(serializers.Serializer):
    reason = serializers.CharField(min_length=5, max_length=1000)


class ActionCompletionSerializer(serializers.Serializer):
    completion_note = serializers.CharField(min_length=5, max_length=2000)


class ActionAssignSerializer(serializers.Serializer):
    """Payload to assign (or re-assign) the remedial action of a post."""

    post = serializers.PrimaryKeyRelatedField(queryset=Post.objects.all())
    assignee = serializers.PrimaryKeyRelatedField(
        queryset=get_user_model().objects.filter(is_active=True),
        required=False,
        allow_null=True,
        default=None,
    )
    due_date = serializers.DateField(
        required=False, allow_null=True, default=None
    )

    def validate_due_date(self, value):
        if value and value < date.today():
            raise serializers.ValidationError(
                "Due date cannot be in the past."
            )
        return value


# --- Core Serializers ---


class ActionListSerializer(serializers.ModelSerializer):
    """Serializer for list view, with minimal nested data."""

    status = serializers.CharField(read_only=True)
    assignee = UserNestedSerializer(read_only=True)

    class Meta:
        model = Action
        fields = [
            "id",
            "post",
            "status",
            "assignee",
            "due_date",
            "completed_at",
            "created_at",
        ]


class ActionDetailSerializer(ActionListSerializer):
    """Full detail serializer with computed and contextual fields."""

    created_by = UserNestedSerializer(read_only=True)
    is_overdue = serializers.BooleanField(read_only=True)
    available_transitions = serializers.SerializerMethodField()

    class Meta(ActionListSerializer.Meta):
        fields = ActionListSerializer.Meta.fields + [
            "created_by",
            "completion_note",
            "updated_at",
            "is_overdue",
            "available_transitions",
        ]

    def get_available_transitions(self, obj):
        # Read from context (populated by ViewSet)
        return self.context.get("available_transitions", [])
