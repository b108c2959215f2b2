"""
Serializers for the posts API.
"""

from rest_framework import serializers

from sites.models import Site
from users.serializers import UserNestedSerializer
from .models import Post, Review

# --- Action Payload Serializers ---


class ReviewActionSerializer(serializers.Serializer):
    # Any string is accepted; the workflow reports unknown actions
    action = serializers.CharField(max_length=30)
    comment = serializers.CharField(
        max_length=2000, required=False, allow_blank=True, default=""
    )
    reason_code = serializers.CharField(
        max_length=50, required=False, allow_blank=True, default=""
    )



class ReviewSerializer(serializers.ModelSerializer):
    """Serializer for review log entries."""

    admin = UserNestedSerializer(read_only=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "post",
            "admin",
            "action",
            "comment",
            "reason_code",
            "from_review_status",
            "to_review_status",
            "created_at",
        ]
        read_only_fields = fields


class ReviewResultSerializer(serializers.Serializer):
    """Response body of the review action."""

    review = ReviewSerializer()
    post_status = serializers.CharField()
    action_status = serializers.CharField()
    points_awarded = serializers.IntegerField()


# --- Core Serializers ---


class PostListSerializer(serializers.ModelSerializer):
    """Serializer for list view, with minimal nested data."""

    created_by = serializers.SerializerMethodField()

    class Meta:
        model = Post
        fields = [
            "id",
            "site",
            "category",
            "risk_level",
            "review_status",
            "action_status",
            "is_urgent",
            "is_anonymous",
            "created_by",
            "created_at",
        ]

    def get_created_by(self, obj):
        if obj.is_anonymous:
            return None
        return UserNestedSerializer(obj.created_by).data


class PostDetailSerializer(PostListSerializer):
    """Full detail serializer with contextual fields."""

    available_actions = serializers.SerializerMethodField()
    can_resubmit = serializers.SerializerMethodField()

    class Meta(PostListSerializer.Meta):
        fields = PostListSerializer.Meta.fields + [
            "hazard_type",
            "location_floor",
            "location_zone",
            "location_detail",
            "content",
            "visibility",
            "updated_at",
            "available_actions",
            "can_resubmit",
        ]

    def get_available_actions(self, obj):
        # Read from context (populated by ViewSet)
        return self.context.get("available_actions", [])

    def get_can_resubmit(self, obj):
        return self.context.get("can_resubmit", False)


class PostCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating a new post."""

    site = serializers.PrimaryKeyRelatedField(
        queryset=Site.objects.filter(is_active=True)
    )

    class Meta:
        model = Post
        fields = [
            "site",
            "category",
            "hazard_type",
            "risk_level",
            "location_floor",
            "location_zone",
            "location_detail",
            "content",
            "visibility",
            "is_anonymous",
        ]

    def validate_content(self, value):
        if not value.strip():
            raise serializers.ValidationError("Content cannot be blank.")
        return value


class PostResubmitSerializer(serializers.ModelSerializer):
    """Fields the author may change when resubmitting."""

    class Meta:
        model = Post
        fields = [
            "category",
            "hazard_type",
            "risk_level",
            "location_floor",
            "location_zone",
            "location_detail",
            "content",
        ]
        extra_kwargs = {name: {"required": False} for name in fields}
