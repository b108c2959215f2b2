"""
Serializers for the user API and for users embedded in other APIs.
"""

from django.contrib.auth import authenticate, get_user_model
from rest_framework import serializers


class UserNestedSerializer(serializers.ModelSerializer):
    """Minimal, privacy-preserving representation of a user."""

    name = serializers.CharField(source="name_masked", read_only=True)

    class Meta:
        model = get_user_model()
        fields = ["id", "name", "role"]
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """Serializer for registering and updating the user object."""

    class Meta:
        model = get_user_model()
        fields = ["id", "phone", "password", "name", "role"]
        read_only_fields = ["id", "role"]
        extra_kwargs = {"password": {"write_only": True, "min_length": 5}}

    def validate_phone(self, value):
        return get_user_model().objects.normalize_phone(value)

    def create(self, validated_data):
        """Create and return a user with encrypted password."""
        return get_user_model().objects.create_user(**validated_data)

    def update(self, instance, validated_data):
        """Update and return user; the phone number is not editable."""
        validated_data.pop("phone", None)
        password = validated_data.pop("password", None)
        user = super().update(instance, validated_data)

        if password:
            user.set_password(password)
            user.save()

        return user


class AuthTokenSerializer(serializers.Serializer):
    """Serializer for the user auth token."""

    phone = serializers.CharField()
    password = serializers.CharField(
        style={"input_type": "password"}, trim_whitespace=False
    )

    def validate(self, attrs):
        """Validate and authenticate the user."""
        phone = get_user_model().objects.normalize_phone(attrs.get("phone"))
        user = authenticate(
            request=self.context.get("request"),
            username=phone,
            password=attrs.get("password"),
        )
        if not user:
            raise serializers.ValidationError(
                "Unable to authenticate with provided credentials.",
                code="authorization",
            )

        attrs["user"] = user
        return attrs
