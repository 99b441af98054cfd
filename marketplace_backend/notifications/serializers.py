from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import serializers

from notifications.models import Notification

User = get_user_model()


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ["id", "type", "title", "message", "is_read", "data", "created_at"]
        read_only_fields = ["id", "type", "title", "message", "data", "created_at"]


class AdminNotificationSerializer(serializers.ModelSerializer):
    user_email = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "user",
            "user_email",
            "type",
            "title",
            "message",
            "is_read",
            "data",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "user_email", "created_at", "updated_at"]


class AdminNotificationCreateSerializer(serializers.Serializer):
    """
    Either a single recipient (user) or broadcast=true.
    """

    user = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(), required=False, allow_null=True
    )
    broadcast = serializers.BooleanField(default=False)
    type = serializers.ChoiceField(
        choices=Notification.TYPE_CHOICES, default=Notification.TYPE_SYSTEM
    )
    title = serializers.CharField(max_length=200)
    message = serializers.CharField()
    data = serializers.JSONField(required=False, default=dict)

    def validate(self, attrs):
        if not attrs.get("broadcast") and not attrs.get("user"):
            raise serializers.ValidationError(
                {"user": "Provide a recipient or set broadcast=true."}
            )
        return attrs


class BulkIdsSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
