from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import serializers

from messaging.models import Message
from orders.models import Order
from stores.models import Store


class MessageSerializer(serializers.ModelSerializer):
    store_name = serializers.CharField(source="store.name", read_only=True)
    sender_name = serializers.CharField(source="sender.full_name", read_only=True)
    receiver_name = serializers.CharField(source="receiver.full_name", read_only=True)
    order_number = serializers.CharField(source="order.order_number", read_only=True, default=None)

    class Meta:
        model = Message
        fields = [
            "id",
            "store",
            "store_name",
            "order",
            "order_number",
            "sender",
            "sender_name",
            "sender_role",
            "receiver",
            "receiver_name",
            "receiver_role",
            "message",
            "is_read",
            "created_at",
        ]
        read_only_fields = fields


class SendMessageSerializer(serializers.Serializer):
    store = serializers.PrimaryKeyRelatedField(queryset=Store.objects.all())
    order = serializers.PrimaryKeyRelatedField(
        queryset=Order.objects.all(), required=False, allow_null=True
    )
    message = serializers.CharField(max_length=5000)


class StoreReplySerializer(serializers.Serializer):
    receiver = serializers.PrimaryKeyRelatedField(queryset=get_user_model().objects.all())
    order = serializers.PrimaryKeyRelatedField(
        queryset=Order.objects.all(), required=False, allow_null=True
    )
    message = serializers.CharField(max_length=5000)
