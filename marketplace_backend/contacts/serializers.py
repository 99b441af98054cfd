from __future__ import annotations

from rest_framework import serializers

from contacts.models import ContactInfo, ContactMessage


class ContactSubmitSerializer(serializers.ModelSerializer):
    name = serializers.CharField(min_length=2, max_length=200)
    email = serializers.EmailField()
    subject = serializers.CharField(min_length=5, max_length=255)
    message = serializers.CharField(min_length=10)

    class Meta:
        model = ContactMessage
        fields = ["id", "name", "email", "phone", "company", "subject", "message", "created_at"]
        read_only_fields = ["id", "created_at"]


class AdminContactMessageSerializer(serializers.ModelSerializer):
    resolved_by_email = serializers.EmailField(source="resolved_by.email", read_only=True, default=None)

    class Meta:
        model = ContactMessage
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "company",
            "subject",
            "message",
            "status",
            "notes",
            "resolved_at",
            "resolved_by",
            "resolved_by_email",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "name",
            "email",
            "phone",
            "company",
            "subject",
            "message",
            "resolved_at",
            "resolved_by",
            "resolved_by_email",
            "created_at",
            "updated_at",
        ]

    def update(self, instance, validated_data):
        status = validated_data.pop("status", None)
        if status is not None and status != instance.status:
            instance.apply_status(status, actor=self.context["request"].user)
        return super().update(instance, validated_data)


class BulkStatusSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    status = serializers.ChoiceField(choices=ContactMessage.STATUS_CHOICES)


class BulkIdsSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)


class ContactInfoSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContactInfo
        fields = [
            "address",
            "phone",
            "email",
            "whatsapp",
            "paypal",
            "qr_paypal",
            "wallet_trc20_code",
            "usdt_wallet_trc20",
            "wallet_erc20_code",
            "usdt_wallet_erc20",
            "btc_wallet_code",
            "btc_wallet",
            "eth_wallet_code",
            "eth_wallet",
            "updated_at",
        ]
        read_only_fields = ["updated_at"]
