from __future__ import annotations

from rest_framework import serializers

from cards.models import Card

EXPIRY_RE = r"^(0[1-9]|1[0-2])/\d{2}(\d{2})?$"


class CardSerializer(serializers.ModelSerializer):
    """
    Read shape: the number is only ever exposed as last4 / masked.
    Write shape: card_number (write-only) is encrypted by the service.
    cvv is accepted for form compatibility and discarded.
    """

    card_number = serializers.CharField(write_only=True, required=False)
    cvv = serializers.CharField(write_only=True, required=False, allow_blank=True)
    expiry_date = serializers.RegexField(
        EXPIRY_RE, error_messages={"invalid": "Expiry date must be MM/YY."}
    )
    masked_number = serializers.CharField(read_only=True)

    class Meta:
        model = Card
        fields = [
            "id",
            "card_type",
            "card_number",
            "cvv",
            "card_number_last4",
            "masked_number",
            "cardholder_name",
            "expiry_date",
            "billing_address",
            "city",
            "state",
            "zip_code",
            "country",
            "is_default",
            "added_date",
            "updated_at",
        ]
        read_only_fields = ["id", "card_number_last4", "masked_number", "is_default", "added_date", "updated_at"]

    def validate(self, attrs):
        attrs.pop("cvv", None)
        if self.instance is None and not attrs.get("card_number"):
            raise serializers.ValidationError({"card_number": "This field is required."})
        return attrs


class AdminCardSerializer(CardSerializer):
    user_id = serializers.UUIDField(source="user.id", read_only=True)
    user_email = serializers.EmailField(source="user.email", read_only=True)
    user_name = serializers.CharField(source="user.display_name", read_only=True)

    class Meta(CardSerializer.Meta):
        fields = CardSerializer.Meta.fields + ["user_id", "user_email", "user_name"]
