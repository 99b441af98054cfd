# wallets/serializers.py

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from wallets.models import BalanceEntry, PayoutWallet, Recharge, TransactionStatus, Withdrawal


class BalanceEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = BalanceEntry
        fields = [
            "id",
            "direction",
            "amount",
            "balance_after",
            "reason",
            "reference",
            "memo",
            "created_at",
        ]
        read_only_fields = fields


# ---------------- PAYOUT WALLETS ----------------
class PayoutWalletSerializer(serializers.ModelSerializer):
    class Meta:
        model = PayoutWallet
        fields = [
            "id",
            "name",
            "type",
            "address",
            "currency",
            "is_default",
            "account_holder",
            "account_number",
            "bank_name",
            "routing_number",
            "routing_number_type",
            "bank_address",
            "country",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate(self, attrs):
        wallet_type = attrs.get("type") or getattr(self.instance, "type", None)

        def _value(field):
            if field in attrs:
                return (attrs.get(field) or "").strip()
            return (getattr(self.instance, field, "") or "").strip()

        if wallet_type == PayoutWallet.TYPE_BANK_ACCOUNT:
            missing = [f for f in ("account_holder", "account_number", "bank_name") if not _value(f)]
            if missing:
                raise serializers.ValidationError({f: "Required for bank accounts." for f in missing})
        elif not _value("address"):
            raise serializers.ValidationError({"address": "Wallet address is required."})
        return attrs


class AdminPayoutWalletSerializer(PayoutWalletSerializer):
    user_email = serializers.EmailField(source="user.email", read_only=True)

    class Meta(PayoutWalletSerializer.Meta):
        fields = ["user", "user_email", *PayoutWalletSerializer.Meta.fields]
        read_only_fields = ["user", "user_email", "id", "created_at", "updated_at"]


# ---------------- RECHARGES ----------------
class RechargeSerializer(serializers.ModelSerializer):
    net_amount = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Recharge
        fields = [
            "id",
            "reference_id",
            "amount",
            "currency",
            "method",
            "fee",
            "net_amount",
            "status",
            "prove_url",
            "description",
            "transaction_hash",
            "metadata",
            "failure_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class RechargeCreateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0.01"))
    method = serializers.ChoiceField(choices=Recharge.METHOD_CHOICES)
    currency = serializers.CharField(max_length=3, required=False, default="USD")
    prove_url = serializers.URLField(required=False, allow_blank=True, default="")
    description = serializers.CharField(required=False, allow_blank=True, default="")
    transaction_hash = serializers.CharField(required=False, allow_blank=True, default="")
    wallet_address = serializers.CharField(required=False, allow_blank=True, default="")


# ---------------- WITHDRAWALS ----------------
class WithdrawalSerializer(serializers.ModelSerializer):
    class Meta:
        model = Withdrawal
        fields = [
            "id",
            "reference_id",
            "payout_wallet",
            "amount",
            "currency",
            "method",
            "status",
            "fee",
            "net_amount",
            "wallet_address",
            "bank_name",
            "account_number",
            "transaction_hash",
            "processed_date",
            "failure_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class WithdrawalCreateSerializer(serializers.Serializer):
    payout_wallet = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0.01"))
    pin = serializers.CharField(write_only=True, style={"input_type": "password"})


# ---------------- ADMIN ----------------
class _UserMixin(serializers.Serializer):
    user_id = serializers.UUIDField(source="user.id", read_only=True)
    user_email = serializers.EmailField(source="user.email", read_only=True)
    user_name = serializers.CharField(source="user.display_name", read_only=True)


class AdminRechargeSerializer(_UserMixin, RechargeSerializer):
    class Meta(RechargeSerializer.Meta):
        fields = ["user_id", "user_email", "user_name", *RechargeSerializer.Meta.fields]
        # status is routed through the lifecycle in the view
        read_only_fields = [
            f for f in fields
            if f not in {"status", "description", "transaction_hash", "failure_reason"}
        ]


class AdminWithdrawalSerializer(_UserMixin, WithdrawalSerializer):
    class Meta(WithdrawalSerializer.Meta):
        fields = ["user_id", "user_email", "user_name", *WithdrawalSerializer.Meta.fields]
        read_only_fields = [
            f for f in fields
            if f not in {"status", "transaction_hash", "failure_reason"}
        ]


class TransactionStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TransactionStatus.choices)
    failure_reason = serializers.CharField(required=False, allow_blank=True, default="")


class BulkStatusSerializer(TransactionStatusSerializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)


class BulkIdsSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
