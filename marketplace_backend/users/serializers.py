from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from permissions.roles import ROLE_CUSTOMER
from users.models import Address

User = get_user_model()

PROFILE_FIELDS = [
    "full_name",
    "username",
    "phone",
    "avatar_url",
    "address",
    "city",
    "state",
    "country",
    "postal_code",
    "preferred_currency",
    "language",
    "date_of_birth",
    "gender",
]


# ---------------- REGISTER ----------------
class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={"input_type": "password"},
    )
    referral_code = serializers.CharField(
        write_only=True,
        required=False,
        allow_blank=True,
        help_text="Username of the referring user (optional).",
    )

    class Meta:
        model = User
        fields = [
            "email",
            "password",
            "full_name",
            "username",
            "phone",
            "referral_code",
        ]
        extra_kwargs = {"username": {"required": False}}

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("An account with this email already exists.")
        return value

    def create(self, validated_data):
        referral_code = (validated_data.pop("referral_code", "") or "").strip()
        referrer = None
        if referral_code:
            referrer = User.objects.filter(username__iexact=referral_code).first()

        # Public signup is always a customer; other roles are granted by admins.
        return User.objects.create_user(
            email=validated_data["email"],
            password=validated_data["password"],
            full_name=validated_data.get("full_name", ""),
            username=validated_data.get("username") or None,
            phone=validated_data.get("phone", ""),
            role=ROLE_CUSTOMER,
            referred_by=referrer,
        )


# ---------------- LOGIN (INPUT ONLY) ----------------
class LoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled in the view.
    """

    email = serializers.CharField(help_text="Email address or username")
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()


# ---------------- USER OUTPUT ----------------
class UserSerializer(serializers.ModelSerializer):
    """
    Safe user representation for frontend consumption.
    The PIN hash never leaves the server, only whether one is set.
    """

    has_withdrawal_pin = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            *PROFILE_FIELDS,
            "role",
            "status",
            "is_verified",
            "wallet_balance",
            "has_withdrawal_pin",
            "created_at",
        ]
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """
    Self-service profile edits.
    role / status / wallet_balance / is_verified are not writable here.
    """

    class Meta:
        model = User
        fields = PROFILE_FIELDS

    def validate_username(self, value):
        value = (value or "").strip() or None
        if value and User.objects.filter(username__iexact=value).exclude(
            pk=self.instance.pk
        ).exists():
            raise serializers.ValidationError("This username is taken.")
        return value


class WithdrawalPinSerializer(serializers.Serializer):
    pin = serializers.RegexField(r"^\d{4,6}$", error_messages={"invalid": "PIN must be 4 to 6 digits."})
    current_pin = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        user = self.context["request"].user
        if user.has_withdrawal_pin and not user.check_withdrawal_pin(
            attrs.get("current_pin", "")
        ):
            raise serializers.ValidationError({"current_pin": "Current PIN is incorrect."})
        return attrs


# ---------------- ADDRESSES ----------------
class AddressSerializer(serializers.ModelSerializer):
    class Meta:
        model = Address
        fields = [
            "id",
            "type",
            "first_name",
            "last_name",
            "company",
            "address_line_1",
            "address_line_2",
            "city",
            "state",
            "postal_code",
            "country",
            "phone",
            "is_default",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


# ---------------- ADMIN ----------------
class AdminUserSerializer(serializers.ModelSerializer):
    """
    Back-office view of a profile.
    order_count / order_total come from queryset annotations.
    """

    order_count = serializers.IntegerField(read_only=True, default=0)
    order_total = serializers.DecimalField(
        max_digits=14, decimal_places=2, read_only=True, default=0
    )
    has_withdrawal_pin = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            *PROFILE_FIELDS,
            "role",
            "status",
            "is_verified",
            "is_active",
            "wallet_balance",
            "has_withdrawal_pin",
            "order_count",
            "order_total",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "wallet_balance",
            "has_withdrawal_pin",
            "order_count",
            "order_total",
            "created_at",
            "updated_at",
        ]
