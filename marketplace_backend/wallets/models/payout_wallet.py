"""
PATH: wallets/models/payout_wallet.py

Saved payout destination (crypto address or bank account).

Rules:
- At most one default per user (saving a default clears the others).
- Crypto types need an address; bank_account needs holder + number + bank name.
"""

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models, transaction


class PayoutWallet(models.Model):
    TYPE_USDT_ERC20 = "crypto_usdt_erc20"
    TYPE_USDT_TRC20 = "crypto_usdt_trc20"
    TYPE_BANK_ACCOUNT = "bank_account"

    TYPE_CHOICES = [
        (TYPE_USDT_ERC20, "USDT (ERC20)"),
        (TYPE_USDT_TRC20, "USDT (TRC20)"),
        (TYPE_BANK_ACCOUNT, "Bank account"),
    ]

    ROUTING_CHOICES = [
        ("routing_number", "Routing number"),
        ("swift", "SWIFT"),
        ("bic", "BIC"),
        ("iban", "IBAN"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="payout_wallets",
    )

    name = models.CharField(max_length=120)
    type = models.CharField(max_length=32, choices=TYPE_CHOICES)
    address = models.CharField(max_length=255, blank=True, default="")
    currency = models.CharField(max_length=10, default="USDT")
    is_default = models.BooleanField(default=False)

    # Bank fields (bank_account only)
    account_holder = models.CharField(max_length=200, blank=True, default="")
    account_number = models.CharField(max_length=64, blank=True, default="")
    bank_name = models.CharField(max_length=200, blank=True, default="")
    routing_number = models.CharField(max_length=64, blank=True, default="")
    routing_number_type = models.CharField(
        max_length=20, choices=ROUTING_CHOICES, blank=True, default=""
    )
    bank_address = models.CharField(max_length=255, blank=True, default="")
    country = models.CharField(max_length=120, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-is_default", "-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=models.Q(is_default=True),
                name="one_default_payout_wallet_per_user",
            )
        ]

    @property
    def is_bank(self) -> bool:
        return self.type == self.TYPE_BANK_ACCOUNT

    def clean(self):
        if self.is_bank:
            missing = [
                f for f in ("account_holder", "account_number", "bank_name")
                if not (getattr(self, f) or "").strip()
            ]
            if missing:
                raise ValidationError({f: "Required for bank accounts" for f in missing})
        elif not (self.address or "").strip():
            raise ValidationError({"address": "Wallet address is required"})

    def save(self, *args, **kwargs):
        self.full_clean()
        with transaction.atomic():
            if self.is_default:
                PayoutWallet.objects.filter(user_id=self.user_id, is_default=True).exclude(
                    pk=self.pk
                ).update(is_default=False)
            super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} ({self.type})"
