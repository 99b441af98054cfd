"""
PATH: wallets/models/recharge.py

Wallet top-up request. Created PENDING by the user with a payment proof;
an admin moves it to SUCCESS (balance credited amount - fee) or FAILED/CANCELLED.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

from .transaction import TransactionStatus


class Recharge(models.Model):
    METHOD_USDT_ERC20 = "crypto_usdt_erc20"
    METHOD_USDT_TRC20 = "crypto_usdt_trc20"
    METHOD_BTC = "crypto_btc"
    METHOD_ETH = "crypto_eth"
    METHOD_BANK_TRANSFER = "bank_transfer"

    METHOD_CHOICES = [
        (METHOD_USDT_ERC20, "USDT (ERC20)"),
        (METHOD_USDT_TRC20, "USDT (TRC20)"),
        (METHOD_BTC, "Bitcoin"),
        (METHOD_ETH, "Ethereum"),
        (METHOD_BANK_TRANSFER, "Bank Transfer"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="recharges",
    )

    amount = models.DecimalField(max_digits=14, decimal_places=2)
    currency = models.CharField(max_length=3, default="USD")
    method = models.CharField(max_length=32, choices=METHOD_CHOICES)
    fee = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    status = models.CharField(
        max_length=16, choices=TransactionStatus.choices, default=TransactionStatus.PENDING
    )

    reference_id = models.CharField(max_length=64, unique=True, blank=True)
    prove_url = models.URLField(max_length=1000, blank=True, default="")
    description = models.TextField(blank=True, default="")
    transaction_hash = models.CharField(max_length=255, blank=True, default="")
    metadata = models.JSONField(default=dict, blank=True)
    failure_reason = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"]),
            models.Index(fields=["user", "created_at"]),
        ]

    def save(self, *args, **kwargs):
        if not self.reference_id:
            self.reference_id = f"RCH-{uuid.uuid4().hex[:12].upper()}"
        super().save(*args, **kwargs)

    @property
    def net_amount(self) -> Decimal:
        return Decimal(self.amount) - Decimal(self.fee)

    def __str__(self):
        return f"{self.reference_id} | {self.amount} {self.currency} | {self.status}"
