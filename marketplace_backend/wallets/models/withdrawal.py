"""
PATH: wallets/models/withdrawal.py

Payout request. The amount is debited from the wallet at creation (held);
FAILED/CANCELLED refunds it, SUCCESS stamps processed_date.
Destination fields are copied from the PayoutWallet so later edits to the
wallet don't rewrite history.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

from .payout_wallet import PayoutWallet
from .transaction import TransactionStatus


class Withdrawal(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="withdrawals",
    )
    payout_wallet = models.ForeignKey(
        PayoutWallet,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="withdrawals",
    )

    amount = models.DecimalField(max_digits=14, decimal_places=2)
    currency = models.CharField(max_length=10, default="USD")
    method = models.CharField(max_length=32, choices=PayoutWallet.TYPE_CHOICES)
    status = models.CharField(
        max_length=16, choices=TransactionStatus.choices, default=TransactionStatus.PENDING
    )
    fee = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    net_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    reference_id = models.CharField(max_length=64, unique=True, blank=True)

    # Destination snapshot
    wallet_address = models.CharField(max_length=255, blank=True, default="")
    bank_name = models.CharField(max_length=200, blank=True, default="")
    account_number = models.CharField(max_length=64, blank=True, default="")

    transaction_hash = models.CharField(max_length=255, blank=True, default="")
    processed_date = models.DateTimeField(null=True, blank=True)
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
            self.reference_id = f"WDR-{uuid.uuid4().hex[:12].upper()}"
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.reference_id} | {self.amount} {self.currency} | {self.status}"
