"""
PATH: wallets/models/balance_entry.py

WALLET LEDGER ENTRY (IMMUTABLE)

Every change to User.wallet_balance writes exactly one BalanceEntry
with the resulting balance_after, so a user's balance history can
always be replayed.
"""

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class BalanceEntry(models.Model):
    DIRECTION_CREDIT = "credit"
    DIRECTION_DEBIT = "debit"

    DIRECTION_CHOICES = [
        (DIRECTION_CREDIT, "Credit"),
        (DIRECTION_DEBIT, "Debit"),
    ]

    REASON_ORDER_PAYMENT = "order_payment"
    REASON_ORDER_INCOME = "order_income"
    REASON_ORDER_REFUND = "order_refund"
    REASON_ORDER_REVERSAL = "order_reversal"
    REASON_RECHARGE = "recharge"
    REASON_WITHDRAWAL = "withdrawal"
    REASON_WITHDRAWAL_REVERSAL = "withdrawal_reversal"
    REASON_ADJUSTMENT = "adjustment"

    REASON_CHOICES = [
        (REASON_ORDER_PAYMENT, "Order payment"),
        (REASON_ORDER_INCOME, "Order income"),
        (REASON_ORDER_REFUND, "Order refund"),
        (REASON_ORDER_REVERSAL, "Order income reversal"),
        (REASON_RECHARGE, "Recharge"),
        (REASON_WITHDRAWAL, "Withdrawal"),
        (REASON_WITHDRAWAL_REVERSAL, "Withdrawal reversal"),
        (REASON_ADJUSTMENT, "Adjustment"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="balance_entries",
    )

    direction = models.CharField(max_length=10, choices=DIRECTION_CHOICES)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    balance_after = models.DecimalField(max_digits=14, decimal_places=2)
    reason = models.CharField(max_length=32, choices=REASON_CHOICES)

    # Free-form pointer to the source row, e.g. "order:ORD-..." / "recharge:<uuid>"
    reference = models.CharField(max_length=120, blank=True, default="")
    memo = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "created_at"]),
            models.Index(fields=["reason"]),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Balance entries are immutable")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Balance entries are immutable")

    def __str__(self):
        sign = "+" if self.direction == self.DIRECTION_CREDIT else "-"
        return f"{self.user} {sign}{self.amount} ({self.reason})"
