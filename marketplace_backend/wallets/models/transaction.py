"""
PATH: wallets/models/transaction.py

Shared status enum for wallet transactions (recharges + withdrawals).
"""

from django.db import models


class TransactionStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    SUCCESS = "success", "Success"
    FAILED = "failed", "Failed"
    CANCELLED = "cancelled", "Cancelled"
