"""
PATH: cards/models/card.py

SAVED PAYMENT CARD

- card_number_hash holds the AES ciphertext ("iv_hex:ciphertext_hex"),
  never the plain number. Only last4 is ever exposed.
- CVV is never stored.
- At most one default card per user.
"""

import uuid

from django.conf import settings
from django.db import models


class Card(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cards",
    )

    card_type = models.CharField(max_length=40)
    card_number_last4 = models.CharField(max_length=4)
    card_number_hash = models.TextField()
    cardholder_name = models.CharField(max_length=200)
    expiry_date = models.CharField(max_length=7, help_text="MM/YY")

    billing_address = models.CharField(max_length=255, blank=True, default="")
    city = models.CharField(max_length=120, blank=True, default="")
    state = models.CharField(max_length=120, blank=True, default="")
    zip_code = models.CharField(max_length=20, blank=True, default="")
    country = models.CharField(max_length=120, blank=True, default="")

    is_default = models.BooleanField(default=False)

    added_date = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-is_default", "-added_date"]
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=models.Q(is_default=True),
                name="one_default_card_per_user",
            )
        ]

    @property
    def masked_number(self) -> str:
        return f"**** **** **** {self.card_number_last4}"

    def __str__(self):
        return f"{self.card_type} {self.masked_number} ({self.user})"
