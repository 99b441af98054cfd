"""
PATH: orders/models/cart.py

SHOPPING CART

Rules:
- One active cart per user.
- Lines may span several stores (and platform items); checkout splits them.
- Cart is read-only after deactivation (checkout closes it).
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

User = settings.AUTH_USER_MODEL


class Cart(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="carts",
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=models.Q(is_active=True),
                name="one_active_cart_per_user",
            )
        ]

    def clean(self):
        if self.user_id is None:
            raise ValidationError({"user": "user is required"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def item_count(self) -> int:
        return sum(int(i.quantity or 0) for i in self.items.all())

    @property
    def subtotal_amount(self) -> Decimal:
        """Sum of final_price x quantity (display only; checkout recomputes)."""
        total = Decimal("0.00")
        for item in self.items.select_related("product"):
            total += item.line_total
        return total

    def __str__(self):
        state = "ACTIVE" if self.is_active else "CLOSED"
        return f"Cart {self.id} | {self.user} | {state}"
