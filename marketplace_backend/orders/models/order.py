"""
PATH: orders/models/order.py

ORDER (one per store per checkout)

A checkout splits the cart by store. Each group becomes one Order:
- store set             -> merchant order, number "ORD-..."
- store NULL (platform) -> platform order, number "PLT-ORD-..."

Money fields are computed server-side by the checkout orchestrator and never
trusted from the client. Status transitions live in services.order_lifecycle.
"""

import secrets
import string
import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from stores.models import Store

TRACKING_ALPHABET = string.ascii_uppercase + string.digits


def generate_tracking_number(length: int = 12) -> str:
    return "".join(secrets.choice(TRACKING_ALPHABET) for _ in range(length))


class Order(models.Model):
    STATUS_PENDING = "pending"
    STATUS_CONFIRMED = "confirmed"
    STATUS_PROCESSING = "processing"
    STATUS_SHIPPED = "shipped"
    STATUS_DELIVERED = "delivered"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_SHIPPED, "Shipped"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    PAYMENT_PENDING = "pending"
    PAYMENT_CONFIRMED = "confirmed"
    PAYMENT_FAILED = "failed"
    PAYMENT_CANCELLED = "cancelled"

    PAYMENT_STATUS_CHOICES = [
        (PAYMENT_PENDING, "Pending"),
        (PAYMENT_CONFIRMED, "Confirmed"),
        (PAYMENT_FAILED, "Failed"),
        (PAYMENT_CANCELLED, "Cancelled"),
    ]

    PAYMENT_METHOD_WALLET = "wallet"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="orders",
    )
    store = models.ForeignKey(
        Store,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    is_platform_order = models.BooleanField(default=False)

    order_number = models.CharField(max_length=64, unique=True, blank=True)
    tracking_number = models.CharField(max_length=32, unique=True, blank=True)

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING)
    payment_status = models.CharField(
        max_length=16, choices=PAYMENT_STATUS_CHOICES, default=PAYMENT_PENDING
    )
    payment_method = models.CharField(max_length=32, default=PAYMENT_METHOD_WALLET)
    currency = models.CharField(max_length=3, default="USD")

    # Money fields (server authoritative)
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    shipping_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    shipping_address = models.JSONField(default=dict, blank=True)
    billing_address = models.JSONField(default=dict, blank=True)
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    shipped_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"]),
            models.Index(fields=["payment_status"]),
            models.Index(fields=["user", "created_at"]),
            models.Index(fields=["store", "status"]),
        ]

    def save(self, *args, **kwargs):
        if not self.order_number:
            prefix = "PLT-ORD" if self.is_platform_order else "ORD"
            stamp = timezone.now().strftime("%Y%m%d")
            self.order_number = f"{prefix}-{stamp}-{uuid.uuid4().hex[:8].upper()}"

        if not self.tracking_number:
            candidate = generate_tracking_number()
            while Order.objects.filter(tracking_number=candidate).exists():
                candidate = generate_tracking_number()
            self.tracking_number = candidate

        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.order_number} | {self.total_amount} | {self.status}"
