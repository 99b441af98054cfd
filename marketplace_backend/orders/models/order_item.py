import uuid
from decimal import Decimal

from django.db import models

from products.models import Product

from .order import Order


class OrderItem(models.Model):
    """
    Immutable line snapshot taken at checkout.
    total = price x quantity, where price is the unit price actually charged.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )

    title = models.CharField(max_length=500, blank=True, default="")
    asin = models.CharField(max_length=32, blank=True, default="")
    image_url = models.URLField(max_length=1000, blank=True, default="")

    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=12, decimal_places=2)
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.title or self.asin} x {self.quantity}"
