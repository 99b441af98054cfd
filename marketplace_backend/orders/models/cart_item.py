"""
PATH: orders/models/cart_item.py

One product line in a cart. Prices are NOT stored here: the product's
current price is authoritative until checkout snapshots it onto OrderItem.
"""

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from products.models import Product

from .cart import Cart


class CartItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="cart_items")
    quantity = models.PositiveIntegerField(default=1)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(fields=["cart", "product"], name="unique_product_per_cart"),
        ]

    def clean(self):
        if self.quantity is None or int(self.quantity) < 1:
            raise ValidationError({"quantity": "quantity must be at least 1"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def unit_price(self) -> Decimal:
        price = self.product.final_price
        if price is None:
            price = self.product.initial_price
        return Decimal(str(price))

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * int(self.quantity)

    def __str__(self):
        return f"{self.product.title} x {self.quantity}"
