# products/models/product.py

import uuid
from decimal import ROUND_HALF_UP, Decimal

from django.core.exceptions import ValidationError
from django.db import models

from products.services.pricing import parse_discount_percent
from stores.models import Store

TWOPLACES = Decimal("0.01")


class Product(models.Model):
    """
    A sellable catalog item.

    OWNERSHIP:
    - store set   -> merchant product; checkout credits the store owner
    - store NULL  -> platform ("company") catalog item; checkout credits the
                     platform account

    PRICING (marketplace-style):
    - initial_price: list price before discount
    - discount:      marketplace string, e.g. "-15%" (parsed by services.pricing)
    - final_price:   price the buyer pays per unit; derived from initial_price
                     and discount when not supplied
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        Store,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="products",
    )

    title = models.CharField(max_length=500, db_index=True)
    asin = models.CharField(max_length=32, unique=True, null=True, blank=True)
    brand = models.CharField(max_length=200, blank=True, default="")
    description = models.TextField(blank=True, default="")

    initial_price = models.DecimalField(max_digits=12, decimal_places=2)
    final_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    discount = models.CharField(max_length=20, blank=True, default="")
    currency = models.CharField(max_length=3, default="USD")

    categories = models.JSONField(default=list, blank=True)
    image_url = models.URLField(max_length=1000, blank=True, default="")
    images = models.JSONField(default=list, blank=True)

    rating = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    reviews_count = models.PositiveIntegerField(default=0)

    is_available = models.BooleanField(default=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["asin"]),
            models.Index(fields=["title"]),
            models.Index(fields=["store", "is_active"]),
        ]

    def __str__(self):
        return f"{self.title} ({self.asin or self.id})"

    def clean(self):
        if self.initial_price is None or Decimal(self.initial_price) <= 0:
            raise ValidationError({"initial_price": "initial_price must be greater than zero"})

        if self.asin is not None:
            self.asin = self.asin.strip().upper() or None

        if self.final_price is None:
            pct = parse_discount_percent(self.discount)
            price = Decimal(self.initial_price) * (Decimal("100") - pct) / Decimal("100")
            self.final_price = price.quantize(TWOPLACES, rounding=ROUND_HALF_UP)

        if Decimal(self.final_price) < 0:
            raise ValidationError({"final_price": "final_price cannot be negative"})

        if not isinstance(self.categories, list):
            raise ValidationError({"categories": "categories must be a list"})
        if not isinstance(self.images, list):
            raise ValidationError({"images": "images must be a list"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def is_platform_item(self) -> bool:
        return self.store_id is None

    @property
    def is_purchasable(self) -> bool:
        if not (self.is_active and self.is_available):
            return False
        if self.store_id is None:
            return True
        return self.store.status == Store.STATUS_ACTIVE
