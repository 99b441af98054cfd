"""
PATH: products/models/browsing_history.py

One row per (user, product): the last time the user opened the product page
and how many times they did.
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone

from .product import Product


class BrowsingHistory(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="browsing_history",
    )
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="views")

    view_count = models.PositiveIntegerField(default=1)
    viewed_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-viewed_at"]
        verbose_name_plural = "browsing history"
        constraints = [
            models.UniqueConstraint(fields=["user", "product"], name="unique_browsing_history_entry")
        ]
        indexes = [models.Index(fields=["user", "-viewed_at"])]

    def __str__(self):
        return f"{self.user} viewed {self.product_id} x{self.view_count}"
