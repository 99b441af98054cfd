"""
PATH: stores/models/store.py

MERCHANT STORE

Rules:
- A user owns at most one store (OneToOne on owner).
- slug is derived from the name on first save and kept unique.
- status is admin-controlled; only ACTIVE stores are publicly visible.
  Transitions are validated in stores.services.store_lifecycle.
- total_sales / total_revenue / rating are maintained by services, never by clients.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.text import slugify


class Store(models.Model):
    STATUS_PENDING = "pending"
    STATUS_ACTIVE = "active"
    STATUS_SUSPENDED = "suspended"
    STATUS_BLOCKED = "blocked"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_ACTIVE, "Active"),
        (STATUS_SUSPENDED, "Suspended"),
        (STATUS_BLOCKED, "Blocked"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    owner = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="store",
    )

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True, blank=True)
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING
    )

    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=120, blank=True, default="")
    logo_url = models.URLField(max_length=500, blank=True, default="")
    banner_url = models.URLField(max_length=500, blank=True, default="")

    # Contact + location
    address = models.CharField(max_length=255, blank=True, default="")
    city = models.CharField(max_length=120, blank=True, default="")
    state = models.CharField(max_length=120, blank=True, default="")
    country = models.CharField(max_length=120, blank=True, default="")
    postal_code = models.CharField(max_length=20, blank=True, default="")
    phone = models.CharField(max_length=40, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    website_url = models.URLField(max_length=500, blank=True, default="")

    # Merchant identity verification (uploads live elsewhere; we keep URLs)
    id_photo_front_url = models.URLField(max_length=500, blank=True, default="")
    id_photo_back_url = models.URLField(max_length=500, blank=True, default="")

    store_level = models.PositiveSmallIntegerField(default=1)
    is_verified = models.BooleanField(default=False)
    is_active = models.BooleanField(default=False)

    rating = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    total_sales = models.PositiveIntegerField(default=0)
    total_revenue = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"]),
            models.Index(fields=["slug"]),
        ]

    def clean(self):
        if not (self.name or "").strip():
            raise ValidationError({"name": "Store name is required"})
        if self.total_revenue is not None and Decimal(self.total_revenue) < 0:
            raise ValidationError({"total_revenue": "total_revenue cannot be negative"})

    def _unique_slug(self) -> str:
        base = slugify(self.name)[:200] or "store"
        candidate = base
        i = 1
        while Store.objects.filter(slug=candidate).exclude(pk=self.pk).exists():
            i += 1
            candidate = f"{base}-{i}"
        return candidate

    def save(self, *args, **kwargs):
        self.name = (self.name or "").strip()
        if not self.slug:
            self.slug = self._unique_slug()
        # is_active mirrors status so storefront queries stay a single boolean
        self.is_active = self.status == self.STATUS_ACTIVE
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def is_public(self) -> bool:
        return self.status == self.STATUS_ACTIVE

    def __str__(self):
        return f"{self.name} ({self.status})"
