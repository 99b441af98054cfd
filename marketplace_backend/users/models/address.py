"""
PATH: users/models/address.py

SAVED ADDRESS (shipping / billing address book)

Rule:
- At most ONE default address per user.
  Saving an address with is_default=True clears the flag on the others.
"""

from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models, transaction


class Address(models.Model):
    TYPE_SHIPPING = "shipping"
    TYPE_BILLING = "billing"

    TYPE_CHOICES = [
        (TYPE_SHIPPING, "Shipping"),
        (TYPE_BILLING, "Billing"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="addresses",
    )

    type = models.CharField(max_length=16, choices=TYPE_CHOICES, default=TYPE_SHIPPING)

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    company = models.CharField(max_length=150, blank=True, default="")
    address_line_1 = models.CharField(max_length=255)
    address_line_2 = models.CharField(max_length=255, blank=True, default="")
    city = models.CharField(max_length=120)
    state = models.CharField(max_length=120, blank=True, default="")
    postal_code = models.CharField(max_length=20)
    country = models.CharField(max_length=120)
    phone = models.CharField(max_length=40, blank=True, default="")

    is_default = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-is_default", "-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=models.Q(is_default=True),
                name="one_default_address_per_user",
            )
        ]

    def save(self, *args, **kwargs):
        with transaction.atomic():
            if self.is_default:
                Address.objects.filter(user_id=self.user_id, is_default=True).exclude(
                    pk=self.pk
                ).update(is_default=False)
            super().save(*args, **kwargs)

    def as_snapshot(self) -> dict:
        """Plain dict copied onto orders (addresses may change later)."""
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "company": self.company,
            "address_line_1": self.address_line_1,
            "address_line_2": self.address_line_2,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
            "phone": self.phone,
        }

    def __str__(self):
        return f"{self.first_name} {self.last_name}, {self.city} ({self.type})"
