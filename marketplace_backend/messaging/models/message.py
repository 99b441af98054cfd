"""
PATH: messaging/models/message.py

Direct messages between a customer and a store (its owner).
Every message belongs to a store conversation and may reference one order.
"""

import uuid

from django.conf import settings
from django.db import models

from orders.models import Order
from stores.models import Store


class Message(models.Model):
    ROLE_CUSTOMER = "customer"
    ROLE_MERCHANT = "merchant"

    ROLE_CHOICES = [
        (ROLE_CUSTOMER, "Customer"),
        (ROLE_MERCHANT, "Merchant"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="messages")
    order = models.ForeignKey(
        Order,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="messages",
    )

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_messages",
    )
    sender_role = models.CharField(max_length=16, choices=ROLE_CHOICES)
    receiver_role = models.CharField(max_length=16, choices=ROLE_CHOICES)

    message = models.TextField()
    is_read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["store", "-created_at"]),
            models.Index(fields=["receiver", "is_read"]),
        ]

    def __str__(self):
        return f"{self.sender} -> {self.receiver} ({self.store.name})"
