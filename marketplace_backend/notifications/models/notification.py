"""
PATH: notifications/models/notification.py

In-app notification addressed to one user.
Created by other apps through notifications.services.notify().
"""

import uuid

from django.conf import settings
from django.db import models


class Notification(models.Model):
    TYPE_SYSTEM = "system"
    TYPE_ACCOUNT = "account"
    TYPE_TRANSACTION = "transaction"
    TYPE_ORDER = "order"
    TYPE_ALERT = "alert"
    TYPE_MESSAGE = "message"

    TYPE_CHOICES = [
        (TYPE_SYSTEM, "System"),
        (TYPE_ACCOUNT, "Account"),
        (TYPE_TRANSACTION, "Transaction"),
        (TYPE_ORDER, "Order"),
        (TYPE_ALERT, "Alert"),
        (TYPE_MESSAGE, "Message"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )

    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_SYSTEM)
    title = models.CharField(max_length=200)
    message = models.TextField()
    is_read = models.BooleanField(default=False)
    data = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "is_read"]),
            models.Index(fields=["type"]),
        ]

    def __str__(self):
        state = "read" if self.is_read else "unread"
        return f"{self.title} -> {self.user} ({state})"
