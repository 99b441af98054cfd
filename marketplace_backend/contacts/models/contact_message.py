"""
PATH: contacts/models/contact_message.py

Inbound "contact us" messages and their back-office triage state.
Moving to resolved stamps resolved_at / resolved_by; leaving it clears them.
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class ContactMessage(models.Model):
    STATUS_NEW = "new"
    STATUS_IN_PROGRESS = "in_progress"
    STATUS_RESOLVED = "resolved"
    STATUS_SPAM = "spam"

    STATUS_CHOICES = [
        (STATUS_NEW, "New"),
        (STATUS_IN_PROGRESS, "In progress"),
        (STATUS_RESOLVED, "Resolved"),
        (STATUS_SPAM, "Spam"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    email = models.EmailField()
    phone = models.CharField(max_length=40, blank=True, default="")
    company = models.CharField(max_length=200, blank=True, default="")
    subject = models.CharField(max_length=255)
    message = models.TextField()

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_NEW)
    notes = models.TextField(blank=True, default="")

    resolved_at = models.DateTimeField(null=True, blank=True)
    resolved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="resolved_contact_messages",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["status"])]

    def apply_status(self, status: str, *, actor=None) -> None:
        self.status = status
        if status == self.STATUS_RESOLVED:
            if self.resolved_at is None:
                self.resolved_at = timezone.now()
                self.resolved_by = actor
        else:
            self.resolved_at = None
            self.resolved_by = None

    def __str__(self):
        return f"{self.subject} <{self.email}> [{self.status}]"
