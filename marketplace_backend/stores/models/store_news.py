"""
PATH: stores/models/store_news.py

Platform announcements for sellers ("Store News & Updates").
Written by the back-office; merchants only ever see published items.
"""

import uuid

from django.conf import settings
from django.db import models


class StoreNews(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    title = models.CharField(max_length=255)
    content = models.TextField()
    image_urls = models.JSONField(default=list, blank=True)
    is_published = models.BooleanField(default=False)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="store_news",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "store news"
        indexes = [models.Index(fields=["is_published", "-created_at"])]

    def __str__(self):
        state = "published" if self.is_published else "draft"
        return f"{self.title} ({state})"
