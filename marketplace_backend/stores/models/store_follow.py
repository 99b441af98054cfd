import uuid

from django.conf import settings
from django.db import models

from .store import Store


class StoreFollow(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    follower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="followed_stores",
    )
    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="followers")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["follower", "store"],
                name="unique_store_follow",
            )
        ]

    def __str__(self):
        return f"{self.follower} follows {self.store.name}"
