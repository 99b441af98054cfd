# products/services/browsing_history.py

from __future__ import annotations

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from products.models import BrowsingHistory


@transaction.atomic
def record_view(*, user, product) -> BrowsingHistory:
    """Insert the first view, or bump view_count and viewed_at on repeat views."""
    entry, created = BrowsingHistory.objects.select_for_update().get_or_create(
        user=user, product=product
    )
    if not created:
        BrowsingHistory.objects.filter(pk=entry.pk).update(
            view_count=F("view_count") + 1, viewed_at=timezone.now()
        )
        entry.refresh_from_db()
    return entry


def clear_history(*, user) -> int:
    deleted, _ = BrowsingHistory.objects.filter(user=user).delete()
    return deleted
