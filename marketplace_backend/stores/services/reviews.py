from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction
from django.db.models import Avg

from stores.models import Store, StoreReview


@transaction.atomic
def submit_review(*, user, store: Store, rating: int, comment: str = "") -> StoreReview:
    """
    Create or replace the user's review, then refresh store.rating.
    """
    review, _ = StoreReview.objects.update_or_create(
        user=user,
        store=store,
        defaults={"rating": rating, "comment": comment or ""},
    )
    refresh_store_rating(store)
    return review


def refresh_store_rating(store: Store) -> Decimal:
    avg = StoreReview.objects.filter(store=store).aggregate(v=Avg("rating"))["v"]
    rating = Decimal(str(avg or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    Store.objects.filter(pk=store.pk).update(rating=rating)
    store.rating = rating
    return rating
